"""Threefish, Skein, JH, BLAKE, Groestl and ChaCha in pure Python."""

__version__ = "0.1.0"