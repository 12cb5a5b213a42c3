"""Adapters - I/O implementations of ports."""

from .file_storage import DecodeFailure, FileDiaryStorage, WriteFailure

__all__ = [
    "FileDiaryStorage",
    "DecodeFailure",
    "WriteFailure",
]
