"""Ports - interfaces/protocols for external dependencies."""

from .diary_storage import DiaryStorage

__all__ = [
    "DiaryStorage",
]
