"""Shared utility modules for mdppet."""

from .file_loader import FileData, FileInfo, FileLoader

__all__ = [
    "FileLoader",
    "FileInfo",
    "FileData",
]
