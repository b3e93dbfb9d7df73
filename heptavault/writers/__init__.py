"""Writers that persist exported artifacts."""

from .base import BaseWriter
from .archive import DirectoryWriter, ZipArchiveWriter, get_writer

__all__ = ["BaseWriter", "DirectoryWriter", "ZipArchiveWriter", "get_writer"]
