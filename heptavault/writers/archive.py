"""
Archive and directory writers for exported artifacts.
"""

import logging
import zipfile
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import List, Union

from ..models import ExportArtifact
from .base import BaseWriter


def is_contained_name(filename: str) -> bool:
    """
    Whether `filename` stays inside the folder it is written to.

    Absolute paths, drive letters and ".." segments are rejected for both
    path flavours, since archive names end up on whatever system unpacks them.
    """
    if not filename:
        return False
    for flavour in (PurePosixPath, PureWindowsPath):
        path = flavour(filename)
        if path.is_absolute() or path.drive or path.root or ".." in path.parts:
            return False
    return True


class ZipArchiveWriter(BaseWriter):
    """Writes an artifact set into one ZIP archive (e.g. Cards.zip)."""

    def write(self, artifacts: List[ExportArtifact], target: Union[str, Path]) -> Path:
        archive_path = Path(target)
        archive_path.parent.mkdir(parents=True, exist_ok=True)

        written = 0
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for artifact in artifacts:
                if not is_contained_name(artifact.filename):
                    logging.warning(f"Skipping '{artifact.filename}': name points outside the archive")
                    continue
                archive.writestr(artifact.filename, artifact.content.encode("utf-8"))
                written += 1

        logging.info(f"Wrote {written} files to {archive_path}")
        return archive_path


class DirectoryWriter(BaseWriter):
    """Writes an artifact set as plain files inside a directory."""

    def write(self, artifacts: List[ExportArtifact], target: Union[str, Path]) -> Path:
        directory = Path(target)
        directory.mkdir(parents=True, exist_ok=True)
        root = directory.resolve()

        written = 0
        for artifact in artifacts:
            file_path = (directory / artifact.filename).resolve()
            if not is_contained_name(artifact.filename) or root not in file_path.parents:
                logging.warning(f"Skipping '{artifact.filename}': path points outside {directory}")
                continue

            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(artifact.content)
            written += 1

        logging.info(f"Wrote {written} files to {directory}")
        return directory


def get_writer(output_format: str) -> BaseWriter:
    """
    Return the writer for an output format.

    Args:
        output_format: "zip" or "directory"

    Raises:
        ValueError: For an unknown format
    """
    if output_format == "zip":
        return ZipArchiveWriter()
    if output_format == "directory":
        return DirectoryWriter()
    raise ValueError(f"Unknown output format: {output_format}")
