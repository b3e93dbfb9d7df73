"""
Base writer interface for Heptavault.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from ..models import ExportArtifact


class BaseWriter(ABC):
    """
    Abstract base class for artifact writers.

    A writer persists one artifact set (all cards, or all canvases) under a
    single target path.
    """

    @abstractmethod
    def write(self, artifacts: List[ExportArtifact], target: Union[str, Path]) -> Path:
        """
        Persist the artifacts.

        Args:
            artifacts: Named text outputs
            target: Archive file or directory to write to

        Returns:
            The path that was written
        """
        pass
