"""
Base importer interface for Heptavault.

This module defines the abstract interface that all dataset importers must implement.
"""

from abc import ABC, abstractmethod

from ..models import HeptabaseExport


class BaseImporter(ABC):
    """
    Abstract base class for all dataset importers.

    Each importer produces one validated HeptabaseExport for an export run.
    """

    @abstractmethod
    def load(self) -> HeptabaseExport:
        """
        Load and validate the dataset.

        Returns:
            The HeptabaseExport to convert

        Raises:
            InvalidExportError: If the dataset cannot be used at all
        """
        pass
