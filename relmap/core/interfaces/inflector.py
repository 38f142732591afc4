"""
Inflection interface used by the naming conventions.
"""

from abc import ABC, abstractmethod


class IInflector(ABC):
    """Pure string transforms for English word forms."""

    @abstractmethod
    def pluralize(self, word: str) -> str:
        """Return the plural form of ``word``, preserving its casing style."""
        pass
