"""
Module loading interface.

The record kind resolver never imports code itself; it asks an
IModuleLoader, so tests and embedding applications can substitute their
own lookup mechanism.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from types import ModuleType


class IModuleLoader(ABC):
    """Loads the module that defines a record kind."""

    @abstractmethod
    def load_module(self, name: str) -> ModuleType:
        """
        Import a module by dotted name.

        Raises:
            ImportError: If the module cannot be found or fails to import
        """
        pass

    @abstractmethod
    def load_path(self, path: Path) -> ModuleType:
        """
        Load a module from a filesystem path.

        Relative paths are resolved against the current working directory.

        Raises:
            FileNotFoundError: If no module exists at the path
            ImportError: If the module fails to import
        """
        pass
