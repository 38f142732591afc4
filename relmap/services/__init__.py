"""
Default implementations of the collaborator interfaces.
"""

from .inflector import InflectionInflector
from .loader import ImportlibModuleLoader
from .logging import NullLogger, RelmapLogger

__all__ = [
    "ImportlibModuleLoader",
    "InflectionInflector",
    "NullLogger",
    "RelmapLogger",
]
