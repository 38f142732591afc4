"""
Interfaces for the collaborators relmap consumes.
"""

from .inflector import IInflector
from .loader import IModuleLoader
from .logger import ILogger

__all__ = [
    "IInflector",
    "ILogger",
    "IModuleLoader",
]
