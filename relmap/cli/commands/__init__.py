"""
Click commands registered on the relmap group.
"""

from .config import config
from .relations import relations

COMMANDS = [config, relations]

__all__ = ["COMMANDS", "config", "relations"]
