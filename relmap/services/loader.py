"""
importlib-backed module loader.

Modules loaded from a file path are registered in sys.modules under a name
derived from the absolute path, so resolving the same path twice yields the
same module object and therefore the same record kind class.
"""

import hashlib
import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from ..core.interfaces.loader import IModuleLoader


class ImportlibModuleLoader(IModuleLoader):
    """Load record kind modules with importlib."""

    MODULE_PREFIX = "relmap_models_"

    def load_module(self, name: str) -> ModuleType:
        return importlib.import_module(name)

    def load_path(self, path: Path) -> ModuleType:
        file_path = self._locate(Path(path))
        module_name = self.module_name_for(file_path)

        existing = sys.modules.get(module_name)
        if existing is not None:
            return existing

        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {file_path}", path=str(file_path))

        module = importlib.util.module_from_spec(spec)
        # Registered before execution so the module can refer to itself
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module

    @classmethod
    def module_name_for(cls, file_path: Path) -> str:
        """Stable sys.modules key for a file."""
        digest = hashlib.sha256(str(file_path).encode("utf-8")).hexdigest()[:12]
        stem = file_path.parent.name if file_path.name == "__init__.py" else file_path.stem
        return f"{cls.MODULE_PREFIX}{digest}_{stem}"

    @staticmethod
    def _locate(path: Path) -> Path:
        """Resolve a path the way an import of that location would."""
        if not path.is_absolute():
            path = Path.cwd() / path
        path = path.resolve()

        if path.is_dir():
            path = path / "__init__.py"
        elif path.suffix != ".py" and not path.exists():
            path = path.with_name(path.name + ".py")

        if not path.is_file():
            raise FileNotFoundError(f"No record kind module at {path}")
        return path
