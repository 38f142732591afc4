"""
Unit tests for record kind resolution.

Module files are written to the per-test temporary directory; package
names are randomized because imported packages stay in sys.modules for
the rest of the session.
"""

import types
import uuid
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from relmap.core.exceptions import UnresolvedRecordKindError
from relmap.core.interfaces.loader import IModuleLoader
from relmap.model import RecordKind
from relmap.resolution import RecordKindResolver, split_identifier

SINGLE_KIND = """
from relmap import RecordKind


class Pet(RecordKind):
    pass
"""

TWO_KINDS = """
from relmap import RecordKind


class Toy(RecordKind):
    pass


class Ball(RecordKind):
    pass
"""


def write_module(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


@pytest.fixture
def models_package(tmp_path, monkeypatch):
    """A fresh, importable models package in tmp_path."""
    name = f"models_{uuid.uuid4().hex[:8]}"
    package_dir = tmp_path / name
    write_module(package_dir / "__init__.py", "")
    monkeypatch.syspath_prepend(str(tmp_path))
    return name, package_dir


class TestResolveClasses:
    """Targets given as classes."""

    def test_record_kind_returned_unchanged(self, resolver):
        class Person(RecordKind):
            pass

        assert resolver.resolve(Person) is Person

    def test_plain_class_rejected(self, resolver):
        class NotAKind:
            pass

        with pytest.raises(UnresolvedRecordKindError, match="not a record kind"):
            resolver.resolve(NotAKind)

    @pytest.mark.parametrize("target", ["", "   ", None, 42])
    def test_invalid_targets_rejected(self, resolver, target):
        with pytest.raises(UnresolvedRecordKindError):
            resolver.resolve(target)

    def test_owner_included_in_error_context(self, resolver):
        class Person(RecordKind):
            pass

        with pytest.raises(UnresolvedRecordKindError) as exc_info:
            resolver.resolve("", owner=Person)

        assert exc_info.value.context["owner"] == "Person"
        assert "owner='Person'" in str(exc_info.value)


class TestResolvePaths:
    """Targets given as filesystem paths."""

    def test_relative_path(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "pet.py", SINGLE_KIND)

        kind = resolver.resolve("./kinds/pet.py")

        assert kind.__name__ == "Pet"
        assert issubclass(kind, RecordKind)

    def test_same_path_resolves_to_same_class(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "pet.py", SINGLE_KIND)

        first = resolver.resolve("./kinds/pet.py")
        second = RecordKindResolver().resolve(str(tmp_path / "kinds" / "pet.py"))

        assert first is second

    def test_suffix_is_optional(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "pet.py", SINGLE_KIND)

        assert resolver.resolve("./kinds/pet").__name__ == "Pet"

    def test_absolute_path(self, resolver, tmp_path):
        path = write_module(tmp_path / "elsewhere" / "pet.py", SINGLE_KIND)

        assert resolver.resolve(str(path)).__name__ == "Pet"

    def test_explicit_attribute(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "toys.py", TWO_KINDS)

        assert resolver.resolve("./kinds/toys.py:Ball").__name__ == "Ball"

    def test_ambiguous_module_rejected(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "toys.py", TWO_KINDS)

        with pytest.raises(UnresolvedRecordKindError, match="No record kind found"):
            resolver.resolve("./kinds/toys.py")

    def test_attribute_that_is_not_a_kind_rejected(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "pet.py", SINGLE_KIND + "\nOTHER = 1\n")

        with pytest.raises(UnresolvedRecordKindError):
            resolver.resolve("./kinds/pet.py:OTHER")

    def test_missing_file(self, resolver):
        with pytest.raises(UnresolvedRecordKindError) as exc_info:
            resolver.resolve("./nowhere/ghost.py")

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.recoverable is True

    def test_imported_kinds_are_not_candidates(self, resolver, tmp_path):
        write_module(tmp_path / "kinds" / "helpers.py", "from relmap import RecordKind\n")

        with pytest.raises(UnresolvedRecordKindError):
            resolver.resolve("./kinds/helpers.py")


class TestResolveBareNames:
    """Targets given as names in the models package."""

    def test_bare_name(self, models_package):
        name, package_dir = models_package
        write_module(package_dir / "Pet.py", SINGLE_KIND)

        kind = RecordKindResolver(models_package=name).resolve("Pet")

        assert kind.__name__ == "Pet"
        assert kind.__module__ == f"{name}.Pet"

    def test_bare_name_with_attribute(self, models_package):
        name, package_dir = models_package
        write_module(package_dir / "toys.py", TWO_KINDS)

        kind = RecordKindResolver(models_package=name).resolve("toys:Toy")

        assert kind.__name__ == "Toy"

    def test_missing_module(self, models_package):
        name, _ = models_package

        with pytest.raises(UnresolvedRecordKindError) as exc_info:
            RecordKindResolver(models_package=name).resolve("Ghost")

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_uses_injected_loader(self):
        class Shelter(RecordKind):
            pass

        module = types.ModuleType("app_models.Shelter")
        module.Shelter = Shelter
        loader = MagicMock(spec=IModuleLoader)
        loader.load_module.return_value = module

        kind = RecordKindResolver(loader=loader, models_package="app_models").resolve("Shelter")

        assert kind is Shelter
        loader.load_module.assert_called_once_with("app_models.Shelter")
        loader.load_path.assert_not_called()

    def test_loader_import_error_wrapped(self):
        loader = MagicMock(spec=IModuleLoader)
        loader.load_module.side_effect = ImportError("boom")

        with pytest.raises(UnresolvedRecordKindError, match="Cannot load record kind"):
            RecordKindResolver(loader=loader).resolve("Shelter")


class TestSplitIdentifier:
    """Tests for split_identifier."""

    def test_with_attribute(self):
        assert split_identifier("./models/person.py:Person") == ("./models/person.py", "Person")

    def test_without_attribute(self):
        assert split_identifier("Person") == ("Person", None)

    def test_invalid_attribute_kept_in_location(self):
        assert split_identifier("./odd:name.py") == ("./odd:name.py", None)
