"""
Tests for the relmap CLI commands.
"""

import json
import uuid

import pytest
from click.testing import CliRunner

from relmap.cli import __version__, cli

PERSON = """
from relmap import RecordKind


class Person(RecordKind):
    @classmethod
    def declare_relations(cls, rel):
        rel.has_many("./kinds/pet.py")
        rel.has_many_through("./kinds/toy.py", through={"extra": "since"})
"""

PET = """
from relmap import RecordKind


class Pet(RecordKind):
    pass
"""

OWNER = """
from relmap import RecordKind


class Person(RecordKind):
    @classmethod
    def declare_relations(cls, rel):
        rel.has_many("Pet")
"""

TOY = """
from relmap import RecordKind


class Toy(RecordKind):
    table_name = "toys"
"""

BROKEN = """
from relmap import RecordKind


class Stray(RecordKind):
    @classmethod
    def declare_relations(cls, rel):
        rel.belongs_to("./kinds/nowhere.py")
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def kinds(tmp_path, monkeypatch):
    """Record kind modules under ./kinds, with tmp_path importable."""
    directory = tmp_path / "kinds"
    directory.mkdir()
    (directory / "person.py").write_text(PERSON)
    (directory / "pet.py").write_text(PET)
    (directory / "toy.py").write_text(TOY)
    (directory / "stray.py").write_text(BROKEN)
    monkeypatch.syspath_prepend(str(tmp_path))
    return directory


class TestGroup:
    """Top-level group behavior."""

    def test_help_without_command(self, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "relations" in result.output
        assert "config" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestRelationsCommand:
    """relmap relations TARGET."""

    def test_text_output(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/person.py"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "Person (table: Person, id: id)"
        assert "  pets: has_many -> Pet" in lines
        assert "    from: Pet.personId" in lines
        assert "    to:   Person.id" in lines
        assert "  toys: many_to_many -> Toy" in lines
        assert "    through: Person_Toy (Person_Toy.personId -> Person_Toy.toyId)" in lines
        assert "    extra: since" in lines

    def test_json_output(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/person.py", "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["kind"] == "Person"
        assert payload["table"] == "Person"
        assert [r["name"] for r in payload["relations"]] == ["pets", "toys"]
        toys = payload["relations"][1]
        assert toys["join"]["to"] == "toys.id"
        assert toys["join"]["through"]["extra"] == ["since"]

    def test_kind_without_relations(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/pet.py"])

        assert result.exit_code == 0
        assert "(no relations)" in result.output

    def test_explicit_attribute(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/toy.py:Toy"])

        assert result.exit_code == 0
        assert result.output.startswith("Toy (table: toys, id: id)")

    def test_unresolvable_target(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/ghost.py"])

        assert result.exit_code == 1
        assert "Cannot load record kind" in result.output

    def test_declaration_error(self, runner, kinds):
        result = runner.invoke(cli, ["relations", "./kinds/stray.py"])

        assert result.exit_code == 1
        assert "nowhere.py" in result.output

    def test_package_option(self, runner, tmp_path, monkeypatch):
        package = f"shop_{uuid.uuid4().hex[:8]}"
        (tmp_path / package).mkdir()
        (tmp_path / package / "__init__.py").write_text("")
        (tmp_path / package / "Pet.py").write_text(PET)
        monkeypatch.syspath_prepend(str(tmp_path))

        result = runner.invoke(cli, ["relations", "Pet", "--package", package])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Pet (table: Pet")

    def test_package_option_resolves_relation_targets(self, runner, tmp_path, monkeypatch):
        package = f"shop_{uuid.uuid4().hex[:8]}"
        (tmp_path / package).mkdir()
        (tmp_path / package / "__init__.py").write_text("")
        (tmp_path / package / "Person.py").write_text(OWNER)
        (tmp_path / package / "Pet.py").write_text(PET)
        monkeypatch.syspath_prepend(str(tmp_path))

        result = runner.invoke(cli, ["relations", "Person", "--package", package])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "  pets: has_many -> Pet" in lines
        assert "    from: Pet.personId" in lines

    def test_configured_models_package(self, runner, tmp_path, monkeypatch):
        package = f"shop_{uuid.uuid4().hex[:8]}"
        (tmp_path / package).mkdir()
        (tmp_path / package / "__init__.py").write_text("")
        (tmp_path / package / "Pet.py").write_text(PET)
        (tmp_path / ".relmap").mkdir()
        (tmp_path / ".relmap" / "config.toml").write_text(
            f'[conventions]\nmodels_package = "{package}"\nid_column = "key"\n'
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        result = runner.invoke(cli, ["relations", "Pet"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Pet (table: Pet, id: key)")


class TestConfigCommand:
    """relmap config list|get."""

    def test_list_defaults(self, runner):
        result = runner.invoke(cli, ["config", "list"])

        assert result.exit_code == 0
        assert "  conventions.id_column = id" in result.output
        assert "  logging.level = warning" in result.output
        assert "Config file" not in result.output

    def test_list_shows_config_file(self, runner, tmp_path):
        (tmp_path / ".relmap").mkdir()
        (tmp_path / ".relmap" / "config.toml").write_text('[conventions]\nid_column = "key"\n')

        result = runner.invoke(cli, ["config", "list"])

        assert result.exit_code == 0
        assert "Config file:" in result.output
        assert "  conventions.id_column = key" in result.output

    def test_list_reports_malformed_file(self, runner, tmp_path):
        (tmp_path / ".relmap").mkdir()
        (tmp_path / ".relmap" / "config.toml").write_text("[conventions")

        result = runner.invoke(cli, ["config", "list"])

        assert result.exit_code == 0
        assert "Warning: Failed to parse config file" in result.output

    def test_get(self, runner):
        result = runner.invoke(cli, ["config", "get", "conventions.models_package"])

        assert result.exit_code == 0
        assert result.output.strip() == "conventions.models_package: models"

    def test_get_from_environment(self, runner, monkeypatch):
        monkeypatch.setenv("RELMAP_CONVENTIONS__ID_COLUMN", "pk")

        result = runner.invoke(cli, ["config", "get", "conventions.id_column"])

        assert result.output.strip() == "conventions.id_column: pk"

    def test_get_unknown_key(self, runner):
        result = runner.invoke(cli, ["config", "get", "conventions.flavor"])

        assert result.exit_code == 0
        assert "(not set)" in result.output
