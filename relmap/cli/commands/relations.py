"""
Native Click implementation of the relations command.

Usage: relmap relations TARGET [--package PKG] [--json]
"""

import json

import click

from ...core.exceptions import RelationDeclarationError
from ...core.models.relations import RelationMapping
from ...model import RecordKind
from ..context import RelmapContext


def format_graph(kind: type[RecordKind], graph: dict[str, RelationMapping]) -> list[str]:
    """Human-readable lines describing a relation graph."""
    lines = [f"{kind.__name__} (table: {kind.get_table_name()}, id: {kind.get_id_column()})"]
    if not graph:
        lines.append("  (no relations)")
        return lines

    for name, mapping in graph.items():
        suffix = " [filtered]" if mapping.filter is not None else ""
        lines.append(f"  {name}: {mapping.kind.value} -> {mapping.target.__name__}{suffix}")
        lines.append(f"    from: {mapping.join.from_}")
        lines.append(f"    to:   {mapping.join.to}")
        through = mapping.join.through
        if through is not None:
            lines.append(f"    through: {through.table} ({through.from_} -> {through.to})")
            if through.extra:
                lines.append(f"    extra: {', '.join(through.extra)}")
    return lines


@click.command("relations")
@click.argument("target")
@click.option(
    "--package",
    "models_package",
    default=None,
    help="Package holding record kinds (default: conventions.models_package).",
)
@click.option("--json", "as_json", is_flag=True, help="Output the graph as JSON.")
@click.pass_obj
def relations(ctx: RelmapContext, target: str, models_package: str | None, as_json: bool) -> None:
    """Show the resolved relation graph of a record kind.

    \b
    TARGET is resolved like a relation target:
        ./models/person.py          a file path
        ./models/person.py:Person   a file path and class name
        Person                      a module in the models package
    """
    try:
        kind = ctx.resolver(models_package).resolve(target)
        graph = dict(ctx.relation_store(models_package).get_relation_mappings(kind))
    except RelationDeclarationError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        payload = {
            "kind": kind.__name__,
            "table": kind.get_table_name(),
            "id_column": kind.get_id_column(),
            "relations": [mapping.describe() for mapping in graph.values()],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    for line in format_graph(kind, graph):
        click.echo(line)
