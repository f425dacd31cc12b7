import click
from rich.console import Console
from rich.table import Table

from ...domain.catalog import get_catalog

console = Console()


@click.command()
def list_classes_command() -> None:
    table = Table(title="GeoPackage Conformance Classes")
    table.add_column("Name", style="cyan")
    table.add_column("Gated", justify="center")
    table.add_column("Requirements", justify="right")
    table.add_column("Description")
    for conformance_class in get_catalog():
        table.add_row(
            conformance_class.name,
            "yes" if conformance_class.gated else "no",
            str(len(conformance_class.requirements)),
            conformance_class.description,
        )
    console.print(table)
