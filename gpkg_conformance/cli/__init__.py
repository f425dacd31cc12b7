import click

from .commands.classes import list_classes_command
from .commands.validate import validate_command


@click.group()
def app() -> None:
    pass


app.add_command(validate_command, name="validate")
app.add_command(list_classes_command, name="classes")
__all__ = ["app"]
