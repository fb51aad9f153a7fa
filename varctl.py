from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.markup import escape
from rich import box

from varstore.components.errors import StorageError, VarstoreError
from varstore.components.resolver import VariableResolver

# create console for rich output
console = Console()

# create the main cli application object.
app = typer.Typer(
    name="varctl",
    help="read and persist configuration variables.",
    add_completion=False,
)

VALUE_TYPES = ("string", "int", "bool")

def get_resolver(ctx: typer.Context) -> VariableResolver:
    return VariableResolver.open(ctx.obj.get("path") if ctx.obj else None)

def format_value(value) -> str:
    # bools print the same way they are parsed
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

@app.command()
def get(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="variable name"),
    value_type: str = typer.Option("string", "--type", "-t", help="string, int or bool"),
    optional: bool = typer.Option(False, "--optional", help="print nothing instead of failing when unset"),
):
    """resolve a variable, saved value first, then the environment."""
    if value_type not in VALUE_TYPES:
        console.print(f" error: unknown type '{value_type}', use one of {', '.join(VALUE_TYPES)}", style="red")
        raise typer.Exit(2)

    resolver = get_resolver(ctx)
    getter = {
        "string": resolver.get_string,
        "int": resolver.get_int,
        "bool": resolver.get_bool,
    }[value_type]

    try:
        value = getter(name, required=not optional)
    except VarstoreError as e:
        console.print(f" error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    if value is not None:
        typer.echo(format_value(value))

@app.command("set")
def set_variable(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="variable name"),
    value: str = typer.Argument(..., help="value to save"),
):
    """save a variable to the document."""
    try:
        get_resolver(ctx).save_variable(name, value)
    except StorageError as e:
        console.print(f" error: {e}", style="red", markup=False)
        raise typer.Exit(1)
    console.print(f" saved [bold]{escape(name)}[/bold]", style="green")

@app.command("import-env")
def import_env(ctx: typer.Context):
    """copy the current environment into the document."""
    try:
        count = get_resolver(ctx).load_from_environment()
    except StorageError as e:
        console.print(f" error: {e}", style="red", markup=False)
        raise typer.Exit(1)
    console.print(f" imported {count} variables", style="green")

@app.command()
def show(ctx: typer.Context):
    """list saved variables."""
    resolver = get_resolver(ctx)
    try:
        variables = resolver.saved_variables()
    except StorageError as e:
        console.print(f" error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    if not variables:
        console.print(" no saved variables.", style="dim")
        return

    table = Table(title=resolver.store.path, box=box.ROUNDED)
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("value", overflow="fold")
    for name in sorted(variables):
        table.add_row(Text(name), Text(variables[name]))
    console.print(table)

@app.callback()
def main(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help="variable document (default from VARSTORE_PATH)"),
):
    """
    varctl main entry point.

    every command works on one json document; saved values there
    take precedence over the process environment.
    """
    ctx.obj = {"path": path}

if __name__ == "__main__":
    app()
