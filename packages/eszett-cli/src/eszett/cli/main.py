import typer

from eszett.common import bus, catalog
from .factories import configure_logging
from .rendering import CliRenderer

from .commands.transform import transform_command, scope_name_command

app = typer.Typer(
    name="eszett",
    help=catalog.get("cli.app.description"),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=catalog.get("cli.option.verbose.help")
    ),
):
    cli_renderer = CliRenderer(verbose=verbose)
    bus.set_renderer(cli_renderer)
    configure_logging(verbose)


app.command(name="transform", help=catalog.get("cli.command.transform.help"))(
    transform_command
)
app.command(name="scope-name", help=catalog.get("cli.command.scope_name.help"))(
    scope_name_command
)


if __name__ == "__main__":
    app()
