import typer
from eszett.common.messaging import protocols

LEVEL_COLORS = {
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
    "debug": typer.colors.BRIGHT_BLACK,
}


class CliRenderer(protocols.Renderer):
    """Writes bus messages to stderr; stdout is reserved for transformed trees."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str):
        if level == "debug" and not self.verbose:
            return
        typer.secho(message, fg=LEVEL_COLORS.get(level), err=True)
