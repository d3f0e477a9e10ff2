from typing import Protocol


class Renderer(Protocol):
    """Presents an already formatted bus message to the user."""

    def render(self, message: str, level: str) -> None:
        """`level` is one of "debug", "info", "success", "warning", "error"."""
        ...
