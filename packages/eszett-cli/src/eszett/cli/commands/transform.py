import json
from pathlib import Path
from typing import List, Optional

import typer

from eszett.common import bus, catalog
from eszett.common.adapters import JsonAdapter
from eszett.config import EszettConfig
from eszett.spec import Node
from eszett.transform import MalformedTreeError, file_identity, format_scope_name
from eszett.cli.factories import make_config, make_transformer


def _logical_filename(
    input_path: Path, program: Node, explicit: Optional[str], config: EszettConfig
) -> Path:
    if explicit:
        filename = Path(explicit)
    else:
        loc = program.get("loc") if isinstance(program, dict) else None
        source = loc.get("source") if isinstance(loc, dict) else None
        if source:
            filename = Path(source)
        elif input_path.suffix == ".json":
            filename = input_path.with_suffix("")
        else:
            filename = input_path

    # Relative names are interpreted against the working directory so that
    # the identity can be made relative to the project root.
    if config.root is not None and config.relative_paths and not filename.is_absolute():
        filename = Path.cwd() / filename
    return filename


def transform_command(
    inputs: List[Path] = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    filename: Optional[str] = typer.Option(
        None, "--filename", help=catalog.get("cli.option.filename.help")
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=catalog.get("cli.option.output.help")
    ),
    in_place: bool = typer.Option(
        False, "--in-place", help=catalog.get("cli.option.in_place.help")
    ),
    nested_scopes: bool = typer.Option(
        False, "--nested-scopes", help=catalog.get("cli.option.nested_scopes.help")
    ),
):
    if output is not None and (len(inputs) > 1 or in_place):
        bus.error("error.output_conflict")
        raise typer.Exit(code=1)
    if filename is not None and len(inputs) > 1:
        bus.error("error.filename_conflict")
        raise typer.Exit(code=1)
    if len(inputs) > 1 and not in_place:
        in_place = True

    config = make_config(nested_scopes=nested_scopes)
    transformer = make_transformer(config)
    adapter = JsonAdapter()

    for input_path in inputs:
        try:
            program = adapter.load(input_path)
        except json.JSONDecodeError as e:
            bus.error("error.invalid_json", path=input_path, error=str(e))
            raise typer.Exit(code=1)

        logical = _logical_filename(input_path, program, filename, config)
        bus.debug("transform.file.start", path=input_path, filename=logical)
        try:
            result = transformer.transform(program, logical)
        except MalformedTreeError as e:
            bus.error("error.malformed_tree", path=input_path, error=str(e))
            raise typer.Exit(code=1)

        bus.info("transform.file.done", path=input_path, **result.state.stats.as_dict())

        target = input_path if in_place else output
        if target is None:
            typer.echo(adapter.dump(result.program), nl=False)
            continue
        try:
            changed = adapter.save(target, result.program)
        except OSError as e:
            bus.error("error.generic", error=e)
            raise typer.Exit(code=1)
        if changed:
            bus.debug("transform.file.written", path=target, identity=result.state.file_identity)
        else:
            bus.debug("transform.file.unchanged", path=target)

    bus.success("transform.run.complete", count=len(inputs))


def scope_name_command(
    source: str = typer.Argument(...),
    scope: int = typer.Option(0, "--scope", min=0, help=catalog.get("cli.option.scope.help")),
):
    config = make_config()
    path = Path(source)
    if config.root is not None and config.relative_paths and not path.is_absolute():
        path = Path.cwd() / path
    root = config.root if config.relative_paths else None
    identity = file_identity(path, root=root, hashed=config.hash_file_identity)
    typer.echo(format_scope_name(identity, scope, config.marker))
