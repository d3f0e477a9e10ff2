import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Union

from eszett.config import EszettConfig
from eszett.spec import Node, TransformState
from .naming import file_identity
from .nodes import node_type
from .resolver import resolve_scopes
from .visitor import ScopingTransformer
from .walker import MalformedTreeError

log = logging.getLogger(__name__)


@dataclass
class TransformResult:
    program: Node
    state: TransformState


def transform_program(
    program: Node,
    filename: Union[str, PurePath] = "file.js",
    config: Optional[EszettConfig] = None,
) -> TransformResult:
    """
    Applies lexical style scoping to an ESTree `Program`, mutating it in place.

    `filename` is the logical path of the source file; together with the
    scope id it determines every generated scope name.
    """
    if node_type(program) != "Program":
        raise MalformedTreeError(
            f"expected a Program node, got {node_type(program) or type(program).__name__}"
        )
    if not isinstance(program.get("body"), list):
        raise MalformedTreeError("Program.body must be a list of statements")

    config = config or EszettConfig()
    root = config.root if config.relative_paths else None
    state = TransformState(
        file_identity=file_identity(filename, root=root, hashed=config.hash_file_identity)
    )

    resolution = resolve_scopes(program)
    log.debug("Resolved %d bindings in %s", len(resolution), filename)

    transformer = ScopingTransformer(state, resolution, config)
    program = transformer.visit(program)
    return TransformResult(program=program, state=state)


class EszettTransformer:
    def __init__(self, config: Optional[EszettConfig] = None):
        self.config = config or EszettConfig()

    def transform(self, program: Node, filename: Union[str, PurePath]) -> TransformResult:
        return transform_program(program, filename, self.config)
