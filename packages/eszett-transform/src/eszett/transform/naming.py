import hashlib
import re
from pathlib import Path, PurePath
from typing import Optional, Union

DEFAULT_MARKER = "ß"
HASH_LENGTH = 10

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_identity(identity: str) -> str:
    return _UNSAFE_CHARS.sub("_", identity)


def format_scope_name(
    file_identity: str, scope_id: int, marker: str = DEFAULT_MARKER
) -> str:
    """
    Builds the scope name for a scope of a file, e.g. `ß-src_Button_jsx-2`.
    Scope id 0 is module level.
    """
    return f"{marker}-{sanitize_identity(file_identity)}-{scope_id}"


def file_identity(
    path: Union[str, PurePath],
    root: Optional[Union[str, PurePath]] = None,
    hashed: bool = False,
) -> str:
    """
    Derives the stable identity of a source file.

    With a `root`, absolute paths inside it are made relative so the identity
    does not depend on where the project is checked out. With `hashed`, only a
    digest of the path is exposed.
    """
    source = Path(path)
    if root is not None and source.is_absolute():
        try:
            source = source.resolve().relative_to(Path(root).resolve())
        except ValueError:
            pass
    identity = source.as_posix()

    if hashed:
        return hashlib.sha256(identity.encode("utf-8")).hexdigest()[:HASH_LENGTH]
    return identity
