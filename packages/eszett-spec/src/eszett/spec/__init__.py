# This must be the very first line to allow this package to coexist with other
# namespace packages in editable installs.
__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .models import (
    Node,
    BindingId,
    ClassNameKind,
    ClassNameSource,
    ExistingClassName,
    TransformStats,
    TransformState,
)

__all__ = [
    "Node",
    "BindingId",
    "ClassNameKind",
    "ClassNameSource",
    "ExistingClassName",
    "TransformStats",
    "TransformState",
]
