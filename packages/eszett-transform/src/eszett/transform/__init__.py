__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .engine import EszettTransformer, TransformResult, transform_program
from .markup import MarkupScoper, classify_class_name
from .naming import file_identity, format_scope_name
from .resolver import ScopeResolution, resolve_scopes
from .visitor import ScopingTransformer
from .walker import MalformedTreeError, NodeTransformer

__all__ = [
    "EszettTransformer",
    "TransformResult",
    "transform_program",
    "MarkupScoper",
    "classify_class_name",
    "file_identity",
    "format_scope_name",
    "ScopeResolution",
    "resolve_scopes",
    "ScopingTransformer",
    "MalformedTreeError",
    "NodeTransformer",
]
