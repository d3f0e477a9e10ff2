from typing import Any, Optional

from eszett.spec import Node
from .nodes import is_node

# Type-only positions (TypeScript/Flow) are never walked.
SKIPPED_KEYS = frozenset({"typeAnnotation", "returnType", "typeParameters"})


class MalformedTreeError(ValueError):
    pass


class NodeTransformer:
    """
    Depth-first walker over ESTree dicts, modelled on `ast.NodeTransformer`.

    `visit_<Type>` methods receive the node and return its replacement.
    Inside a list, returning None drops the element.
    """

    def visit(self, node: Node) -> Optional[Node]:
        method = getattr(self, "visit_" + node["type"], self.generic_visit)
        return method(node)

    def generic_visit(self, node: Node) -> Node:
        for key, value in list(node.items()):
            if key in SKIPPED_KEYS:
                continue
            if isinstance(value, list):
                value[:] = self._visit_list(value)
            elif is_node(value):
                node[key] = self.visit(value)
        return node

    def _visit_list(self, items: list) -> list:
        result = []
        for item in items:
            if is_node(item):
                item = self.visit(item)
                if item is None:
                    continue
            result.append(item)
        return result

    def visit_field(self, node: Node, key: str) -> None:
        value: Any = node.get(key)
        if isinstance(value, list):
            value[:] = self._visit_list(value)
        elif is_node(value):
            node[key] = self.visit(value)
