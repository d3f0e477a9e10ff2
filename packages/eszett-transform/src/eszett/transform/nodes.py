import json
from typing import Any, Iterator, Optional

from eszett.spec import Node

FUNCTION_TYPES = ("FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression")
COMPONENT_INIT_TYPES = ("FunctionExpression", "ArrowFunctionExpression", "ClassExpression")


def is_node(value: Any) -> bool:
    return isinstance(value, dict) and "type" in value


def node_type(value: Any) -> Optional[str]:
    if is_node(value):
        return value["type"]
    return None


def is_string_literal(node: Any) -> bool:
    kind = node_type(node)
    if kind == "StringLiteral":
        return True
    return kind == "Literal" and isinstance(node.get("value"), str)


def is_capitalized(word: str) -> bool:
    return word[:1].isupper()


def property_key_name(prop: Node) -> Optional[str]:
    """Static name of a non-computed object property key."""
    if prop.get("computed"):
        return None
    key = prop.get("key")
    if node_type(key) == "Identifier":
        return key["name"]
    if is_string_literal(key):
        return key["value"]
    return None


def pattern_identifiers(pattern: Optional[Node]) -> Iterator[Node]:
    """Yields every Identifier a binding pattern declares."""
    kind = node_type(pattern)
    if kind == "Identifier":
        yield pattern
    elif kind == "ObjectPattern":
        for prop in pattern.get("properties", []):
            if node_type(prop) == "RestElement":
                yield from pattern_identifiers(prop.get("argument"))
            else:
                yield from pattern_identifiers(prop.get("value"))
    elif kind == "ArrayPattern":
        for element in pattern.get("elements", []):
            yield from pattern_identifiers(element)
    elif kind == "AssignmentPattern":
        yield from pattern_identifiers(pattern.get("left"))
    elif kind == "RestElement":
        yield from pattern_identifiers(pattern.get("argument"))


# --- Constructors ---


def string_literal(value: str) -> Node:
    return {
        "type": "Literal",
        "value": value,
        "raw": json.dumps(value, ensure_ascii=False),
    }


def null_literal() -> Node:
    return {"type": "Literal", "value": None, "raw": "null"}


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def binary_expr(operator: str, left: Node, right: Node) -> Node:
    return {"type": "BinaryExpression", "operator": operator, "left": left, "right": right}


def logical_expr(operator: str, left: Node, right: Node) -> Node:
    return {"type": "LogicalExpression", "operator": operator, "left": left, "right": right}


def add(left: Node, right: Node) -> Node:
    return binary_expr("+", left, right)


def and_(left: Node, right: Node) -> Node:
    return logical_expr("&&", left, right)


def or_(left: Node, right: Node) -> Node:
    return logical_expr("||", left, right)


def not_eq(left: Node, right: Node) -> Node:
    return binary_expr("!=", left, right)


def member(obj: Node, name: str) -> Node:
    return {
        "type": "MemberExpression",
        "object": obj,
        "property": identifier(name),
        "computed": False,
        "optional": False,
    }


def jsx_attribute(name: str, expression: Node) -> Node:
    return {
        "type": "JSXAttribute",
        "name": {"type": "JSXIdentifier", "name": name},
        "value": {"type": "JSXExpressionContainer", "expression": expression},
    }
