"""
Terse ESTree builders for tests.

Keys are emitted in source order, matching what acorn-jsx produces, so
traversal order follows the source text. Wherever a node is expected, a
plain `str` is accepted as an identifier and converted.
"""

import json
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

Node = Dict[str, Any]
NodeLike = Union[Node, str]


def _n(value: Optional[NodeLike]) -> Optional[Node]:
    if isinstance(value, str):
        return ident(value)
    return value


def _stmt(value: NodeLike) -> Node:
    node = _n(value)
    if node["type"].endswith(("Statement", "Declaration")):
        return node
    return expr_stmt(node)


def program(*body: NodeLike) -> Node:
    return {"type": "Program", "sourceType": "module", "body": [_stmt(s) for s in body]}


# --- Expressions ---


def ident(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def lit(value: Any) -> Node:
    return {"type": "Literal", "value": value, "raw": json.dumps(value)}


def tpl(*parts: NodeLike) -> Node:
    """tpl("a ", "x", " b") builds `a ${x} b`: even positions are text."""
    quasis = []
    expressions = []
    for index, part in enumerate(parts):
        if index % 2 == 0:
            quasis.append(part)
        else:
            expressions.append(_n(part))
    if len(quasis) == len(expressions):
        quasis.append("")
    return {
        "type": "TemplateLiteral",
        "expressions": expressions,
        "quasis": [
            {
                "type": "TemplateElement",
                "value": {"raw": text, "cooked": text},
                "tail": index == len(quasis) - 1,
            }
            for index, text in enumerate(quasis)
        ],
    }


def tagged(tag: NodeLike, quasi: Optional[Node] = None) -> Node:
    return {"type": "TaggedTemplateExpression", "tag": _n(tag), "quasi": quasi or tpl("")}


def member(obj: NodeLike, prop: str, computed: bool = False) -> Node:
    return {
        "type": "MemberExpression",
        "object": _n(obj),
        "property": lit(prop) if computed else ident(prop),
        "computed": computed,
        "optional": False,
    }


def call(callee: NodeLike, *args: NodeLike) -> Node:
    return {
        "type": "CallExpression",
        "callee": _n(callee),
        "arguments": [_n(a) for a in args],
        "optional": False,
    }


def binary(operator: str, left: NodeLike, right: NodeLike) -> Node:
    return {"type": "BinaryExpression", "operator": operator, "left": _n(left), "right": _n(right)}


def assign(left: NodeLike, right: NodeLike, operator: str = "=") -> Node:
    return {"type": "AssignmentExpression", "operator": operator, "left": _n(left), "right": _n(right)}


def update(argument: NodeLike, operator: str = "++") -> Node:
    return {"type": "UpdateExpression", "operator": operator, "prefix": False, "argument": _n(argument)}


def prop(key: str, value: Optional[NodeLike] = None, computed: bool = False) -> Node:
    """prop("a") is the shorthand `{ a }`; prop("a", x) is `{ a: x }`."""
    shorthand = value is None
    key_node = _n(key) if computed else ident(key)
    return {
        "type": "Property",
        "method": False,
        "shorthand": shorthand,
        "computed": computed,
        "key": key_node,
        "value": ident(key) if shorthand else _n(value),
        "kind": "init",
    }


def spread(argument: NodeLike) -> Node:
    return {"type": "SpreadElement", "argument": _n(argument)}


def obj(*properties: Node) -> Node:
    return {"type": "ObjectExpression", "properties": list(properties)}


# --- Patterns ---


def obj_pattern(*properties: Union[str, Tuple[str, NodeLike], Node]) -> Node:
    """obj_pattern("a", ("b", "c")) builds `{ a, b: c }`."""
    props = []
    for item in properties:
        if isinstance(item, str):
            props.append(prop(item))
        elif isinstance(item, tuple):
            props.append(prop(item[0], item[1]))
        else:
            props.append(item)
    return {"type": "ObjectPattern", "properties": props}


def array_pattern(*elements: Optional[NodeLike]) -> Node:
    return {"type": "ArrayPattern", "elements": [_n(e) for e in elements]}


def rest(argument: NodeLike) -> Node:
    return {"type": "RestElement", "argument": _n(argument)}


def default(left: NodeLike, right: NodeLike) -> Node:
    return {"type": "AssignmentPattern", "left": _n(left), "right": _n(right)}


# --- Statements ---


def expr_stmt(expression: NodeLike) -> Node:
    return {"type": "ExpressionStatement", "expression": _n(expression)}


def const(target: NodeLike, init: Optional[NodeLike] = None, kind: str = "const") -> Node:
    return {
        "type": "VariableDeclaration",
        "declarations": [
            {"type": "VariableDeclarator", "id": _n(target), "init": _n(init)}
        ],
        "kind": kind,
    }


def let(target: NodeLike, init: Optional[NodeLike] = None) -> Node:
    return const(target, init, kind="let")


def var(target: NodeLike, init: Optional[NodeLike] = None) -> Node:
    return const(target, init, kind="var")


def ret(argument: Optional[NodeLike] = None) -> Node:
    return {"type": "ReturnStatement", "argument": _n(argument)}


def block(*body: NodeLike) -> Node:
    return {"type": "BlockStatement", "body": [_stmt(s) for s in body]}


def if_(test: NodeLike, *body: NodeLike) -> Node:
    return {"type": "IfStatement", "test": _n(test), "consequent": block(*body), "alternate": None}


def try_catch(param: Optional[NodeLike], body: Sequence[NodeLike], handler: Sequence[NodeLike]) -> Node:
    return {
        "type": "TryStatement",
        "block": block(*body),
        "handler": {"type": "CatchClause", "param": _n(param), "body": block(*handler)},
        "finalizer": None,
    }


def fn(name: Optional[str], params: Iterable[NodeLike], *body: NodeLike) -> Node:
    return {
        "type": "FunctionDeclaration",
        "id": ident(name) if name else None,
        "expression": False,
        "generator": False,
        "async": False,
        "params": [_n(p) for p in params],
        "body": block(*body),
    }


def fn_expr(name: Optional[str], params: Iterable[NodeLike], *body: NodeLike) -> Node:
    return dict(fn(name, params, *body), type="FunctionExpression")


def arrow(params: Iterable[NodeLike], *body: NodeLike) -> Node:
    return {
        "type": "ArrowFunctionExpression",
        "id": None,
        "expression": False,
        "generator": False,
        "async": False,
        "params": [_n(p) for p in params],
        "body": block(*body),
    }


def arrow_expr(params: Iterable[NodeLike], body: NodeLike) -> Node:
    return dict(arrow(params), expression=True, body=_n(body))


def class_decl(name: str, *methods: Node) -> Node:
    return {
        "type": "ClassDeclaration",
        "id": ident(name),
        "superClass": None,
        "body": {"type": "ClassBody", "body": list(methods)},
    }


def method(name: str, params: Iterable[NodeLike], *body: NodeLike) -> Node:
    return {
        "type": "MethodDefinition",
        "static": False,
        "computed": False,
        "key": ident(name),
        "kind": "method",
        "value": fn_expr(None, params, *body),
    }


# --- Modules ---


def default_spec(local: str) -> Node:
    return {"type": "ImportDefaultSpecifier", "local": ident(local)}


def named_spec(imported: str, local: Optional[str] = None, string: bool = False) -> Node:
    return {
        "type": "ImportSpecifier",
        "imported": lit(imported) if string else ident(imported),
        "local": ident(local or imported),
    }


def namespace_spec(local: str) -> Node:
    return {"type": "ImportNamespaceSpecifier", "local": ident(local)}


def import_decl(source: str, *specifiers: Node) -> Node:
    return {"type": "ImportDeclaration", "specifiers": list(specifiers), "source": lit(source)}


def export_named(declaration: Optional[Node] = None, *locals_: str) -> Node:
    return {
        "type": "ExportNamedDeclaration",
        "declaration": declaration,
        "specifiers": [
            {"type": "ExportSpecifier", "local": ident(name), "exported": ident(name)}
            for name in locals_
        ],
        "source": None,
    }


def export_default(declaration: NodeLike) -> Node:
    return {"type": "ExportDefaultDeclaration", "declaration": _n(declaration)}


# --- JSX ---


def _jsx_name(tag: str) -> Node:
    if ":" in tag:
        namespace, name = tag.split(":", 1)
        return {
            "type": "JSXNamespacedName",
            "namespace": {"type": "JSXIdentifier", "name": namespace},
            "name": {"type": "JSXIdentifier", "name": name},
        }
    parts = tag.split(".")
    node: Node = {"type": "JSXIdentifier", "name": parts[0]}
    for part in parts[1:]:
        node = {
            "type": "JSXMemberExpression",
            "object": node,
            "property": {"type": "JSXIdentifier", "name": part},
        }
    return node


def attr(name: str, value: Optional[NodeLike] = None, literal: Optional[str] = None) -> Node:
    """attr("a", literal="x") is `a="x"`; attr("a", expr) is `a={expr}`."""
    if literal is not None:
        value_node: Optional[Node] = lit(literal)
    elif value is not None:
        value_node = {"type": "JSXExpressionContainer", "expression": _n(value)}
    else:
        value_node = None
    return {"type": "JSXAttribute", "name": {"type": "JSXIdentifier", "name": name}, "value": value_node}


def spread_attr(argument: NodeLike) -> Node:
    return {"type": "JSXSpreadAttribute", "argument": _n(argument)}


def text(value: str) -> Node:
    return {"type": "JSXText", "value": value, "raw": value}


def container(expression: NodeLike) -> Node:
    return {"type": "JSXExpressionContainer", "expression": _n(expression)}


def jsx(tag: str, *attributes: Node, children: Sequence[Node] = ()) -> Node:
    self_closing = not children
    return {
        "type": "JSXElement",
        "openingElement": {
            "type": "JSXOpeningElement",
            "name": _jsx_name(tag),
            "attributes": list(attributes),
            "selfClosing": self_closing,
        },
        "children": list(children),
        "closingElement": None if self_closing else {
            "type": "JSXClosingElement",
            "name": _jsx_name(tag),
        },
    }
