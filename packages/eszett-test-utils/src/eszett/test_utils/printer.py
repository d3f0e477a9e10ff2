"""
A compact, single-line JS renderer for the node kinds the tests use.

Only meant for readable assertions; it is not a general code generator.
"""

import json
from typing import Any, Dict, Optional

Node = Dict[str, Any]

PRECEDENCE = {
    "??": 1,
    "||": 2,
    "&&": 3,
    "|": 4,
    "^": 5,
    "&": 6,
    "==": 7,
    "!=": 7,
    "===": 7,
    "!==": 7,
    "<": 8,
    ">": 8,
    "<=": 8,
    ">=": 8,
    "in": 8,
    "instanceof": 8,
    "<<": 9,
    ">>": 9,
    ">>>": 9,
    "+": 10,
    "-": 10,
    "*": 11,
    "/": 11,
    "%": 11,
    "**": 12,
}

LOOSE_TYPES = ("ConditionalExpression", "AssignmentExpression", "ArrowFunctionExpression", "SequenceExpression")


def render(node: Optional[Node]) -> str:
    if node is None:
        return ""
    handler = globals().get("_render_" + node["type"])
    if handler is None:
        raise NotImplementedError(f"printer does not support {node['type']}")
    return handler(node)


def _operand(parent: Node, child: Node, is_right: bool) -> str:
    text = render(child)
    if child["type"] in LOOSE_TYPES:
        return f"({text})"
    if child["type"] in ("BinaryExpression", "LogicalExpression"):
        parent_prec = PRECEDENCE[parent["operator"]]
        child_prec = PRECEDENCE[child["operator"]]
        if child_prec < parent_prec or (is_right and child_prec == parent_prec):
            return f"({text})"
    return text


def _block(statements) -> str:
    if not statements:
        return "{}"
    return "{ " + " ".join(render(s) for s in statements) + " }"


def _params(node: Node) -> str:
    return "(" + ", ".join(render(p) for p in node.get("params", [])) + ")"


# --- Program & statements ---


def _render_Program(node: Node) -> str:
    return "\n".join(render(s) for s in node["body"])


def _render_ImportDeclaration(node: Node) -> str:
    default = []
    named = []
    for spec in node["specifiers"]:
        if spec["type"] == "ImportDefaultSpecifier":
            default.append(render(spec["local"]))
        elif spec["type"] == "ImportNamespaceSpecifier":
            default.append("* as " + render(spec["local"]))
        else:
            imported = render(spec["imported"])
            local = render(spec["local"])
            named.append(imported if imported == local else f"{imported} as {local}")
    parts = default + (["{ " + ", ".join(named) + " }"] if named else [])
    source = render(node["source"])
    if not parts:
        return f"import {source};"
    return f"import {', '.join(parts)} from {source};"


def _render_ExportNamedDeclaration(node: Node) -> str:
    if node.get("declaration"):
        return "export " + render(node["declaration"])
    names = ", ".join(render(s["local"]) for s in node["specifiers"])
    return "export { " + names + " };"


def _render_ExportDefaultDeclaration(node: Node) -> str:
    declaration = node["declaration"]
    text = render(declaration)
    if declaration["type"].endswith("Declaration"):
        return "export default " + text
    return f"export default {text};"


def _render_VariableDeclaration(node: Node) -> str:
    declarators = []
    for declarator in node["declarations"]:
        text = render(declarator["id"])
        if declarator.get("init") is not None:
            text += " = " + render(declarator["init"])
        declarators.append(text)
    return f"{node['kind']} {', '.join(declarators)};"


def _render_FunctionDeclaration(node: Node) -> str:
    name = " " + render(node["id"]) if node.get("id") else ""
    return f"function{name}{_params(node)} {render(node['body'])}"


def _render_FunctionExpression(node: Node) -> str:
    return _render_FunctionDeclaration(node)


def _render_ArrowFunctionExpression(node: Node) -> str:
    body = node["body"]
    text = render(body)
    if body["type"] == "ObjectExpression":
        text = f"({text})"
    return f"{_params(node)} => {text}"


def _render_ClassDeclaration(node: Node) -> str:
    methods = " ".join(render(m) for m in node["body"]["body"])
    return f"class {render(node['id'])} {{ {methods} }}" if methods else f"class {render(node['id'])} {{}}"


def _render_MethodDefinition(node: Node) -> str:
    value = node["value"]
    return f"{render(node['key'])}{_params(value)} {render(value['body'])}"


def _render_BlockStatement(node: Node) -> str:
    return _block(node["body"])


def _render_ExpressionStatement(node: Node) -> str:
    return render(node["expression"]) + ";"


def _render_ReturnStatement(node: Node) -> str:
    if node.get("argument") is None:
        return "return;"
    return f"return {render(node['argument'])};"


def _render_IfStatement(node: Node) -> str:
    return f"if ({render(node['test'])}) {render(node['consequent'])}"


def _render_TryStatement(node: Node) -> str:
    handler = node["handler"]
    param = f" ({render(handler['param'])})" if handler.get("param") else ""
    return f"try {render(node['block'])} catch{param} {render(handler['body'])}"


# --- Expressions ---


def _render_Identifier(node: Node) -> str:
    return node["name"]


def _render_Literal(node: Node) -> str:
    value = node.get("value")
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return node.get("raw") or str(value)


def _render_TemplateLiteral(node: Node) -> str:
    out = []
    quasis = node["quasis"]
    expressions = node["expressions"]
    for index, quasi in enumerate(quasis):
        out.append(quasi["value"]["raw"])
        if index < len(expressions):
            out.append("${" + render(expressions[index]) + "}")
    return "`" + "".join(out) + "`"


def _render_TaggedTemplateExpression(node: Node) -> str:
    return render(node["tag"]) + render(node["quasi"])


def _render_BinaryExpression(node: Node) -> str:
    left = _operand(node, node["left"], is_right=False)
    right = _operand(node, node["right"], is_right=True)
    return f"{left} {node['operator']} {right}"


_render_LogicalExpression = _render_BinaryExpression


def _render_AssignmentExpression(node: Node) -> str:
    return f"{render(node['left'])} {node['operator']} {render(node['right'])}"


def _render_UpdateExpression(node: Node) -> str:
    if node.get("prefix"):
        return node["operator"] + render(node["argument"])
    return render(node["argument"]) + node["operator"]


def _render_MemberExpression(node: Node) -> str:
    obj = render(node["object"])
    if node["object"]["type"] in ("BinaryExpression", "LogicalExpression") + LOOSE_TYPES:
        obj = f"({obj})"
    if node.get("computed"):
        return f"{obj}[{render(node['property'])}]"
    return f"{obj}.{render(node['property'])}"


def _render_CallExpression(node: Node) -> str:
    args = ", ".join(render(a) for a in node["arguments"])
    return f"{render(node['callee'])}({args})"


def _render_ObjectExpression(node: Node) -> str:
    if not node["properties"]:
        return "{}"
    return "{ " + ", ".join(render(p) for p in node["properties"]) + " }"


_render_ObjectPattern = _render_ObjectExpression


def _render_Property(node: Node) -> str:
    if node.get("shorthand"):
        return render(node["value"])
    key = render(node["key"])
    if node.get("computed"):
        key = f"[{key}]"
    return f"{key}: {render(node['value'])}"


def _render_SpreadElement(node: Node) -> str:
    return "..." + render(node["argument"])


_render_RestElement = _render_SpreadElement


def _render_ArrayPattern(node: Node) -> str:
    return "[" + ", ".join(render(e) for e in node["elements"]) + "]"


def _render_AssignmentPattern(node: Node) -> str:
    return f"{render(node['left'])} = {render(node['right'])}"


# --- JSX ---


def _render_JSXIdentifier(node: Node) -> str:
    return node["name"]


def _render_JSXMemberExpression(node: Node) -> str:
    return f"{render(node['object'])}.{render(node['property'])}"


def _render_JSXNamespacedName(node: Node) -> str:
    return f"{render(node['namespace'])}:{render(node['name'])}"


def _render_JSXAttribute(node: Node) -> str:
    name = render(node["name"])
    if node.get("value") is None:
        return name
    return f"{name}={render(node['value'])}"


def _render_JSXSpreadAttribute(node: Node) -> str:
    return "{..." + render(node["argument"]) + "}"


def _render_JSXExpressionContainer(node: Node) -> str:
    return "{" + render(node["expression"]) + "}"


def _render_JSXEmptyExpression(node: Node) -> str:
    return ""


def _render_JSXText(node: Node) -> str:
    return node["value"]


def _render_JSXOpeningElement(node: Node) -> str:
    attributes = "".join(" " + render(a) for a in node["attributes"])
    closing = " />" if node.get("selfClosing") else ">"
    return f"<{render(node['name'])}{attributes}{closing}"


def _render_JSXClosingElement(node: Node) -> str:
    return f"</{render(node['name'])}>"


def _render_JSXElement(node: Node) -> str:
    children = "".join(render(c) for c in node["children"])
    return render(node["openingElement"]) + children + render(node.get("closingElement"))
