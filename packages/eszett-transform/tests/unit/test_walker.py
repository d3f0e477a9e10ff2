from eszett.test_utils.js import const, expr_stmt, fn, ident, lit, program, ret
from eszett.test_utils.printer import render
from eszett.transform.walker import NodeTransformer


class DropStrings(NodeTransformer):
    def visit_ExpressionStatement(self, node):
        node = self.generic_visit(node)
        if node["expression"]["type"] == "Literal":
            return None
        return node


class RenameIdentifiers(NodeTransformer):
    def visit_Identifier(self, node):
        return ident(node["name"].upper())


def test_returning_none_removes_list_items():
    tree = program(expr_stmt(lit("use strict")), const("a", "b"))

    DropStrings().visit(tree)

    assert render(tree) == "const a = b;"


def test_replacements_are_written_back():
    tree = program(const("a", "b"))

    RenameIdentifiers().visit(tree)

    assert render(tree) == "const A = B;"


def test_type_annotations_are_not_walked():
    annotation = {"type": "TSTypeAnnotation", "typeAnnotation": ident("T")}
    function = fn("f", [], ret("b"))
    function["returnType"] = annotation
    tree = program(function)

    RenameIdentifiers().visit(tree)

    assert annotation["typeAnnotation"]["name"] == "T"
    assert render(tree) == "function F() { return B; }"
