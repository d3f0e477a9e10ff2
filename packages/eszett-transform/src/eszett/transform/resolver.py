"""
Lexical scope resolution for ESTree programs.

Runs before the scoping transform and assigns a `BindingId` to every binding
site (declarations, parameters, import locals) and to every identifier that
refers to one. Results live in a side table keyed by node identity, so the
tree itself is never annotated.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from eszett.spec import BindingId, Node
from .nodes import FUNCTION_TYPES, is_node, node_type, pattern_identifiers
from .walker import SKIPPED_KEYS

MODULE_SCOPE = 0


@dataclass
class Scope:
    serial: int
    kind: str  # "module", "function", "body", "block", "catch", "name"
    parent: Optional["Scope"] = None
    bindings: Dict[str, BindingId] = field(default_factory=dict)

    def declare(self, name: str) -> BindingId:
        binding = self.bindings.get(name)
        if binding is None:
            binding = BindingId(name, self.serial)
            self.bindings[name] = binding
        return binding

    def lookup(self, name: str) -> Optional[BindingId]:
        scope: Optional[Scope] = self
        while scope is not None:
            binding = scope.bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None


class ScopeResolution:
    def __init__(self):
        # Nodes are kept alive alongside their binding so that an id() can
        # never be recycled by a node created later in the transform.
        self._bindings: Dict[int, Tuple[Node, BindingId]] = {}
        self._reads: Set[int] = set()

    def record(self, node: Node, binding: BindingId, read: bool = False) -> None:
        self._bindings[id(node)] = (node, binding)
        if read:
            self._reads.add(id(node))

    def binding_of(self, node: Node) -> Optional[BindingId]:
        entry = self._bindings.get(id(node))
        if entry is None or entry[0] is not node:
            return None
        return entry[1]

    def is_read(self, node: Node) -> bool:
        return id(node) in self._reads and self.binding_of(node) is not None

    def __len__(self) -> int:
        return len(self._bindings)


def _is_lexical(decl: Node) -> bool:
    return node_type(decl) == "VariableDeclaration" and decl.get("kind") != "var"


class ScopeResolver:
    def __init__(self):
        self._serials = itertools.count(MODULE_SCOPE)
        self.resolution = ScopeResolution()

    def resolve(self, program: Node) -> ScopeResolution:
        scope = Scope(next(self._serials), "module")
        body = program.get("body", [])
        self._hoist_vars(body, scope)
        self._hoist_block(body, scope)
        for stmt in body:
            self._visit(stmt, scope)
        return self.resolution

    def _new_scope(self, kind: str, parent: Scope) -> Scope:
        return Scope(next(self._serials), kind, parent)

    # --- Hoisting ---

    def _declare_pattern(self, pattern: Optional[Node], scope: Scope) -> None:
        for ident in pattern_identifiers(pattern):
            scope.declare(ident["name"])

    def _hoist_declaration(self, stmt: Node, scope: Scope) -> None:
        kind = node_type(stmt)
        if _is_lexical(stmt):
            for declarator in stmt.get("declarations", []):
                self._declare_pattern(declarator.get("id"), scope)
        elif kind in ("FunctionDeclaration", "ClassDeclaration"):
            if stmt.get("id"):
                scope.declare(stmt["id"]["name"])
        elif kind == "ImportDeclaration":
            for specifier in stmt.get("specifiers", []):
                scope.declare(specifier["local"]["name"])
        elif kind in ("ExportNamedDeclaration", "ExportDefaultDeclaration"):
            declaration = stmt.get("declaration")
            if is_node(declaration):
                self._hoist_declaration(declaration, scope)

    def _hoist_block(self, statements: Iterable[Node], scope: Scope) -> None:
        for stmt in statements:
            if is_node(stmt):
                self._hoist_declaration(stmt, scope)

    def _hoist_vars(self, value: Any, scope: Scope) -> None:
        """Declares every `var` reachable without crossing a function boundary."""
        if isinstance(value, list):
            for item in value:
                self._hoist_vars(item, scope)
            return
        kind = node_type(value)
        if kind is None or kind in FUNCTION_TYPES:
            return
        if kind == "VariableDeclaration" and value.get("kind") == "var":
            for declarator in value.get("declarations", []):
                self._declare_pattern(declarator.get("id"), scope)
        for key, child in value.items():
            if key not in SKIPPED_KEYS and (isinstance(child, list) or is_node(child)):
                self._hoist_vars(child, scope)

    # --- Walking ---

    def _visit(self, value: Any, scope: Scope) -> None:
        if isinstance(value, list):
            for item in value:
                self._visit(item, scope)
            return
        kind = node_type(value)
        if kind is None:
            return
        handler = getattr(self, "_visit_" + kind, None)
        if handler is not None:
            handler(value, scope)
        else:
            self._visit_children(value, scope)

    def _visit_children(self, node: Node, scope: Scope) -> None:
        for key, child in node.items():
            if key not in SKIPPED_KEYS and (isinstance(child, list) or is_node(child)):
                self._visit(child, scope)

    def _reference(self, ident: Node, scope: Scope, read: bool) -> None:
        binding = scope.lookup(ident["name"])
        if binding is not None:
            self.resolution.record(ident, binding, read=read)

    def _visit_pattern(self, pattern: Any, scope: Scope, declaring: bool = True) -> None:
        """
        Walks a binding or assignment-target pattern. Names are recorded as
        binding sites (`declaring`) or as write references; default values and
        computed keys are ordinary expressions.
        """
        kind = node_type(pattern)
        if kind == "Identifier":
            self._reference(pattern, scope, read=False)
        elif kind == "ObjectPattern":
            for prop in pattern.get("properties", []):
                if node_type(prop) == "RestElement":
                    self._visit_pattern(prop.get("argument"), scope, declaring)
                    continue
                if prop.get("computed"):
                    self._visit(prop.get("key"), scope)
                self._visit_pattern(prop.get("value"), scope, declaring)
        elif kind == "ArrayPattern":
            for element in pattern.get("elements", []):
                self._visit_pattern(element, scope, declaring)
        elif kind == "AssignmentPattern":
            self._visit_pattern(pattern.get("left"), scope, declaring)
            self._visit(pattern.get("right"), scope)
        elif kind == "RestElement":
            self._visit_pattern(pattern.get("argument"), scope, declaring)
        elif kind is not None and not declaring:
            # Member expressions and the like as assignment targets.
            self._visit(pattern, scope)

    def _visit_Identifier(self, node: Node, scope: Scope) -> None:
        self._reference(node, scope, read=True)

    def _visit_BlockStatement(self, node: Node, scope: Scope) -> None:
        inner = self._new_scope("block", scope)
        body = node.get("body", [])
        self._hoist_block(body, inner)
        self._visit(body, inner)

    _visit_StaticBlock = _visit_BlockStatement

    def _visit_VariableDeclaration(self, node: Node, scope: Scope) -> None:
        for declarator in node.get("declarations", []):
            self._visit_pattern(declarator.get("id"), scope)
            self._visit(declarator.get("init"), scope)

    def _visit_FunctionDeclaration(self, node: Node, scope: Scope) -> None:
        if node.get("id"):
            self._reference(node["id"], scope, read=False)
        self._visit_function(node, scope)

    def _visit_FunctionExpression(self, node: Node, scope: Scope) -> None:
        if node.get("id"):
            # A named function expression sees its own name.
            scope = self._new_scope("name", scope)
            scope.declare(node["id"]["name"])
            self._reference(node["id"], scope, read=False)
        self._visit_function(node, scope)

    def _visit_ArrowFunctionExpression(self, node: Node, scope: Scope) -> None:
        self._visit_function(node, scope)

    def _visit_function(self, node: Node, scope: Scope) -> None:
        inner = self._new_scope("function", scope)
        params = node.get("params", [])
        for param in params:
            self._declare_pattern(param, inner)

        body = node.get("body")
        if node_type(body) == "BlockStatement":
            statements = body.get("body", [])
            # Default values and destructuring in the parameter list cannot
            # see declarations made in the body.
            body_scope = inner
            if any(node_type(param) != "Identifier" for param in params):
                body_scope = self._new_scope("body", inner)
            self._hoist_vars(statements, body_scope)
            self._hoist_block(statements, body_scope)
            for param in params:
                self._visit_pattern(param, inner)
            self._visit(statements, body_scope)
        else:
            for param in params:
                self._visit_pattern(param, inner)
            self._visit(body, inner)

    def _visit_ClassDeclaration(self, node: Node, scope: Scope) -> None:
        if node.get("id"):
            self._reference(node["id"], scope, read=False)
        self._visit(node.get("superClass"), scope)
        self._visit(node.get("body"), scope)

    def _visit_ClassExpression(self, node: Node, scope: Scope) -> None:
        if node.get("id"):
            scope = self._new_scope("name", scope)
            scope.declare(node["id"]["name"])
            self._reference(node["id"], scope, read=False)
        self._visit(node.get("superClass"), scope)
        self._visit(node.get("body"), scope)

    def _visit_MethodDefinition(self, node: Node, scope: Scope) -> None:
        if node.get("computed"):
            self._visit(node.get("key"), scope)
        self._visit(node.get("value"), scope)

    _visit_PropertyDefinition = _visit_MethodDefinition

    def _visit_Property(self, node: Node, scope: Scope) -> None:
        if node.get("computed"):
            self._visit(node.get("key"), scope)
        self._visit(node.get("value"), scope)

    def _visit_MemberExpression(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("object"), scope)
        if node.get("computed"):
            self._visit(node.get("property"), scope)

    def _visit_AssignmentExpression(self, node: Node, scope: Scope) -> None:
        self._visit_pattern(node.get("left"), scope, declaring=False)
        self._visit(node.get("right"), scope)

    def _visit_UpdateExpression(self, node: Node, scope: Scope) -> None:
        self._visit_pattern(node.get("argument"), scope, declaring=False)

    def _visit_ForStatement(self, node: Node, scope: Scope) -> None:
        inner = self._new_scope("block", scope)
        init = node.get("init")
        if _is_lexical(init):
            self._hoist_declaration(init, inner)
        self._visit(init, inner)
        self._visit(node.get("test"), inner)
        self._visit(node.get("update"), inner)
        self._visit(node.get("body"), inner)

    def _visit_ForInStatement(self, node: Node, scope: Scope) -> None:
        inner = self._new_scope("block", scope)
        left = node.get("left")
        if node_type(left) == "VariableDeclaration":
            if _is_lexical(left):
                self._hoist_declaration(left, inner)
            for declarator in left.get("declarations", []):
                self._visit_pattern(declarator.get("id"), inner)
        else:
            self._visit_pattern(left, inner, declaring=False)
        self._visit(node.get("right"), inner)
        self._visit(node.get("body"), inner)

    _visit_ForOfStatement = _visit_ForInStatement

    def _visit_SwitchStatement(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("discriminant"), scope)
        inner = self._new_scope("block", scope)
        cases = node.get("cases", [])
        for case in cases:
            self._hoist_block(case.get("consequent", []), inner)
        for case in cases:
            self._visit(case.get("test"), inner)
            self._visit(case.get("consequent", []), inner)

    def _visit_CatchClause(self, node: Node, scope: Scope) -> None:
        inner = self._new_scope("catch", scope)
        param = node.get("param")
        self._declare_pattern(param, inner)
        self._visit_pattern(param, inner)
        self._visit(node.get("body"), inner)

    def _visit_LabeledStatement(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("body"), scope)

    def _visit_BreakStatement(self, node: Node, scope: Scope) -> None:
        pass

    _visit_ContinueStatement = _visit_BreakStatement
    _visit_MetaProperty = _visit_BreakStatement
    _visit_ExportAllDeclaration = _visit_BreakStatement

    def _visit_ImportDeclaration(self, node: Node, scope: Scope) -> None:
        for specifier in node.get("specifiers", []):
            self._reference(specifier["local"], scope, read=False)

    def _visit_ExportNamedDeclaration(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("declaration"), scope)
        if node.get("source") is None:
            # `export { a as b }` refers to `a` but cannot hold an expression.
            for specifier in node.get("specifiers", []):
                local = specifier.get("local")
                if node_type(local) == "Identifier":
                    self._reference(local, scope, read=False)

    def _visit_ExportDefaultDeclaration(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("declaration"), scope)

    # --- JSX ---

    def _visit_jsx_name(self, name: Any, scope: Scope) -> None:
        kind = node_type(name)
        if kind == "JSXIdentifier":
            self._reference(name, scope, read=False)
        elif kind == "JSXMemberExpression":
            self._visit_jsx_name(name.get("object"), scope)

    def _visit_JSXOpeningElement(self, node: Node, scope: Scope) -> None:
        self._visit_jsx_name(node.get("name"), scope)
        self._visit(node.get("attributes", []), scope)

    def _visit_JSXClosingElement(self, node: Node, scope: Scope) -> None:
        self._visit_jsx_name(node.get("name"), scope)

    def _visit_JSXAttribute(self, node: Node, scope: Scope) -> None:
        self._visit(node.get("value"), scope)


def resolve_scopes(program: Node) -> ScopeResolution:
    return ScopeResolver().resolve(program)
