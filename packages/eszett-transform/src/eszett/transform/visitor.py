import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from eszett.config import EszettConfig
from eszett.spec import Node, TransformState
from .imports import MagicImportResolver
from .markup import MarkupScoper
from .naming import format_scope_name
from .nodes import (
    COMPONENT_INIT_TYPES,
    add,
    node_type,
    pattern_identifiers,
    string_literal,
)
from .resolver import ScopeResolution
from .walker import NodeTransformer

log = logging.getLogger(__name__)


class ScopingTransformer(NodeTransformer):
    """
    Rewrites one program in place:

    - removes imports of the magic module, remembering their local bindings
    - gives every root function (declaration or arrow) its own scope id
    - turns `sz`...`` into `"<scope> " + `...``
    - replaces reads of the scope name binding with `"<scope>"`
    - merges `className="<scope> ..."` into intrinsic markup elements
    """

    def __init__(
        self,
        state: TransformState,
        resolution: ScopeResolution,
        config: Optional[EszettConfig] = None,
    ):
        self.state = state
        self.resolution = resolution
        self.config = config or EszettConfig()
        self.imports = MagicImportResolver(
            state,
            resolution,
            module=self.config.module,
            tag_export=self.config.tag_export,
            scope_name_export=self.config.scope_name_export,
        )
        self.markup = MarkupScoper(
            resolution,
            class_attribute=self.config.class_attribute,
            exempt_tags=self.config.exempt_tags,
        )

    def scope_name(self) -> str:
        return format_scope_name(
            self.state.file_identity, self.state.scope_id, self.config.marker
        )

    # --- Scope bookkeeping ---

    def _track_pattern(self, pattern: Optional[Node]) -> None:
        if self.state.current_scope is None:
            return
        for ident in pattern_identifiers(pattern):
            binding = self.resolution.binding_of(ident)
            if binding is not None:
                self.state.local_bindings.add(binding)

    @contextmanager
    def _local_frame(self, function: Node) -> Iterator[None]:
        state = self.state
        saved_locals = state.local_bindings
        state.local_bindings = set(saved_locals)
        for param in function.get("params", []):
            self._track_pattern(param)
        try:
            yield
        finally:
            state.local_bindings = saved_locals

    @contextmanager
    def _function_scope(self, function: Node) -> Iterator[None]:
        state = self.state
        saved_scope = state.current_scope
        if state.current_scope is None or self.config.nested_scopes:
            state.scope_counter += 1
            state.current_scope = state.scope_counter
            state.stats.scopes += 1
            log.debug("Entering scope %d", state.current_scope)
        try:
            with self._local_frame(function):
                yield
        finally:
            state.current_scope = saved_scope

    # --- Visitors ---

    def visit_Program(self, node: Node) -> Node:
        # Imports are hoisted, so bindings are known before any use is visited.
        for stmt in node.get("body", []):
            self.imports.resolve(stmt)
        return self.generic_visit(node)

    def visit_ImportDeclaration(self, node: Node) -> Optional[Node]:
        if self.imports.is_magic(node):
            self.state.stats.imports_removed += 1
            return None
        return node

    def visit_FunctionDeclaration(self, node: Node) -> Node:
        with self._function_scope(node):
            return self.generic_visit(node)

    def visit_ArrowFunctionExpression(self, node: Node) -> Node:
        with self._function_scope(node):
            return self.generic_visit(node)

    def visit_FunctionExpression(self, node: Node) -> Node:
        with self._local_frame(node):
            return self.generic_visit(node)

    def visit_VariableDeclarator(self, node: Node) -> Node:
        if node_type(node.get("init")) not in COMPONENT_INIT_TYPES:
            self._track_pattern(node.get("id"))
        return self.generic_visit(node)

    def visit_CatchClause(self, node: Node) -> Node:
        self._track_pattern(node.get("param"))
        return self.generic_visit(node)

    def visit_Property(self, node: Node) -> Node:
        if node.get("computed"):
            self.visit_field(node, "key")
        original = node.get("value")
        self.visit_field(node, "value")
        if node.get("shorthand") and node.get("value") is not original:
            # `{ scopeName }` became `{ scopeName: "<scope>" }`
            node["shorthand"] = False
        return node

    def visit_TaggedTemplateExpression(self, node: Node) -> Node:
        node = self.generic_visit(node)
        tag_binding = self.state.tag_binding
        if tag_binding is None:
            return node

        tag = node.get("tag")
        if node_type(tag) != "Identifier" or self.resolution.binding_of(tag) != tag_binding:
            return node

        self.state.stats.templates += 1
        return add(string_literal(self.scope_name() + " "), node["quasi"])

    def visit_Identifier(self, node: Node) -> Node:
        scope_name_binding = self.state.scope_name_binding
        if scope_name_binding is None or not self.resolution.is_read(node):
            return node

        binding = self.resolution.binding_of(node)
        if binding != scope_name_binding or binding in self.state.local_bindings:
            return node

        self.state.stats.scope_names += 1
        return string_literal(self.scope_name())

    def visit_JSXOpeningElement(self, node: Node) -> Node:
        node = self.generic_visit(node)
        if self.markup.is_intrinsic(node, self.state.local_bindings):
            self.state.stats.elements += 1
            self.markup.inject(node, self.scope_name())
        return node
