import logging
from typing import Optional

from eszett.spec import BindingId, Node, TransformState
from .nodes import is_string_literal, node_type
from .resolver import ScopeResolution

log = logging.getLogger(__name__)


class MagicImportResolver:
    """
    Finds the local bindings behind the magic module's exports.

    The default import is the template tag. Named imports are matched on
    their exported name, so `import { scopeName as sc }` and
    `import { "scopeName" as sc }` both bind `sc` to the scope name.
    """

    def __init__(
        self,
        state: TransformState,
        resolution: ScopeResolution,
        module: str = "eszett",
        tag_export: str = "sz",
        scope_name_export: str = "scopeName",
    ):
        self.state = state
        self.resolution = resolution
        self.module = module
        self.tag_export = tag_export
        self.scope_name_export = scope_name_export

    def is_magic(self, decl: Node) -> bool:
        if node_type(decl) != "ImportDeclaration":
            return False
        source = decl.get("source")
        return is_string_literal(source) and source["value"] == self.module

    def _export_name(self, specifier: Node) -> str:
        imported = specifier.get("imported")
        if node_type(imported) == "Identifier":
            return imported["name"]
        if is_string_literal(imported):
            return imported["value"]
        return specifier["local"]["name"]

    def _local_binding(self, specifier: Node) -> Optional[BindingId]:
        return self.resolution.binding_of(specifier["local"])

    def resolve(self, decl: Node) -> bool:
        """Records the bindings of a magic import. Returns False for other imports."""
        if not self.is_magic(decl):
            return False

        for specifier in decl.get("specifiers", []):
            kind = node_type(specifier)
            if kind == "ImportDefaultSpecifier":
                self.state.tag_binding = self._local_binding(specifier)
                log.debug("Tag bound to %s", self.state.tag_binding)
            elif kind == "ImportSpecifier":
                export_name = self._export_name(specifier)
                if export_name == self.scope_name_export:
                    self.state.scope_name_binding = self._local_binding(specifier)
                    log.debug("Scope name bound to %s", self.state.scope_name_binding)
                elif export_name == self.tag_export:
                    self.state.tag_binding = self._local_binding(specifier)
                    log.debug("Tag bound to %s", self.state.tag_binding)
        return True
