import copy
import logging
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from eszett.spec import (
    BindingId,
    ClassNameKind,
    ClassNameSource,
    ExistingClassName,
    Node,
)
from .nodes import (
    add,
    and_,
    is_capitalized,
    is_string_literal,
    jsx_attribute,
    node_type,
    not_eq,
    null_literal,
    member,
    or_,
    property_key_name,
    string_literal,
)
from .resolver import ScopeResolution

log = logging.getLogger(__name__)


class _ObjectScan(str, Enum):
    SKIP = "SKIP"  # provably has no class name
    FOUND = "FOUND"
    OPAQUE = "OPAQUE"


def classify_class_name(value: Optional[Node]) -> ClassNameSource:
    """
    Classifies the value of a class name attribute or object property.
    Literals pass through; anything else falls back to "" when falsy.
    """
    if node_type(value) == "JSXExpressionContainer":
        value = value.get("expression")
    kind = node_type(value)
    if kind is None or kind == "JSXEmptyExpression":
        return ClassNameSource(ClassNameKind.ABSENT)
    if is_string_literal(value):
        return ClassNameSource(ClassNameKind.STRING_LITERAL, value)
    if kind == "TemplateLiteral":
        return ClassNameSource(ClassNameKind.TEMPLATE_LITERAL, value)
    return ClassNameSource(ClassNameKind.EXPRESSION, or_(value, string_literal("")))


class MarkupScoper:
    def __init__(
        self,
        resolution: ScopeResolution,
        class_attribute: str = "className",
        exempt_tags: Iterable[str] = ("style",),
    ):
        self.resolution = resolution
        self.class_attribute = class_attribute
        self.exempt_tags = frozenset(tag.lower() for tag in exempt_tags)

    def is_intrinsic(self, element: Node, local_bindings: Set[BindingId]) -> bool:
        name = element.get("name")
        kind = node_type(name)
        if kind == "JSXNamespacedName":
            full_name = f"{name['namespace']['name']}:{name['name']['name']}"
            return full_name.lower() not in self.exempt_tags
        if kind != "JSXIdentifier":
            return False
        tag = name["name"]
        if tag.lower() in self.exempt_tags:
            return False
        if not is_capitalized(tag):
            return True
        # A capitalised local variable (e.g. a `Tag` prop) cannot be a known component.
        binding = self.resolution.binding_of(name)
        return binding is not None and binding in local_bindings

    def _attribute_name(self, attribute: Node) -> Optional[str]:
        name = attribute.get("name")
        if node_type(name) == "JSXIdentifier":
            return name["name"]
        return None

    def _class_properties(self, obj: Node) -> List[Node]:
        return [
            prop
            for prop in obj.get("properties", [])
            if node_type(prop) != "SpreadElement"
            and property_key_name(prop) == self.class_attribute
        ]

    def _scan_object(self, obj: Node) -> Tuple[_ObjectScan, Optional[Node]]:
        for prop in reversed(obj.get("properties", [])):
            if node_type(prop) == "SpreadElement" or prop.get("computed"):
                return _ObjectScan.OPAQUE, None
            if property_key_name(prop) != self.class_attribute:
                continue
            if prop.get("kind") in ("get", "set"):
                return _ObjectScan.OPAQUE, None
            return _ObjectScan.FOUND, prop
        return _ObjectScan.SKIP, None

    def _guard(self, target: Node) -> Node:
        # (target && target.className != null && target.className)
        return and_(
            and_(
                copy.deepcopy(target),
                not_eq(member(copy.deepcopy(target), self.class_attribute), null_literal()),
            ),
            member(copy.deepcopy(target), self.class_attribute),
        )

    def existing_class_name(self, attributes: List[Node]) -> ExistingClassName:
        """
        Collects every class name source already present on an element.

        Attributes are scanned from last to first since later ones win. The
        scan stops at the first direct attribute or fully known object spread;
        opaque spreads seen before that are chained into a runtime fallback.
        """
        result = ExistingClassName()
        value = ClassNameSource(ClassNameKind.ABSENT)
        chain: Optional[Node] = None

        for attribute in reversed(attributes):
            kind = node_type(attribute)
            if kind == "JSXAttribute":
                if self._attribute_name(attribute) != self.class_attribute:
                    continue
                value = classify_class_name(attribute.get("value"))
                result.direct_attribute = attribute
                break

            if kind != "JSXSpreadAttribute":
                continue
            target = attribute.get("argument")
            if node_type(target) == "ObjectExpression":
                status, prop = self._scan_object(target)
                if status is _ObjectScan.SKIP:
                    continue
                if status is _ObjectScan.FOUND:
                    value = classify_class_name(prop.get("value"))
                    result.object_spread = attribute
                    break
            guard = self._guard(target)
            chain = guard if chain is None else or_(chain, guard)

        if chain is not None and value.expression is not None:
            result.source = ClassNameSource(ClassNameKind.MERGED, or_(chain, value.expression))
        elif chain is not None:
            result.source = ClassNameSource(ClassNameKind.MERGED, or_(chain, string_literal("")))
        else:
            result.source = value
        return result

    def inject(self, element: Node, scope_name: str) -> Node:
        attributes: List[Node] = element.setdefault("attributes", [])
        existing = self.existing_class_name(attributes)

        class_name = string_literal(scope_name)
        if existing.source.expression is not None:
            class_name = add(add(class_name, string_literal(" ")), existing.source.expression)
        attributes.append(jsx_attribute(self.class_attribute, class_name))

        if existing.direct_attribute is not None:
            attributes[:] = [a for a in attributes if a is not existing.direct_attribute]

        spread = existing.object_spread
        if spread is not None:
            obj = spread["argument"]
            subsumed = self._class_properties(obj)
            if len(subsumed) == len(obj.get("properties", [])):
                attributes[:] = [a for a in attributes if a is not spread]
            else:
                obj["properties"] = [p for p in obj["properties"] if not any(p is s for s in subsumed)]

        log.debug("Scoped <%s> with %s (%s)", _tag_name(element), scope_name, existing.source.kind.value)
        return element


def _tag_name(element: Node) -> str:
    name = element.get("name")
    kind = node_type(name)
    if kind == "JSXIdentifier":
        return name["name"]
    if kind == "JSXMemberExpression":
        return f"{_tag_name({'name': name['object']})}.{name['property']['name']}"
    if kind == "JSXNamespacedName":
        return f"{name['namespace']['name']}:{name['name']['name']}"
    return "?"
