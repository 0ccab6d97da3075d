"""Class and interface member translation for dts2rs

Binds constructors, instance methods, static methods and instance
properties of a class or interface body. Members with no wasm_bindgen
counterpart (index, call and construct signatures, private members,
static properties, computed names) are logged and skipped.
"""

from typing import Iterable, List, Optional, Set

import tree_sitter as ts

from dts2rs.core.errors import UnsupportedConstructError
from dts2rs.core.frontend import iter_named, line_of, node_text
from dts2rs.core.ir import Property, Signature, TypeDecl
from dts2rs.core.target_types import TargetTypeRegistry
from dts2rs.core.translation_logger import SkipKind, TranslationLogger
from dts2rs.core.type_system import ANY_TYPE, TypeExpression
from dts2rs.generators.doc_comments import extract_doc
from dts2rs.generators.type_mapper import TypeExpressionParser

METHOD_NODE_TYPES = ("method_signature", "method_definition", "abstract_method_signature")
PROPERTY_NODE_TYPES = ("public_field_definition", "property_signature")
CONSTRUCTOR_NAME = "constructor"


def type_parameter_names(decl: ts.Node) -> List[str]:
    """Names of the generic type parameters declared on decl"""
    params = decl.child_by_field_name("type_parameters")
    if params is None:
        return []
    names = []
    for param in iter_named(params):
        name_node = param.child_by_field_name("name") or next(iter_named(param), None)
        if name_node is not None:
            names.append(node_text(name_node))
    return names


def check_type_parameters(type_params: Iterable[str],
                          types: Iterable[TypeExpression],
                          registry: TargetTypeRegistry,
                          node: ts.Node) -> None:
    """Reject generic type parameters that would reach the output unresolved

    A type parameter is acceptable when no signature type references it,
    or when the registry substitutes a concrete Rust type for its name.

    Raises:
        UnsupportedConstructError: For a referenced, unsubstituted type parameter
    """
    unresolved = [name for name in type_params if not registry.has_substitution(name)]
    if not unresolved:
        return
    used: Set[str] = set()
    for type_expr in types:
        used.update(type_expr.referenced_names())
    for name in unresolved:
        if name in used:
            header = node_text(node).split("\n", 1)[0].strip()
            raise UnsupportedConstructError(f"Unsupported generic type parameter '{name}'",
                                            source=header, line=line_of(node))


def _modifiers(node: ts.Node) -> Set[str]:
    """Keyword tokens (static, readonly, get, set, ?) and accessibility of a member"""
    found = {child.type for child in node.children if not child.is_named}
    for child in node.named_children:
        if child.type == "accessibility_modifier":
            found.add(node_text(child))
    return found


def _member_name(node: ts.Node) -> Optional[str]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    if name_node.type in ("property_identifier", "identifier"):
        return node_text(name_node)
    if name_node.type == "string":
        return node_text(name_node)[1:-1]
    return None


class MemberBuilder:
    """Adds the members of a class or interface body to a TypeDecl

    Usage:
        builder = MemberBuilder(TypeExpressionParser(), registry, logger)
        builder.build(class_decl, body_node, type_params=["T"])
    """

    def __init__(self, type_parser: TypeExpressionParser,
                 registry: TargetTypeRegistry,
                 logger: TranslationLogger) -> None:
        self._types = type_parser
        self._registry = registry
        self.logger = logger

    def build(self, decl: TypeDecl, body: Optional[ts.Node],
              type_params: Iterable[str] = ()) -> None:
        """Bind every member of body onto decl

        Args:
            decl: Class or interface IR receiving the members
            body: class_body, interface_body or object_type node
            type_params: Generic parameters declared on the type
        """
        if body is None:
            return
        type_params = list(type_params)
        for member in iter_named(body):
            if member.type in METHOD_NODE_TYPES:
                self._add_method(decl, member, type_params)
            elif member.type in PROPERTY_NODE_TYPES:
                self._add_property(decl, member, type_params)
            else:
                self._skip(decl, member, None, f"no binding for {member.type}")

    def _add_method(self, decl: TypeDecl, member: ts.Node, type_params: List[str]) -> None:
        modifiers = _modifiers(member)
        name = _member_name(member)
        if name is None:
            self._skip(decl, member, None, "computed or private member name")
            return
        if modifiers & {"private", "protected"}:
            self._skip(decl, member, name, "non-public member")
            return

        parameters = self._types.parse_parameters(member.child_by_field_name("parameters"))
        return_node = member.child_by_field_name("return_type")
        return_type = self._types.parse(return_node) if return_node is not None else ANY_TYPE
        method_params = type_params + type_parameter_names(member)
        check_type_parameters(method_params, [*(p.type for p in parameters), return_type],
                              self._registry, member)

        doc = extract_doc(member)
        line = line_of(member)
        if "get" in modifiers:
            decl.add_property(Property(name, return_type, readonly=True, doc=doc, line=line))
        elif "set" in modifiers:
            value_type = parameters[0].type if parameters else ANY_TYPE
            decl.add_property(Property(name, value_type, readonly=False, doc=doc, line=line))
        elif name == CONSTRUCTOR_NAME:
            signature = Signature(name, parameters, TypeExpression.named(decl.name), line=line)
            decl.add_constructor(signature, doc)
        else:
            signature = Signature(name, parameters, return_type, line=line)
            decl.add_method(signature, doc, static="static" in modifiers)

    def _add_property(self, decl: TypeDecl, member: ts.Node, type_params: List[str]) -> None:
        modifiers = _modifiers(member)
        name = _member_name(member)
        if name is None:
            self._skip(decl, member, None, "computed or private member name")
            return
        if modifiers & {"private", "protected"}:
            self._skip(decl, member, name, "non-public member")
            return
        if "static" in modifiers:
            self._skip(decl, member, name, "static properties are not bound")
            return

        type_node = member.child_by_field_name("type")
        prop_type = self._types.parse(type_node) if type_node is not None else ANY_TYPE
        check_type_parameters(type_params, [prop_type], self._registry, member)
        decl.add_property(Property(
            name,
            prop_type,
            optional="?" in modifiers,
            readonly="readonly" in modifiers,
            doc=extract_doc(member),
            line=line_of(member),
        ))

    def _skip(self, decl: TypeDecl, member: ts.Node, name: Optional[str], reason: str) -> None:
        symbol = f"{decl.name}.{name}" if name else decl.name
        self.logger.log_skipped(SkipKind.UNTRANSLATED_MEMBER, symbol, reason, line_of(member))
