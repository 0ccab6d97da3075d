"""Type mapping for dts2rs

TypeExpressionParser turns tree-sitter type nodes into TypeExpression
values; TypeMapper spells a TypeExpression as Rust type syntax.

Anything outside the supported subset raises UnsupportedConstructError
with the construct's source text. There is no fallback type: a wrong
binding signature silently breaks the calling contract across the FFI
boundary.
"""

from typing import List, Optional

import tree_sitter as ts

from dts2rs.core.errors import MalformedNodeError, UnsupportedConstructError
from dts2rs.core.frontend import iter_named, line_of, node_text
from dts2rs.core.target_types import TargetTypeRegistry
from dts2rs.core.type_system import (
    ANY_TYPE,
    Parameter,
    PrimitiveKind,
    TypeExpression,
    TypeKind,
)


ABSENT_MARKERS = ("undefined", "null")

_PREDEFINED = {
    "string": PrimitiveKind.STRING,
    "number": PrimitiveKind.NUMBER,
    "boolean": PrimitiveKind.BOOLEAN,
    "void": PrimitiveKind.VOID,
    "any": PrimitiveKind.ANY,
    "unknown": PrimitiveKind.ANY,
}

_TRANSPARENT = ("type_annotation", "parenthesized_type")


class TypeExpressionParser:
    """Builds TypeExpression values from tree-sitter type nodes"""

    def parse(self, node: ts.Node) -> TypeExpression:
        """Parse a type node

        Args:
            node: tree-sitter type node (type annotations are unwrapped)

        Returns:
            TypeExpression

        Raises:
            UnsupportedConstructError: For constructs outside the subset
        """
        if node.type in _TRANSPARENT:
            inner = next(iter_named(node), None)
            if inner is None:
                raise MalformedNodeError("Empty type", source=node_text(node), line=line_of(node))
            return self.parse(inner)

        text = node_text(node)
        node_type = node.type

        if text in ABSENT_MARKERS:
            return TypeExpression.primitive_of(PrimitiveKind.VOID, text)

        if node_type == "predefined_type":
            primitive = _PREDEFINED.get(text)
            if text.startswith("unique"):
                raise self._unsupported("Unsupported unique operator", node)
            if primitive is None:
                raise self._unsupported(f"Unsupported primitive type '{text}'", node)
            return TypeExpression.primitive_of(primitive, text)

        if node_type in ("type_identifier", "nested_type_identifier"):
            return TypeExpression.named(text)

        if node_type == "generic_type":
            name_node = node.child_by_field_name("name")
            if name_node is None:
                raise MalformedNodeError("Generic type without a name", source=text, line=line_of(node))
            args_node = node.child_by_field_name("type_arguments")
            args = tuple(self.parse(arg) for arg in iter_named(args_node)) if args_node else ()
            return TypeExpression.named(node_text(name_node), args, text)

        if node_type == "array_type":
            element = next(iter_named(node), None)
            if element is None:
                raise MalformedNodeError("Array type without an element", source=text, line=line_of(node))
            return TypeExpression.array_of(self.parse(element), text)

        if node_type == "tuple_type":
            return TypeExpression.tuple_of(tuple(self.parse(el) for el in iter_named(node)), text)

        if node_type == "union_type":
            return self._parse_union(node)

        if node_type == "readonly_type":
            inner = next(iter_named(node), None)
            if inner is None:
                raise MalformedNodeError("readonly without a type", source=text, line=line_of(node))
            # The grammar lets readonly swallow a whole union; it binds to the first branch
            if inner.type == "union_type":
                return self._parse_union(inner, readonly_node=node)
            return TypeExpression.readonly_of(self.parse(inner), text)

        if node_type == "function_type":
            params = self.parse_parameters(node.child_by_field_name("parameters"))
            return_node = node.child_by_field_name("return_type")
            return_type = self.parse(return_node) if return_node is not None else ANY_TYPE
            return TypeExpression.function_of(tuple(params), return_type, text)

        if node_type == "index_type_query":
            raise self._unsupported("Unsupported keyof operator", node)

        raise self._unsupported(f"Unsupported type construct '{node_type}'", node)

    def parse_parameters(self, params_node: Optional[ts.Node]) -> List[Parameter]:
        """Parse a formal_parameters node

        `this` pseudo-parameters are dropped. Parameters without a type
        annotation are implicitly `any`.

        Args:
            params_node: formal_parameters node (None means no parameters)

        Returns:
            Ordered list of Parameter
        """
        params: List[Parameter] = []
        if params_node is None:
            return params

        for child in iter_named(params_node):
            if child.type not in ("required_parameter", "optional_parameter"):
                raise self._unsupported("Unsupported parameter", child)

            pattern = child.child_by_field_name("pattern") or child.child_by_field_name("name")
            if pattern is None:
                raise MalformedNodeError("Parameter without a name",
                                         source=node_text(child), line=line_of(child))
            if pattern.type == "this":
                continue
            if pattern.type != "identifier":
                raise self._unsupported("Unsupported parameter pattern", pattern)

            type_node = child.child_by_field_name("type")
            param_type = self.parse(type_node) if type_node is not None else ANY_TYPE
            params.append(Parameter(node_text(pattern), param_type,
                                    optional=child.type == "optional_parameter"))

        return params

    def _parse_union(self, node: ts.Node, readonly_node: Optional[ts.Node] = None) -> TypeExpression:
        """Parse a union_type node

        Args:
            node: union_type node
            readonly_node: Enclosing readonly_type whose operator applies
                           to the first branch only
        """
        outer = readonly_node if readonly_node is not None else node
        text = node_text(outer)
        branches = self._union_branches(node)
        if len(branches) != 2:
            raise self._unsupported(f"Unsupported union of {len(branches)} types", outer)

        first_node, second_node = branches
        first = self.parse(first_node)
        if readonly_node is not None:
            first = TypeExpression.readonly_of(first, f"readonly {node_text(first_node)}")
        if node_text(second_node) in ABSENT_MARKERS:
            return TypeExpression.optional_of(first, text)
        return TypeExpression.union_of(first, self.parse(second_node), text)

    def _union_branches(self, node: ts.Node) -> List[ts.Node]:
        """Flatten the left-nested union_type chain into its branches"""
        branches: List[ts.Node] = []
        for child in iter_named(node):
            if child.type == "union_type":
                branches.extend(self._union_branches(child))
            else:
                branches.append(child)
        return branches

    @staticmethod
    def _unsupported(message: str, node: ts.Node) -> UnsupportedConstructError:
        return UnsupportedConstructError(message, source=node_text(node), line=line_of(node))


class TypeMapper:
    """Spells TypeExpression values as Rust types

    Usage:
        mapper = TypeMapper()
        mapper.map_type(TypeExpression.array_of(
            TypeExpression.primitive_of(PrimitiveKind.STRING)))
        # 'Vec<String>'
    """

    def __init__(self, registry: Optional[TargetTypeRegistry] = None) -> None:
        """Initialize type mapper

        Args:
            registry: TargetTypeRegistry for primitive and named spellings
                      (default: None creates a registry with defaults)
        """
        self._registry = registry if registry is not None else TargetTypeRegistry()

    def map_type(self, expr: TypeExpression) -> str:
        """Map a TypeExpression to Rust type syntax

        Args:
            expr: Type expression

        Returns:
            Rust type as string

        Raises:
            UnsupportedConstructError: For unions other than `T | undefined`
                and `readonly T | U`, and for a bare readonly operator
        """
        kind = expr.kind

        if kind == TypeKind.PRIMITIVE:
            return self._registry.primitive(expr.primitive)
        elif kind == TypeKind.NAMED:
            name = self._registry.name(expr.name)
            if not expr.subtypes:
                return name
            args = ", ".join(self.map_type(arg) for arg in expr.subtypes)
            return f"{name}<{args}>"
        elif kind == TypeKind.ARRAY:
            return f"Vec<{self.map_type(expr.element)}>"
        elif kind == TypeKind.TUPLE:
            elements = [self.map_type(el) for el in expr.subtypes]
            if len(elements) == 1:
                return f"({elements[0]},)"
            return f"({', '.join(elements)})"
        elif kind == TypeKind.OPTIONAL:
            return f"Option<{self.map_type(expr.element)}>"
        elif kind == TypeKind.UNION:
            first = expr.subtypes[0]
            if first.kind == TypeKind.READONLY:
                return f"&{self.map_type(first.element)}"
            raise UnsupportedConstructError("Unsupported union", source=expr.source)
        elif kind == TypeKind.READONLY:
            raise UnsupportedConstructError("Unsupported readonly operator outside a union",
                                            source=expr.source)
        elif kind == TypeKind.FUNCTION:
            params = ", ".join(self.map_parameter(param) for param in expr.params)
            return f"Box<dyn Fn({params}) -> {self.map_type(expr.return_type)}>"

        raise UnsupportedConstructError(f"Unsupported type kind {kind}", source=expr.source)

    def map_parameter(self, param: Parameter) -> str:
        """Map a parameter's type; optional parameters are always Option-wrapped"""
        rust_type = self.map_type(param.type)
        if param.optional:
            return f"Option<{rust_type}>"
        return rust_type
