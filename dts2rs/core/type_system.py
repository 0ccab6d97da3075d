"""Type system for TypeScript to Rust binding translation

Defines the TypeKind tag, PrimitiveKind, and the TypeExpression dataclass
describing the supported subset of TypeScript type syntax.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


class TypeKind(Enum):
    """Closed set of supported type expression shapes"""

    PRIMITIVE = 0
    NAMED = 1
    ARRAY = 2
    TUPLE = 3
    UNION = 4     # exactly two branches
    OPTIONAL = 5  # two-branch union whose second branch is undefined/null
    READONLY = 6  # readonly operator, only mapped as first union branch
    FUNCTION = 7


class PrimitiveKind(Enum):
    """Built-in TypeScript types with a direct Rust counterpart"""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    VOID = "void"
    ANY = "any"


@dataclass(frozen=True)
class Parameter:
    """Function parameter: name, declared type and optional marker"""

    name: str
    type: 'TypeExpression'
    optional: bool = False


@dataclass(frozen=True)
class TypeExpression:
    """A TypeScript type expression

    Attributes:
        kind: Variant tag
        source: Original source text (used in diagnostics)
        primitive: Primitive kind (PRIMITIVE only)
        name: Referenced identifier (NAMED only)
        subtypes: Type arguments (NAMED), element (ARRAY, OPTIONAL,
                  READONLY), elements (TUPLE), branches (UNION) or
                  the return type (FUNCTION)
        params: Parameters (FUNCTION only)
    """

    kind: TypeKind
    source: str = ""
    primitive: Optional[PrimitiveKind] = None
    name: str = ""
    subtypes: Tuple['TypeExpression', ...] = ()
    params: Tuple[Parameter, ...] = ()

    @classmethod
    def primitive_of(cls, primitive: PrimitiveKind, source: str = "") -> 'TypeExpression':
        return cls(TypeKind.PRIMITIVE, source=source or primitive.value, primitive=primitive)

    @classmethod
    def named(cls, name: str, args: Tuple['TypeExpression', ...] = (),
              source: str = "") -> 'TypeExpression':
        return cls(TypeKind.NAMED, source=source or name, name=name, subtypes=tuple(args))

    @classmethod
    def array_of(cls, element: 'TypeExpression', source: str = "") -> 'TypeExpression':
        return cls(TypeKind.ARRAY, source=source, subtypes=(element,))

    @classmethod
    def tuple_of(cls, elements: Tuple['TypeExpression', ...], source: str = "") -> 'TypeExpression':
        return cls(TypeKind.TUPLE, source=source, subtypes=tuple(elements))

    @classmethod
    def union_of(cls, first: 'TypeExpression', second: 'TypeExpression',
                 source: str = "") -> 'TypeExpression':
        return cls(TypeKind.UNION, source=source, subtypes=(first, second))

    @classmethod
    def optional_of(cls, inner: 'TypeExpression', source: str = "") -> 'TypeExpression':
        return cls(TypeKind.OPTIONAL, source=source, subtypes=(inner,))

    @classmethod
    def readonly_of(cls, inner: 'TypeExpression', source: str = "") -> 'TypeExpression':
        return cls(TypeKind.READONLY, source=source, subtypes=(inner,))

    @classmethod
    def function_of(cls, params: Tuple[Parameter, ...], return_type: 'TypeExpression',
                    source: str = "") -> 'TypeExpression':
        return cls(TypeKind.FUNCTION, source=source, subtypes=(return_type,), params=tuple(params))

    @property
    def element(self) -> 'TypeExpression':
        """Single inner type of ARRAY, OPTIONAL and READONLY expressions"""
        return self.subtypes[0]

    @property
    def return_type(self) -> 'TypeExpression':
        """Return type of a FUNCTION expression"""
        return self.subtypes[0]

    def referenced_names(self) -> Iterator[str]:
        """Yield every type name referenced anywhere inside this expression"""
        if self.kind == TypeKind.NAMED:
            yield self.name
        for subtype in self.subtypes:
            yield from subtype.referenced_names()
        for param in self.params:
            yield from param.type.referenced_names()


ANY_TYPE = TypeExpression.primitive_of(PrimitiveKind.ANY)
