"""Intermediate representation for dts2rs

A Module tree is built once by ModuleBuilder, top-down, and consumed
once by RustEmitter. Only overload accumulation and declaration merging
mutate it, and only while the tree is being built.

Every name that becomes a Rust identifier is checked against the names
already claimed in the same scope: two TypeScript names that sanitize to
the same identifier raise MergeConflictError.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from dts2rs.core.errors import MergeConflictError
from dts2rs.core.type_system import Parameter, TypeExpression
from dts2rs.core.naming import NamingScheme


def check_rust_name(claimed: Iterable[str], name: str, rust_name: str, convert,
                    line: Optional[int] = None) -> None:
    """Fail if another claimed name converts to the same Rust identifier

    Args:
        claimed: Source names already present in the scope
        name: New source name
        rust_name: Rust identifier of the new name
        convert: NamingScheme function applied to the claimed names
        line: Source line of the new declaration

    Raises:
        MergeConflictError: If a different source name maps to rust_name
    """
    for other in claimed:
        if other != name and convert(other) == rust_name:
            raise MergeConflictError(
                f"'{name}' and '{other}' both map to the Rust name '{rust_name}'",
                source=name,
                line=line,
            )


@dataclass
class Signature:
    """One declared call shape of a function"""

    name: str
    parameters: List[Parameter]
    return_type: TypeExpression
    line: Optional[int] = None


@dataclass
class OverloadSet:
    """All signatures declared under one function name

    Signatures keep first-seen order. The doc comment comes from the
    first declaration.
    """

    name: str
    signatures: List[Signature] = field(default_factory=list)
    doc: str = ""

    def merge(self, signature: Signature) -> None:
        """Append a signature to this set

        Args:
            signature: Signature declared under the same name

        Raises:
            MergeConflictError: If the signature belongs to another function
        """
        if signature.name != self.name:
            raise MergeConflictError(
                f"Cannot merge signature of '{signature.name}' into overloads of '{self.name}'",
                source=signature.name,
                line=signature.line,
            )
        self.signatures.append(signature)

    def binding_names(self) -> List[str]:
        """Rust identifiers for each signature, suffixed with 1-based ordinals"""
        base = NamingScheme.function_name(self.name)
        return [f"{base}_{index}" for index in range(1, len(self.signatures) + 1)]


def add_overload(table: Dict[str, OverloadSet], signature: Signature, doc: str = "",
                 claimed: Iterable[str] = ()) -> OverloadSet:
    """Start a new overload set in table or merge into the existing one

    Args:
        table: Overload sets keyed by source name, in first-seen order
        signature: Parsed signature
        doc: Raw doc comment of this declaration
        claimed: Further source names sharing the binding namespace

    Returns:
        The overload set holding the signature

    Raises:
        MergeConflictError: If a new name collides with an existing binding stem
    """
    overloads = table.get(signature.name)
    if overloads is None:
        check_rust_name([*table, *claimed], signature.name,
                        NamingScheme.function_name(signature.name),
                        NamingScheme.function_name, signature.line)
        overloads = OverloadSet(signature.name, [signature], doc)
        table[signature.name] = overloads
    else:
        overloads.merge(signature)
    return overloads


@dataclass
class Property:
    """Instance property of a class or interface

    A readonly property gets a getter only.
    """

    name: str
    type: TypeExpression
    optional: bool = False
    readonly: bool = False
    doc: str = ""
    line: Optional[int] = None


@dataclass
class TypeDecl:
    """Common shape of classes and interfaces: an opaque imported type
    with bound members"""

    name: str
    doc: str = ""
    line: Optional[int] = None
    constructors: Dict[str, OverloadSet] = field(default_factory=dict)
    properties: List[Property] = field(default_factory=list)
    methods: Dict[str, OverloadSet] = field(default_factory=dict)
    static_methods: Dict[str, OverloadSet] = field(default_factory=dict)

    def add_constructor(self, signature: Signature, doc: str = "") -> OverloadSet:
        return add_overload(self.constructors, signature, doc)

    def add_method(self, signature: Signature, doc: str = "", static: bool = False) -> OverloadSet:
        """Add a method overload; static and instance methods share one namespace"""
        if static:
            return add_overload(self.static_methods, signature, doc, claimed=self.methods)
        return add_overload(self.methods, signature, doc, claimed=self.static_methods)

    def add_property(self, prop: Property) -> Property:
        """Add a property, or widen an existing one of the same name

        A second declaration (e.g. a `set` accessor after a `get`) makes
        the property writable.
        """
        for existing in self.properties:
            if existing.name == prop.name:
                existing.readonly = existing.readonly and prop.readonly
                return existing
        check_rust_name([p.name for p in self.properties], prop.name,
                        NamingScheme.parameter_name(prop.name),
                        NamingScheme.parameter_name, prop.line)
        self.properties.append(prop)
        return prop

    def absorb(self, other: 'TypeDecl') -> None:
        """Merge the members of another declaration of the same type"""
        if not self.doc:
            self.doc = other.doc
        for overloads in other.constructors.values():
            for signature in overloads.signatures:
                self.add_constructor(signature, overloads.doc)
        for prop in other.properties:
            self.add_property(prop)
        for overloads in other.methods.values():
            for signature in overloads.signatures:
                self.add_method(signature, overloads.doc)
        for overloads in other.static_methods.values():
            for signature in overloads.signatures:
                self.add_method(signature, overloads.doc, static=True)


@dataclass
class ClassDecl(TypeDecl):
    pass


@dataclass
class InterfaceDecl(TypeDecl):
    pass


@dataclass
class EnumMember:
    name: str
    value: Optional[str] = None


@dataclass
class EnumDecl:
    name: str
    doc: str = ""
    members: List[EnumMember] = field(default_factory=list)
    line: Optional[int] = None


@dataclass
class TypeAliasDecl:
    name: str
    source: str
    doc: str = ""
    line: Optional[int] = None


@dataclass
class VariableDecl:
    name: str
    type_source: str
    doc: str = ""
    line: Optional[int] = None


@dataclass
class Module:
    """A TypeScript module or namespace and everything declared in it

    Attributes:
        name: Source name, used verbatim as the wasm_bindgen link target
        doc: Raw doc comment text (not yet reformatted)
        functions: Overload sets keyed by function name, in first-seen order
        modules: Nested namespaces, in source order
    """

    name: str
    doc: str = ""
    variables: List[VariableDecl] = field(default_factory=list)
    functions: Dict[str, OverloadSet] = field(default_factory=dict)
    classes: List[ClassDecl] = field(default_factory=list)
    interfaces: List[InterfaceDecl] = field(default_factory=list)
    enums: List[EnumDecl] = field(default_factory=list)
    type_aliases: List[TypeAliasDecl] = field(default_factory=list)
    modules: List['Module'] = field(default_factory=list)

    @property
    def rust_name(self) -> str:
        return NamingScheme.module_name(self.name)

    def add_signature(self, signature: Signature, doc: str = "") -> OverloadSet:
        """Start a new overload set or merge into the existing one

        Args:
            signature: Parsed function signature
            doc: Raw doc comment of this declaration

        Returns:
            The overload set holding the signature

        Raises:
            MergeConflictError: If another function sanitizes to the same stem
        """
        return add_overload(self.functions, signature, doc)

    def find_type(self, name: str) -> Optional[TypeDecl]:
        for decl in [*self.classes, *self.interfaces]:
            if decl.name == name:
                return decl
        return None

    def add_type(self, decl: TypeDecl) -> TypeDecl:
        """Add a class or interface, merging same-named declarations

        TypeScript merges an interface into a class or interface of the
        same name; the merged members land on the first declaration.
        """
        existing = self.find_type(decl.name)
        if existing is not None:
            existing.absorb(decl)
            return existing
        if isinstance(decl, ClassDecl):
            self.classes.append(decl)
        else:
            self.interfaces.append(decl)
        return decl

    def add_module(self, child: 'Module') -> 'Module':
        """Add a child module, merging it into a same-named sibling

        Raises:
            MergeConflictError: If a differently named sibling has the
                same Rust module name
        """
        for existing in self.modules:
            if existing.name == child.name:
                existing.absorb(child)
                return existing
        check_rust_name([m.name for m in self.modules], child.name, child.rust_name,
                        NamingScheme.module_name)
        self.modules.append(child)
        return child

    def absorb(self, other: 'Module') -> None:
        """Merge a second declaration of this module into it"""
        if not self.doc:
            self.doc = other.doc
        self.variables.extend(other.variables)
        for overloads in other.functions.values():
            for signature in overloads.signatures:
                self.add_signature(signature, overloads.doc)
        for decl in [*other.classes, *other.interfaces]:
            self.add_type(decl)
        self.enums.extend(other.enums)
        self.type_aliases.extend(other.type_aliases)
        for child in other.modules:
            self.add_module(child)
