"""Tests for class and interface member translation"""

import pytest

from dts2rs.builders.module_builder import ModuleBuilder
from dts2rs.core.errors import UnsupportedConstructError
from dts2rs.core.frontend import parse_source
from dts2rs.core.target_types import TargetTypeRegistry
from dts2rs.core.translation_logger import SkipKind, TranslationLogger
from dts2rs.core.type_system import PrimitiveKind, TypeKind


def build_types(body, logger=None, registry=None):
    """Build a module holding body and return its classes and interfaces"""
    source = f'declare module "m" {{\n{body}\n}}'
    module = ModuleBuilder(logger, registry=registry).build_root(parse_source(source))[0]
    return {decl.name: decl for decl in [*module.classes, *module.interfaces]}


class TestClassMembers:
    """Test suite for class member binding"""

    def test_constructor_returns_class(self):
        point = build_types("export class Point { constructor(x: number, y: number); }")["Point"]
        signature = point.constructors["constructor"].signatures[0]
        assert [p.name for p in signature.parameters] == ["x", "y"]
        assert signature.return_type.kind == TypeKind.NAMED
        assert signature.return_type.name == "Point"

    def test_properties(self):
        point = build_types('''export class Point {
    readonly x: number;
    label?: string;
}''')["Point"]
        x, label = point.properties
        assert x.readonly and not x.optional
        assert x.type.primitive == PrimitiveKind.NUMBER
        assert label.optional and not label.readonly

    def test_method_overloads(self):
        point = build_types('''export class Point {
    /** Move it. */
    move(dx: number): void;
    move(p: Point): void;
}''')["Point"]
        overloads = point.methods["move"]
        assert len(overloads.signatures) == 2
        assert overloads.doc == "Move it."

    def test_static_method(self):
        point = build_types("export class Point { static origin(): Point; }")["Point"]
        assert list(point.static_methods) == ["origin"]
        assert point.methods == {}

    def test_accessors_become_property(self):
        point = build_types('''export class Point {
    get x(): number;
    set x(value: number);
}''')["Point"]
        assert [p.name for p in point.properties] == ["x"]
        assert not point.properties[0].readonly

    def test_getter_only_is_readonly(self):
        point = build_types("export class Point { get x(): number; }")["Point"]
        assert point.properties[0].readonly

    def test_private_members_skipped(self):
        logger = TranslationLogger()
        point = build_types('''export class Point {
    private secret: string;
    protected helper(): void;
}''', logger)["Point"]
        assert point.properties == []
        assert point.methods == {}
        assert [s.kind for s in logger.skipped] == [SkipKind.UNTRANSLATED_MEMBER] * 2
        assert logger.skipped[0].symbol == "Point.secret"

    def test_static_property_skipped(self):
        logger = TranslationLogger()
        point = build_types("export class Point { static count: number; }", logger)["Point"]
        assert point.properties == []
        assert logger.skipped[0].symbol == "Point.count"

    def test_untyped_property_is_any(self):
        point = build_types("export class Point { tag; }")["Point"]
        assert point.properties[0].type.primitive == PrimitiveKind.ANY


class TestInterfaceMembers:
    """Test suite for interface member binding"""

    def test_properties_and_methods(self):
        options = build_types('''export interface Options {
    /** The title. */
    title: string;
    modal?: boolean;
    dispose(): void;
}''')["Options"]
        assert [p.name for p in options.properties] == ["title", "modal"]
        assert options.properties[0].doc == "The title."
        assert options.properties[1].optional
        assert list(options.methods) == ["dispose"]

    def test_index_signature_skipped(self):
        logger = TranslationLogger()
        table = build_types("export interface Table { [key: string]: number; }", logger)["Table"]
        assert table.properties == []
        assert logger.skipped[0].kind == SkipKind.UNTRANSLATED_MEMBER

    def test_interface_declarations_merged(self):
        types = build_types('''export interface Options { title: string; }
export interface Options { modal: boolean; }''')
        assert [p.name for p in types["Options"].properties] == ["title", "modal"]


class TestGenericMembers:
    """Test suite for generic type parameters on members"""

    def test_class_parameter_in_member_unsupported(self):
        with pytest.raises(UnsupportedConstructError):
            build_types("export class Box<T> { value: T; }")

    def test_method_parameter_in_member_unsupported(self):
        with pytest.raises(UnsupportedConstructError):
            build_types("export class Box { map<U>(f: (x: number) => U): U; }")

    def test_generic_class_without_generic_members(self):
        box = build_types("export class Box<T> { size: number; }")["Box"]
        assert [p.name for p in box.properties] == ["size"]

    def test_substituted_class_parameter(self):
        registry = TargetTypeRegistry()
        registry.register("T", "JsValue")
        box = build_types("export class Box<T> { value: T; }", registry=registry)["Box"]
        assert box.properties[0].type.name == "T"
