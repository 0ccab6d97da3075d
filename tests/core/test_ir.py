"""Tests for the Module IR and overload merging"""

import pytest

from dts2rs.core.errors import MergeConflictError
from dts2rs.core.ir import ClassDecl, InterfaceDecl, Module, OverloadSet, Property, Signature
from dts2rs.core.type_system import Parameter, PrimitiveKind, TypeExpression

NUMBER = TypeExpression.primitive_of(PrimitiveKind.NUMBER)
VOID = TypeExpression.primitive_of(PrimitiveKind.VOID)


def make_signature(name, *param_names, line=None):
    params = [Parameter(p, NUMBER) for p in param_names]
    return Signature(name, params, VOID, line=line)


class TestOverloadSet:
    """Test suite for OverloadSet"""

    def test_merge_appends_in_order(self):
        first = make_signature("move", "x", "y")
        second = make_signature("move", "p")
        overloads = OverloadSet("move", [first])

        overloads.merge(second)

        assert overloads.signatures == [first, second]

    def test_merge_conflict(self):
        """Test that merging a differently named signature fails"""
        overloads = OverloadSet("move", [make_signature("move")])

        with pytest.raises(MergeConflictError) as excinfo:
            overloads.merge(make_signature("resize", line=7))

        assert excinfo.value.source == "resize"
        assert excinfo.value.line == 7
        assert len(overloads.signatures) == 1

    def test_binding_names_single(self):
        overloads = OverloadSet("dispose", [make_signature("dispose")])
        assert overloads.binding_names() == ["dispose_1"]

    def test_binding_names_are_ordinal_suffixed(self):
        overloads = OverloadSet("move", [make_signature("move") for _ in range(3)])
        assert overloads.binding_names() == ["move_1", "move_2", "move_3"]

    def test_binding_names_sanitized(self):
        overloads = OverloadSet("$emit", [make_signature("$emit")])
        assert overloads.binding_names() == ["_emit_1"]


class TestModule:
    """Test suite for Module"""

    def test_add_signature_creates_set(self):
        module = Module("vscode")
        overloads = module.add_signature(make_signature("move"), "Move it")

        assert list(module.functions) == ["move"]
        assert overloads.doc == "Move it"

    def test_add_signature_merges_and_keeps_first_doc(self):
        module = Module("vscode")
        module.add_signature(make_signature("move", "x"), "first")
        module.add_signature(make_signature("move", "p"), "second")

        overloads = module.functions["move"]
        assert len(overloads.signatures) == 2
        assert overloads.doc == "first"

    def test_function_order_is_first_seen(self):
        module = Module("m")
        for name in ["b", "a", "b", "c", "a"]:
            module.add_signature(make_signature(name))

        assert list(module.functions) == ["b", "a", "c"]
        assert [len(s.signatures) for s in module.functions.values()] == [2, 2, 1]

    def test_rust_name(self):
        assert Module("vscode").rust_name == "vscode"
        assert Module("@scope/pkg").rust_name == "scope_pkg"

    def test_sanitized_name_collision(self):
        module = Module("m")
        module.add_signature(make_signature("a$b", line=2))

        with pytest.raises(MergeConflictError) as excinfo:
            module.add_signature(make_signature("a_b", line=3))

        assert excinfo.value.source == "a_b"
        assert excinfo.value.line == 3
        assert "a$b" in str(excinfo.value)
        assert list(module.functions) == ["a$b"]

    def test_add_module_merges_same_name(self):
        parent = Module("m")
        first = Module("a", doc="")
        first.add_signature(make_signature("f"))
        second = Module("a", doc="Docs.")
        second.add_signature(make_signature("f", "x"))
        second.add_signature(make_signature("g"))

        parent.add_module(first)
        merged = parent.add_module(second)

        assert merged is first
        assert [m.name for m in parent.modules] == ["a"]
        assert [len(o.signatures) for o in first.functions.values()] == [2, 1]
        assert first.doc == "Docs."

    def test_add_module_merges_nested_children(self):
        parent = Module("m")
        first = Module("a")
        first.add_module(Module("b"))
        second = Module("a")
        inner = Module("b")
        inner.add_signature(make_signature("f"))
        second.add_module(inner)

        parent.add_module(first)
        parent.add_module(second)

        assert [m.name for m in first.modules] == ["b"]
        assert "f" in first.modules[0].functions

    def test_module_rust_name_collision(self):
        parent = Module("m")
        parent.add_module(Module("a-b"))

        with pytest.raises(MergeConflictError):
            parent.add_module(Module("a_b"))

    def test_interface_merges_into_class(self):
        module = Module("m")
        point = ClassDecl("Point")
        point.add_method(make_signature("move"))
        extra = InterfaceDecl("Point", doc="Merged.")
        extra.add_method(make_signature("move", "x"))

        module.add_type(point)
        module.add_type(extra)

        assert module.classes == [point]
        assert module.interfaces == []
        assert len(point.methods["move"].signatures) == 2
        assert point.doc == "Merged."


class TestTypeDecl:
    """Test suite for class and interface members"""

    def test_static_and_instance_methods_share_names(self):
        decl = ClassDecl("Point")
        decl.add_method(make_signature("from"), static=True)

        with pytest.raises(MergeConflictError):
            decl.add_method(make_signature("from"))

    def test_property_name_collision(self):
        decl = InterfaceDecl("Options")
        decl.add_property(Property("a$b", NUMBER))

        with pytest.raises(MergeConflictError):
            decl.add_property(Property("a_b", NUMBER))

    def test_setter_widens_readonly_property(self):
        decl = ClassDecl("Point")
        decl.add_property(Property("x", NUMBER, readonly=True))
        decl.add_property(Property("x", NUMBER, readonly=False))

        assert len(decl.properties) == 1
        assert not decl.properties[0].readonly

    def test_constructor_overloads(self):
        decl = ClassDecl("Point")
        decl.add_constructor(make_signature("constructor", "x", "y"))
        decl.add_constructor(make_signature("constructor"))

        assert len(decl.constructors["constructor"].signatures) == 2
