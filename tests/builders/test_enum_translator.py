"""Tests for enum translation"""

import pytest

from dts2rs.builders.enum_translator import capitalize_member, translate_enum
from dts2rs.core.frontend import parse_source, unwrap_statement
from dts2rs.core.ir import EnumMember


def enum_node(source):
    tree = parse_source(source)
    return unwrap_statement(tree.root_node.named_children[0])


class TestTranslateEnum:
    """Test suite for translate_enum"""

    def test_members_and_values(self):
        enum = translate_enum(enum_node("declare enum Color { Red, Green = 5 }"))
        assert enum.name == "Color"
        assert enum.members == [EnumMember("Red"), EnumMember("Green", "5")]

    def test_members_capitalized(self):
        enum = translate_enum(enum_node("declare enum Level { low, high = 1 << 2 }"))
        assert enum.members == [EnumMember("Low"), EnumMember("High", "1 << 2")]

    def test_string_initializer_verbatim(self):
        enum = translate_enum(enum_node('declare enum Mode { dark = "dark" }'))
        assert enum.members == [EnumMember("Dark", '"dark"')]

    def test_doc_and_line(self):
        enum = translate_enum(enum_node("\ndeclare enum E { A }"), doc="Docs.")
        assert enum.doc == "Docs."
        assert enum.line == 2

    def test_empty_enum(self):
        assert translate_enum(enum_node("declare enum E {}")).members == []


class TestCapitalizeMember:
    """Test suite for capitalize_member"""

    @pytest.mark.parametrize("name,expected", [
        ("red", "Red"),
        ("Red", "Red"),
        ("camelCase", "CamelCase"),
        ("'quoted'", "Quoted"),
        ("", ""),
    ])
    def test_capitalize(self, name, expected):
        assert capitalize_member(name) == expected
