"""Tests for the tree-sitter front end"""

import pytest

from dts2rs.core.errors import (
    DeclarationSyntaxError,
    MissingSourceFileError,
    NotADeclarationFileError,
)
from dts2rs.core.frontend import (
    DeclKind,
    classify,
    is_declaration_file,
    iter_named,
    line_of,
    node_text,
    parse_file,
    parse_source,
    unwrap_statement,
)


def first_statement(source):
    tree = parse_source(source)
    return next(iter_named(tree.root_node))


class TestParseFile:
    """Test suite for parse_file"""

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.d.ts"

        with pytest.raises(MissingSourceFileError) as excinfo:
            parse_file(missing)

        assert str(missing) in str(excinfo.value)

    def test_missing_file_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.d.ts")

    def test_not_a_declaration_file(self, tmp_path):
        source = tmp_path / "index.ts"
        source.write_text("export function f(): void {}\n")

        with pytest.raises(NotADeclarationFileError):
            parse_file(source)

    def test_parses_declaration_file(self, tmp_path):
        source = tmp_path / "index.d.ts"
        source.write_text('declare module "m" {}\n')

        tree = parse_file(source)

        assert tree.root_node.type == "program"

    def test_syntax_error(self):
        with pytest.raises(DeclarationSyntaxError) as excinfo:
            parse_source('declare module "m" { export function f(x: number): void;')

        assert excinfo.value.line == 1

    @pytest.mark.parametrize("name,expected", [
        ("index.d.ts", True),
        ("index.d.mts", True),
        ("index.d.cts", True),
        ("index.ts", False),
        ("index.d.js", False),
    ])
    def test_is_declaration_file(self, tmp_path, name, expected):
        assert is_declaration_file(tmp_path / name) is expected


class TestClassify:
    """Test suite for unwrap_statement and classify"""

    @pytest.mark.parametrize("source,kind", [
        ('declare module "m" {}', DeclKind.MODULE),
        ("declare namespace ns {}", DeclKind.MODULE),
        ("declare function f(): void;", DeclKind.FUNCTION),
        ("export declare function f(): void;", DeclKind.FUNCTION),
        ("declare class C {}", DeclKind.CLASS),
        ("export interface I {}", DeclKind.INTERFACE),
        ("declare enum E { A }", DeclKind.ENUM),
        ("type T = string;", DeclKind.TYPE_ALIAS),
        ("declare const x: number;", DeclKind.VARIABLE),
        ("import * as fs from 'fs';", DeclKind.OTHER),
    ])
    def test_classify(self, source, kind):
        statement = first_statement(source)
        assert classify(unwrap_statement(statement)) == kind

    def test_comment(self):
        tree = parse_source("/** doc */\n")
        comment = next(iter_named(tree.root_node, skip_comments=False))
        assert classify(comment) == DeclKind.COMMENT

    def test_unwrap_keeps_plain_declaration(self):
        statement = first_statement("interface I {}")
        assert unwrap_statement(statement) is not None
        assert unwrap_statement(statement).type == "interface_declaration"

    def test_node_text_and_line(self):
        tree = parse_source("\n\ndeclare const x: number;")
        statement = next(iter_named(tree.root_node))
        assert node_text(statement).startswith("declare const x")
        assert line_of(statement) == 3

    def test_node_text_none(self):
        assert node_text(None) == ""
