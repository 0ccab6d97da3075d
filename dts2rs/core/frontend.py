"""TypeScript front end for dts2rs

Thin wrapper around tree-sitter and the tree-sitter-typescript grammar.
Exposes file parsing, declaration-kind classification and a few
structural accessors. The rest of the package never touches the parser
directly.
"""

from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter as ts
import tree_sitter_typescript as tsts

from dts2rs.core.errors import (
    DeclarationSyntaxError,
    MissingSourceFileError,
    NotADeclarationFileError,
)

TS_LANGUAGE = ts.Language(tsts.language_typescript())
_parser: Optional[ts.Parser] = None

DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


class DeclKind(Enum):
    """Closed set of declaration kinds found in a module body"""

    MODULE = "module"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    TYPE_ALIAS = "type_alias"
    VARIABLE = "variable"
    COMMENT = "comment"
    OTHER = "other"


_KIND_BY_NODE_TYPE = {
    "module": DeclKind.MODULE,
    "internal_module": DeclKind.MODULE,
    "function_signature": DeclKind.FUNCTION,
    "function_declaration": DeclKind.FUNCTION,
    "class_declaration": DeclKind.CLASS,
    "abstract_class_declaration": DeclKind.CLASS,
    "interface_declaration": DeclKind.INTERFACE,
    "enum_declaration": DeclKind.ENUM,
    "type_alias_declaration": DeclKind.TYPE_ALIAS,
    "lexical_declaration": DeclKind.VARIABLE,
    "variable_declaration": DeclKind.VARIABLE,
    "comment": DeclKind.COMMENT,
}


def _get_parser() -> ts.Parser:
    global _parser
    if _parser is None:
        _parser = ts.Parser(TS_LANGUAGE)
    return _parser


def is_declaration_file(path: Path) -> bool:
    return path.name.endswith(DECLARATION_SUFFIXES)


def parse_source(source: str) -> ts.Tree:
    """Parse declaration file text

    Args:
        source: TypeScript declaration source

    Returns:
        tree-sitter syntax tree

    Raises:
        DeclarationSyntaxError: If the grammar reports an error or missing node
    """
    tree = _get_parser().parse(source.encode("utf-8"))
    error = first_error(tree.root_node)
    if error is not None:
        what = "Missing token" if error.is_missing else "Syntax error"
        raise DeclarationSyntaxError(what, source=node_text(error) or error.type,
                                     line=line_of(error))
    return tree


def parse_file(path: Path) -> ts.Tree:
    """Parse a declaration file from disk

    Args:
        path: Path to a .d.ts file

    Returns:
        tree-sitter syntax tree

    Raises:
        MissingSourceFileError: If the path does not exist
        NotADeclarationFileError: If the path is not a declaration file
        DeclarationSyntaxError: If the file does not parse
    """
    path = Path(path)
    if not path.is_file():
        raise MissingSourceFileError("Source file not found", source=str(path))
    if not is_declaration_file(path):
        raise NotADeclarationFileError("Source file is not a declaration file", source=str(path))
    return parse_source(path.read_text(encoding="utf-8"))


def first_error(node: ts.Node) -> Optional[ts.Node]:
    """Return the first ERROR or MISSING node below node, if any"""
    if not node.has_error:
        return None
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        found = first_error(child)
        if found is not None:
            return found
    return node


def unwrap_statement(node: ts.Node) -> ts.Node:
    """Strip export/declare/expression-statement wrappers off a statement

    `export declare function f(): void;` yields the function_signature node.
    """
    while True:
        if node.type == "export_statement":
            inner = node.child_by_field_name("declaration")
        elif node.type in ("ambient_declaration", "expression_statement"):
            inner = next(iter_named(node), None)
        else:
            return node
        if inner is None:
            return node
        node = inner


def classify(node: ts.Node) -> DeclKind:
    """Classify an unwrapped statement node"""
    return _KIND_BY_NODE_TYPE.get(node.type, DeclKind.OTHER)


def iter_named(node: ts.Node, skip_comments: bool = True) -> Iterator[ts.Node]:
    """Iterate named children, optionally skipping comments"""
    for child in node.named_children:
        if skip_comments and child.type == "comment":
            continue
        yield child


def node_text(node: Optional[ts.Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def line_of(node: ts.Node) -> int:
    """1-based line of the node's first character"""
    return node.start_point[0] + 1
