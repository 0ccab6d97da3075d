"""Enum translation for dts2rs

Member names are capitalized; initializers are kept as verbatim source
text and never evaluated.
"""

import tree_sitter as ts

from dts2rs.core.errors import MalformedNodeError
from dts2rs.core.frontend import iter_named, line_of, node_text
from dts2rs.core.ir import EnumDecl, EnumMember


def capitalize_member(name: str) -> str:
    """Upper-case the first character, leaving the rest unchanged

    Quoted member names ('data-ready') are unquoted first.
    """
    name = name.strip("'\"")
    return name[:1].upper() + name[1:]


def translate_enum(node: ts.Node, doc: str = "") -> EnumDecl:
    """Translate an enum_declaration node

    Args:
        node: enum_declaration node
        doc: Raw doc comment attached to the declaration

    Returns:
        EnumDecl with capitalized members in source order

    Raises:
        MalformedNodeError: If the enum has no name or no body
    """
    name_node = node.child_by_field_name("name")
    if name_node is None:
        raise MalformedNodeError("Enum without a name", source=node_text(node), line=line_of(node))

    body = node.child_by_field_name("body")
    if body is None:
        body = next((c for c in node.children if c.type == "enum_body"), None)
    if body is None:
        raise MalformedNodeError("Enum without a body", source=node_text(name_node), line=line_of(node))

    enum = EnumDecl(node_text(name_node), doc=doc, line=line_of(node))
    for member in iter_named(body):
        if member.type == "enum_assignment":
            member_name = member.child_by_field_name("name") or next(iter_named(member), None)
            if member_name is None:
                raise MalformedNodeError("Enum member without a name",
                                         source=node_text(member), line=line_of(member))
            value = member.child_by_field_name("value")
            enum.members.append(EnumMember(
                capitalize_member(node_text(member_name)),
                node_text(value) if value is not None else None,
            ))
        else:
            enum.members.append(EnumMember(capitalize_member(node_text(member))))
    return enum
