"""Doc comment extraction and reformatting

JSDoc blocks (/** ... */) written immediately before a declaration are
collected and re-emitted as Rust `///` doc comments.
"""

from typing import List

import tree_sitter as ts

from dts2rs.core.frontend import node_text

DOC_MARKER = "///"


def extract_doc(node: ts.Node) -> str:
    """Collect the documentation attached to a statement

    Walks backwards over the comment siblings directly preceding the
    node. Plain `//` and `/* */` comments are passed over; any other
    node ends the scan.

    Args:
        node: Statement node (the outermost wrapper, e.g. export_statement)

    Returns:
        Doc text of all JSDoc blocks in source order, newline-joined;
        empty string if there are none
    """
    blocks: List[str] = []
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == "comment":
        text = node_text(sibling)
        if text.startswith("/**") and text != "/**/":
            block = _strip_doc_block(text)
            if block:
                blocks.append(block)
        sibling = sibling.prev_named_sibling
    blocks.reverse()
    return "\n".join(blocks)


def _strip_doc_block(text: str) -> str:
    """Remove /** */ delimiters and leading `*` gutters from a JSDoc block"""
    body = text[3:]
    if body.endswith("*/"):
        body = body[:-2]

    lines = []
    for raw in body.splitlines():
        line = raw.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def reformat_doc(text: str, marker: str = DOC_MARKER) -> str:
    """Prefix every line of doc text with the Rust doc marker

    Args:
        text: Raw doc text, possibly multi-line
        marker: Doc comment marker

    Returns:
        One marker-prefixed line per input line; empty string for empty input
    """
    if not text:
        return ""
    return "\n".join(f"{marker} {line}" if line else marker for line in text.split("\n"))
