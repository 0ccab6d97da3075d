"""dts2rs.generators package

Code generators for translating the Module IR to Rust output.
"""

from .code_writer import CodeWriter
from .doc_comments import extract_doc, reformat_doc
from .rust_emitter import RustEmitter, HEADER_DIRECTIVE
from .type_mapper import TypeExpressionParser, TypeMapper

__all__ = [
    "CodeWriter",
    "extract_doc",
    "reformat_doc",
    "RustEmitter",
    "HEADER_DIRECTIVE",
    "TypeExpressionParser",
    "TypeMapper",
]
