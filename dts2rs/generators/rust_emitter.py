"""Rust emitter for dts2rs

Serializes a Module IR tree into nested `pub mod` blocks, each holding
one `#[wasm_bindgen] extern "C"` block.

Architecture:
- Depth-first, pre-order walk; child modules are emitted before the
  parent's own extern block
- Classes and interfaces become opaque imported types followed by their
  constructor, property accessor and method bindings
- Every overload signature becomes one binding named `<name>_<ordinal>`
  and linked back to the JavaScript name with js_name
- Enums, type aliases and variables are parsed but not emitted; each
  one is recorded in the TranslationLogger
"""

from typing import List, Optional

from dts2rs.core.ir import Module, OverloadSet, TypeDecl
from dts2rs.core.naming import NamingScheme
from dts2rs.core.translation_logger import SkipKind, TranslationLogger
from dts2rs.generators.code_writer import CodeWriter
from dts2rs.generators.doc_comments import DOC_MARKER, reformat_doc
from dts2rs.generators.type_mapper import TypeMapper

HEADER_DIRECTIVE = "use wasm_bindgen::prelude::*;"


def rust_string(text: str) -> str:
    """Quote text as a Rust string literal"""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class RustEmitter:
    """Emits wasm_bindgen binding modules from Module IR

    Usage:
        emitter = RustEmitter()
        buffer = io.StringIO()
        emitter.emit_file(modules, CodeWriter(buffer))
    """

    def __init__(self, mapper: Optional[TypeMapper] = None,
                 logger: Optional[TranslationLogger] = None,
                 doc_marker: str = DOC_MARKER) -> None:
        """Initialize Rust emitter

        Args:
            mapper: TypeMapper for parameter and return types
            logger: TranslationLogger receiving not-emitted declarations
            doc_marker: Prefix for doc comment lines
        """
        self.mapper = mapper if mapper is not None else TypeMapper()
        self.logger = logger if logger is not None else TranslationLogger()
        self._doc_marker = doc_marker

    def emit_file(self, modules: List[Module], writer: CodeWriter) -> None:
        """Emit the header directive followed by every root module

        Args:
            modules: Root modules in source order
            writer: Destination writer
        """
        writer.line(HEADER_DIRECTIVE)
        for module in modules:
            writer.line()
            self.emit_module(module, writer)

    def emit_module(self, module: Module, writer: CodeWriter) -> None:
        """Emit one module, its children and its extern block"""
        writer.lines(reformat_doc(module.doc, self._doc_marker))
        with writer.block(f"pub mod {module.rust_name} {{"):
            writer.line("use super::*;")
            for child in module.modules:
                writer.line()
                self.emit_module(child, writer)

            writer.line()
            writer.line(f"#[wasm_bindgen(module = {rust_string(module.name)})]")
            with writer.block('extern "C" {'):
                binding_count = self._emit_types(module, writer)
                for overloads in module.functions.values():
                    attribute = f"js_name = {rust_string(overloads.name)}"
                    binding_count += self._emit_overloads(overloads, attribute, writer)

        self._log_unemitted(module)
        self.logger.log_module(binding_count)

    def _emit_types(self, module: Module, writer: CodeWriter) -> int:
        count = 0
        for decl in [*module.classes, *module.interfaces]:
            writer.lines(reformat_doc(decl.doc, self._doc_marker))
            writer.line(f"pub type {decl.name};")
            count += self._emit_members(decl, writer)
        return count

    def _emit_members(self, decl: TypeDecl, writer: CodeWriter) -> int:
        """Emit constructors, property accessors, methods, then static methods"""
        receiver = f"this: &{decl.name}"
        count = 0
        for overloads in decl.constructors.values():
            names = [f"new_{index}" for index in range(1, len(overloads.signatures) + 1)]
            count += self._emit_overloads(overloads, "constructor", writer, names=names)

        for prop in decl.properties:
            rust_type = self.mapper.map_type(prop.type)
            if prop.optional:
                rust_type = f"Option<{rust_type}>"
            js_name = rust_string(prop.name)
            writer.lines(reformat_doc(prop.doc, self._doc_marker))
            writer.line(f"#[wasm_bindgen(method, getter, js_name = {js_name})]")
            writer.line(f"pub fn {NamingScheme.parameter_name(prop.name)}({receiver}) -> {rust_type};")
            count += 1
            if not prop.readonly:
                writer.line(f"#[wasm_bindgen(method, setter, js_name = {js_name})]")
                writer.line(f"pub fn set_{NamingScheme.function_name(prop.name)}({receiver}, value: {rust_type});")
                count += 1

        for overloads in decl.methods.values():
            attribute = f"method, js_name = {rust_string(overloads.name)}"
            count += self._emit_overloads(overloads, attribute, writer, receiver=receiver)
        for overloads in decl.static_methods.values():
            attribute = f"static_method_of = {decl.name}, js_name = {rust_string(overloads.name)}"
            count += self._emit_overloads(overloads, attribute, writer)
        return count

    def _emit_overloads(self, overloads: OverloadSet, attribute: str, writer: CodeWriter,
                        names: Optional[List[str]] = None,
                        receiver: Optional[str] = None) -> int:
        """Emit one binding per signature; the set's doc precedes the first

        Args:
            overloads: Overload set to emit
            attribute: Contents of the #[wasm_bindgen(...)] attribute
            writer: Destination writer
            names: Binding names (default: the set's ordinal-suffixed names)
            receiver: Leading `this` parameter of method bindings
        """
        writer.lines(reformat_doc(overloads.doc, self._doc_marker))
        names = names if names is not None else overloads.binding_names()
        for binding, signature in zip(names, overloads.signatures):
            params = [
                f"{NamingScheme.parameter_name(param.name)}: {self.mapper.map_parameter(param)}"
                for param in signature.parameters
            ]
            if receiver is not None:
                params.insert(0, receiver)
            return_type = self.mapper.map_type(signature.return_type)
            writer.line(f"#[wasm_bindgen({attribute})]")
            writer.line(f"pub fn {binding}({', '.join(params)}) -> {return_type};")
        return len(overloads.signatures)

    def _log_unemitted(self, module: Module) -> None:
        for enum in module.enums:
            self.logger.log_skipped(SkipKind.ENUM_NOT_EMITTED, enum.name,
                                    "enum declarations are not emitted", enum.line)
        for alias in module.type_aliases:
            self.logger.log_skipped(SkipKind.TYPE_ALIAS_NOT_EMITTED, alias.name,
                                    "type aliases are not emitted", alias.line)
        for variable in module.variables:
            self.logger.log_skipped(SkipKind.VARIABLE_NOT_EMITTED, variable.name,
                                    "variable declarations are not emitted", variable.line)
