"""Module builder for dts2rs

Walks TypeScript module and namespace declarations and assembles the
Module IR tree. Every statement in a module body is unwrapped, classified
by DeclKind and dispatched through a handler table that covers every
DeclKind member.
"""

from typing import Callable, Dict, FrozenSet, List, Optional

import tree_sitter as ts

from dts2rs.builders.enum_translator import translate_enum
from dts2rs.builders.member_builder import (
    MemberBuilder,
    check_type_parameters,
    type_parameter_names,
)
from dts2rs.core.errors import MalformedNodeError, MissingNameError
from dts2rs.core.frontend import (
    DeclKind,
    classify,
    iter_named,
    line_of,
    node_text,
    unwrap_statement,
)
from dts2rs.core.ir import (
    ClassDecl,
    InterfaceDecl,
    Module,
    Signature,
    TypeAliasDecl,
    VariableDecl,
)
from dts2rs.core.target_types import TargetTypeRegistry
from dts2rs.core.translation_logger import SkipKind, TranslationLogger
from dts2rs.core.type_system import ANY_TYPE
from dts2rs.generators.doc_comments import extract_doc
from dts2rs.generators.type_mapper import TypeExpressionParser

MODULE_NODE_TYPES = ("module", "internal_module")

Handler = Callable[[Module, ts.Node, ts.Node], None]


def _header(node: ts.Node) -> str:
    """First source line of a node, for diagnostics"""
    return node_text(node).split("\n", 1)[0].strip()


class ModuleBuilder:
    """Builds Module IR from tree-sitter module declarations

    Usage:
        tree = parse_file(Path("index.d.ts"))
        builder = ModuleBuilder()
        modules = builder.build_root(tree)
    """

    def __init__(self, logger: Optional[TranslationLogger] = None,
                 type_parser: Optional[TypeExpressionParser] = None,
                 registry: Optional[TargetTypeRegistry] = None) -> None:
        """Initialize module builder

        Args:
            logger: TranslationLogger receiving skipped statements
                    (default: None creates a private logger)
            type_parser: TypeExpressionParser for annotations
            registry: TargetTypeRegistry deciding which generic type
                      parameters have a substitution
        """
        self.logger = logger if logger is not None else TranslationLogger()
        self._types = type_parser if type_parser is not None else TypeExpressionParser()
        self._registry = registry if registry is not None else TargetTypeRegistry()
        self._members = MemberBuilder(self._types, self._registry, self.logger)
        self._handlers: Dict[DeclKind, Handler] = {
            DeclKind.MODULE: self._add_module,
            DeclKind.FUNCTION: self._add_function,
            DeclKind.CLASS: self._add_class,
            DeclKind.INTERFACE: self._add_interface,
            DeclKind.ENUM: self._add_enum,
            DeclKind.TYPE_ALIAS: self._add_type_alias,
            DeclKind.VARIABLE: self._add_variable,
            DeclKind.COMMENT: self._skip_comment,
            DeclKind.OTHER: self._skip_other,
        }

    @property
    def handled_kinds(self) -> FrozenSet[DeclKind]:
        return frozenset(self._handlers)

    def build_root(self, tree: ts.Tree) -> List[Module]:
        """Build every top-level module declaration, in source order

        Top-level statements other than module declarations are logged
        as skipped. Repeated declarations of one module are merged.

        Args:
            tree: Parsed declaration file

        Returns:
            Root modules
        """
        # Root modules share one scope, modelled as an unnamed module
        file_scope = Module("")
        for statement in iter_named(tree.root_node):
            decl = unwrap_statement(statement)
            if classify(decl) == DeclKind.MODULE:
                file_scope.add_module(self.build(decl, statement))
            else:
                self.logger.log_skipped(
                    SkipKind.TOP_LEVEL_STATEMENT,
                    node_text(decl.child_by_field_name("name")) or None,
                    f"top-level {decl.type} outside a module",
                    line_of(statement),
                )
        return file_scope.modules

    def build(self, node: ts.Node, statement: Optional[ts.Node] = None) -> Module:
        """Build a Module from a module or namespace declaration

        A dotted name (`namespace a.b {}`) yields a chain of nested
        modules with the body attached to the innermost one.

        Args:
            node: module or internal_module node
            statement: Enclosing statement used to find the doc comment
                       (default: node itself)

        Returns:
            Module IR

        Raises:
            MalformedNodeError: If node is not a module or has no name
        """
        if node.type not in MODULE_NODE_TYPES:
            raise MalformedNodeError(f"Expected a module declaration, got '{node.type}'",
                                     source=_header(node), line=line_of(node))

        name_node = node.child_by_field_name("name")
        if name_node is None:
            raise MalformedNodeError("Module declaration without a name",
                                     source=_header(node), line=line_of(node))

        names = self._module_path(name_node)
        root = Module(names[0], doc=extract_doc(statement if statement is not None else node))
        innermost = root
        for name in names[1:]:
            child = Module(name)
            innermost.modules.append(child)
            innermost = child

        # `declare module "x";` has no body
        body = node.child_by_field_name("body")
        if body is not None:
            for child_statement in iter_named(body, skip_comments=False):
                decl = unwrap_statement(child_statement)
                self._handlers[classify(decl)](innermost, decl, child_statement)

        return root

    @staticmethod
    def _module_path(name_node: ts.Node) -> List[str]:
        text = node_text(name_node)
        if name_node.type == "string":
            return [text[1:-1]]
        if name_node.type == "nested_identifier":
            return [part.strip() for part in text.split(".")]
        return [text]

    def _add_module(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        module.add_module(self.build(decl, statement))

    def _add_function(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        name_node = decl.child_by_field_name("name")
        if name_node is None:
            raise MissingNameError("Function declaration without a name",
                                   source=_header(statement), line=line_of(decl))
        name = node_text(name_node)

        parameters = self._types.parse_parameters(decl.child_by_field_name("parameters"))
        return_node = decl.child_by_field_name("return_type")
        return_type = self._types.parse(return_node) if return_node is not None else ANY_TYPE
        check_type_parameters(type_parameter_names(decl),
                              [*(p.type for p in parameters), return_type],
                              self._registry, decl)

        signature = Signature(name, parameters, return_type, line=line_of(decl))
        module.add_signature(signature, extract_doc(statement))

    def _add_class(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        name_node = decl.child_by_field_name("name")
        if name_node is None:
            raise MissingNameError("Class declaration without a name",
                                   source=_header(statement), line=line_of(decl))
        class_decl = ClassDecl(node_text(name_node), extract_doc(statement), line_of(decl))
        self._members.build(class_decl, decl.child_by_field_name("body"), type_parameter_names(decl))
        module.add_type(class_decl)

    def _add_interface(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        name_node = decl.child_by_field_name("name")
        if name_node is None:
            raise MalformedNodeError("Interface declaration without a name",
                                     source=_header(statement), line=line_of(decl))
        interface = InterfaceDecl(node_text(name_node), extract_doc(statement), line_of(decl))
        self._members.build(interface, self._interface_body(decl), type_parameter_names(decl))
        module.add_type(interface)

    @staticmethod
    def _interface_body(decl: ts.Node) -> Optional[ts.Node]:
        body = decl.child_by_field_name("body")
        if body is None:
            body = next((c for c in decl.named_children
                         if c.type in ("interface_body", "object_type")), None)
        return body

    def _add_enum(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        module.enums.append(translate_enum(decl, extract_doc(statement)))

    def _add_type_alias(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        name_node = decl.child_by_field_name("name")
        if name_node is None:
            raise MalformedNodeError("Type alias without a name",
                                     source=_header(statement), line=line_of(decl))
        module.type_aliases.append(TypeAliasDecl(
            node_text(name_node),
            node_text(decl.child_by_field_name("value")),
            extract_doc(statement),
            line_of(decl),
        ))

    def _add_variable(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        doc = extract_doc(statement)
        for declarator in iter_named(decl):
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is None:
                raise MalformedNodeError("Variable declaration without a name",
                                         source=_header(declarator), line=line_of(declarator))
            type_source = node_text(declarator.child_by_field_name("type")).lstrip(":").strip()
            module.variables.append(VariableDecl(node_text(name_node), type_source, doc,
                                                 line_of(declarator)))

    def _skip_comment(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        # Attached docs are picked up by extract_doc on the following statement
        pass

    def _skip_other(self, module: Module, decl: ts.Node, statement: ts.Node) -> None:
        self.logger.log_skipped(
            SkipKind.UNTRANSLATED_STATEMENT,
            None,
            f"no translation for {decl.type} in module '{module.name}'",
            line_of(statement),
        )
