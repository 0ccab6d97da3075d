"""Naming scheme for dts2rs

Implements a naming convention:
- Modules: source name sanitized to a Rust identifier
- Functions: source name sanitized, ordinal suffix added by OverloadSet
- Rust keywords: mangled by appending a trailing underscore

Handles Rust identifier sanitization and keyword collision avoidance.
"""

import re


class NamingScheme:
    """Handles Rust identifier generation for TypeScript declarations"""

    KEYWORD_SUFFIX = "_"

    # Strict, reserved and weak Rust keywords that cannot be plain identifiers
    RUST_KEYWORDS = {
        'as', 'async', 'await', 'break', 'const', 'continue', 'crate', 'dyn',
        'else', 'enum', 'extern', 'false', 'fn', 'for', 'if', 'impl', 'in',
        'let', 'loop', 'match', 'mod', 'move', 'mut', 'pub', 'ref', 'return',
        'self', 'Self', 'static', 'struct', 'super', 'trait', 'true', 'type',
        'unsafe', 'use', 'where', 'while', 'abstract', 'become', 'box', 'do',
        'final', 'gen', 'macro', 'override', 'priv', 'try', 'typeof',
        'unsized', 'virtual', 'yield',
    }

    @staticmethod
    def sanitize(name: str) -> str:
        """Convert an arbitrary source name to a Rust identifier-safe string

        Args:
            name: Source name (e.g., "@types/node", "$emit")

        Returns:
            Sanitized string (e.g., "types_node", "_emit")
        """
        if not name:
            return "_"
        sanitized = re.sub(r"[^0-9A-Za-z_]", "_", name)
        if not (sanitized[0].isalpha() or sanitized[0] == "_"):
            sanitized = f"_{sanitized}"
        return sanitized

    @staticmethod
    def mangle_keyword(name: str) -> str:
        """Append a suffix if the name is a Rust keyword"""
        if name in NamingScheme.RUST_KEYWORDS:
            return f"{name}{NamingScheme.KEYWORD_SUFFIX}"
        return name

    @staticmethod
    def module_name(source_name: str) -> str:
        """Rust module identifier for a TypeScript module or namespace

        Quoted ambient module names ("vscode") are unquoted first; scoped
        package names ("@scope/pkg") are flattened.
        """
        stripped = source_name.strip("'\"").lstrip("@")
        return NamingScheme.identifier(NamingScheme.sanitize(stripped))

    @staticmethod
    def function_name(source_name: str) -> str:
        """Rust identifier stem for a function binding (before ordinal suffix)"""
        return NamingScheme.sanitize(source_name)

    @staticmethod
    def parameter_name(source_name: str) -> str:
        return NamingScheme.identifier(NamingScheme.sanitize(source_name))

    @staticmethod
    def identifier(sanitized: str) -> str:
        """Return a sanitized name as is when valid, keyword-mangled otherwise"""
        if NamingScheme.is_valid_identifier(sanitized):
            return sanitized
        return NamingScheme.mangle_keyword(sanitized)

    @staticmethod
    def is_valid_identifier(name: str) -> bool:
        """Check if a string is a valid, non-keyword Rust identifier

        Args:
            name: String to check

        Returns:
            True if valid Rust identifier
        """
        if not name or name[0].isdigit() or name in NamingScheme.RUST_KEYWORDS:
            return False
        return all(c.isalnum() or c == "_" for c in name)
