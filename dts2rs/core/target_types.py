"""Target type registry for dts2rs

Provides the Rust spelling of TypeScript primitive types and optional
substitutions for named types (e.g. Thenable -> js_sys::Promise).
Defaults can be overridden from CLI specs or a YAML config file.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pathlib import Path

import yaml

from dts2rs.core.type_system import PrimitiveKind


DEFAULT_PRIMITIVES: Dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "String",
    PrimitiveKind.NUMBER: "f64",
    PrimitiveKind.BOOLEAN: "bool",
    PrimitiveKind.VOID: "()",
    PrimitiveKind.ANY: "JsValue",
}


@dataclass
class TargetTypeConfig:
    """Resolved type spelling configuration

    Attributes:
        primitives: Rust type per primitive kind
        names: Replacement spelling per referenced type name
    """
    primitives: Dict[PrimitiveKind, str] = field(default_factory=lambda: dict(DEFAULT_PRIMITIVES))
    names: Dict[str, str] = field(default_factory=dict)


class TargetTypeRegistry:
    """Registry of Rust spellings for TypeScript types

    Primitive keys are the TypeScript keywords (string, number, boolean,
    void, any). Any other key is treated as a named-type substitution.
    """

    def __init__(self) -> None:
        self._config = TargetTypeConfig()

    def register_primitive(self, kind: PrimitiveKind, rust_type: str) -> None:
        self._config.primitives[kind] = rust_type

    def register_name(self, ts_name: str, rust_type: str) -> None:
        self._config.names[ts_name] = rust_type

    def register(self, key: str, rust_type: str) -> None:
        """Register a primitive override or a named-type substitution

        Args:
            key: TypeScript primitive keyword or type name
            rust_type: Rust spelling to emit
        """
        kind = self._primitive_kind(key)
        if kind is not None:
            self.register_primitive(kind, rust_type)
        else:
            self.register_name(key, rust_type)

    def primitive(self, kind: PrimitiveKind) -> str:
        return self._config.primitives[kind]

    def name(self, ts_name: str) -> str:
        """Rust spelling for a referenced type name (verbatim by default)"""
        return self._config.names.get(ts_name, ts_name)

    def has_substitution(self, ts_name: str) -> bool:
        return ts_name in self._config.names

    def load_from_cli(self, specs: List[str]) -> None:
        """Load overrides from CLI argument specs.

        Parses specs like: ["number=f32", "Thenable=js_sys::Promise"]

        Args:
            specs: List of "key=rust_type" strings
        """
        for spec in specs:
            if '=' not in spec:
                continue
            key, rust_type = spec.split('=', 1)
            key = key.strip()
            rust_type = rust_type.strip()
            if key and rust_type:
                self.register(key, rust_type)

    def load_from_yaml(self, path: Path) -> None:
        """Load overrides from a YAML config file.

        Expected layout:

            types:
              number: f32
            names:
              Thenable: js_sys::Promise

        Args:
            path: Path to YAML config file

        Raises:
            FileNotFoundError: If the config file does not exist
        """
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if not config:
            return

        for key, rust_type in (config.get('types') or {}).items():
            kind = self._primitive_kind(str(key))
            if kind is not None and rust_type:
                self.register_primitive(kind, str(rust_type))

        for ts_name, rust_type in (config.get('names') or {}).items():
            if rust_type:
                self.register_name(str(ts_name), str(rust_type))

    @staticmethod
    def _primitive_kind(key: str) -> Optional[PrimitiveKind]:
        for kind in PrimitiveKind:
            if kind.value == key:
                return kind
        return None

    def __repr__(self) -> str:
        return f"TargetTypeRegistry(names={list(self._config.names.keys())})"
