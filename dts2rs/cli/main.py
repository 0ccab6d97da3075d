"""Main CLI entry point for dts2rs"""

import io
import sys
import argparse
import traceback
from pathlib import Path
from typing import List, Optional

import tree_sitter as ts
import yaml

from dts2rs.builders.module_builder import ModuleBuilder
from dts2rs.core.errors import TranslationError
from dts2rs.core.frontend import parse_file, parse_source
from dts2rs.core.target_types import TargetTypeRegistry
from dts2rs.core.translation_logger import TranslationLogger
from dts2rs.generators.code_writer import CodeWriter
from dts2rs.generators.rust_emitter import RustEmitter
from dts2rs.generators.type_mapper import TypeMapper


def _translate_tree(tree: ts.Tree,
                    registry: Optional[TargetTypeRegistry],
                    logger: Optional[TranslationLogger]) -> str:
    logger = logger if logger is not None else TranslationLogger()
    modules = ModuleBuilder(logger, registry=registry).build_root(tree)

    # Render into a buffer so a failure never leaves partial output behind
    buffer = io.StringIO()
    emitter = RustEmitter(TypeMapper(registry), logger)
    emitter.emit_file(modules, CodeWriter(buffer))
    return buffer.getvalue()


def translate_source(source: str,
                     registry: Optional[TargetTypeRegistry] = None,
                     logger: Optional[TranslationLogger] = None) -> str:
    """Translate declaration file text to Rust bindings

    Args:
        source: TypeScript declaration source
        registry: Optional TargetTypeRegistry with type overrides
        logger: Optional TranslationLogger receiving skipped declarations

    Returns:
        Generated Rust code

    Raises:
        TranslationError: If any declaration cannot be translated
    """
    return _translate_tree(parse_source(source), registry, logger)


def translate_file(input_file: Path,
                   registry: Optional[TargetTypeRegistry] = None,
                   logger: Optional[TranslationLogger] = None) -> str:
    """Translate a .d.ts file to Rust bindings

    Args:
        input_file: Path to the declaration file
        registry: Optional TargetTypeRegistry with type overrides
        logger: Optional TranslationLogger receiving skipped declarations

    Returns:
        Generated Rust code

    Raises:
        MissingSourceFileError: If input_file doesn't exist
        NotADeclarationFileError: If input_file is not a .d.ts file
        TranslationError: If any declaration cannot be translated
    """
    return _translate_tree(parse_file(Path(input_file)), registry, logger)


def _build_registry(config: Optional[Path], specs: List[str]) -> TargetTypeRegistry:
    registry = TargetTypeRegistry()
    if config:
        registry.load_from_yaml(config)
    if specs:
        registry.load_from_cli(specs)
    return registry


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dts2rs",
        description="Translate TypeScript declaration files to Rust wasm_bindgen bindings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dts2rs index.d.ts
  dts2rs index.d.ts -o src/bindings.rs
  dts2rs index.d.ts --type-map number=f32 --type-map Thenable=js_sys::Promise
  dts2rs index.d.ts --config dts2rs.yaml --verbose
        """
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Declaration file to translate (only the first path is used)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output Rust file (default: stdout)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Load type overrides from YAML config file"
    )
    parser.add_argument(
        "--type-map",
        action="append",
        default=[],
        metavar="KEY=RUST",
        help="Override a primitive (number=f32) or substitute a named type (Thenable=js_sys::Promise)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print a translation summary to stderr"
    )

    args = parser.parse_args(argv)

    if not args.files:
        parser.print_usage(sys.stderr)
        sys.exit(2)

    input_file = args.files[0]
    if len(args.files) > 1:
        print(f"Warning: only {input_file} is translated, ignoring {len(args.files) - 1} more path(s)",
              file=sys.stderr)

    try:
        registry = _build_registry(args.config, args.type_map)
    except OSError as e:
        print(f"Error: Cannot read config file {args.config}: {e}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid config file {args.config}: {e}", file=sys.stderr)
        sys.exit(1)

    logger = TranslationLogger()
    try:
        rust_code = translate_file(input_file, registry, logger)
    except TranslationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        print(f"Error translating {input_file}:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(rust_code)
        except OSError as e:
            print(f"Error writing output file {args.output}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Generated: {args.output}")
    else:
        sys.stdout.write(rust_code)

    if args.verbose:
        print(logger.format_summary(), file=sys.stderr)


if __name__ == "__main__":
    main()
