"""Translation logger for dts2rs

Tracks declarations that produced no binding, and other warnings, and
provides summary statistics.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum


class SkipKind(Enum):
    """Why a declaration produced no binding"""
    UNTRANSLATED_STATEMENT = "untranslated_statement"
    TOP_LEVEL_STATEMENT = "top_level_statement"
    UNTRANSLATED_MEMBER = "untranslated_member"
    ENUM_NOT_EMITTED = "enum_not_emitted"
    TYPE_ALIAS_NOT_EMITTED = "type_alias_not_emitted"
    VARIABLE_NOT_EMITTED = "variable_not_emitted"


@dataclass
class SkipRecord:
    """Record of a declaration that produced no binding"""
    kind: SkipKind
    symbol: Optional[str]
    reason: str
    line: Optional[int] = None


class TranslationLogger:
    """Logs skipped declarations and provides summaries"""

    def __init__(self) -> None:
        self.skipped: List[SkipRecord] = []
        self.warnings: List[str] = []
        self.bindings_emitted = 0
        self.modules_emitted = 0

    def log_skipped(self,
                    kind: SkipKind,
                    symbol: Optional[str],
                    reason: str,
                    line: Optional[int] = None) -> None:
        """Log a declaration that was not translated

        Args:
            kind: Category of the skip
            symbol: Declaration name (if applicable)
            reason: Human readable reason
            line: Source line number
        """
        self.skipped.append(SkipRecord(kind=kind, symbol=symbol, reason=reason, line=line))

    def log_warning(self, message: str) -> None:
        self.warnings.append(message)

    def log_module(self, binding_count: int) -> None:
        """Count one emitted module and its function bindings"""
        self.modules_emitted += 1
        self.bindings_emitted += binding_count

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with translation statistics
        """
        skipped_by_kind: Dict[SkipKind, int] = {}
        for skip in self.skipped:
            skipped_by_kind[skip.kind] = skipped_by_kind.get(skip.kind, 0) + 1

        return {
            "modules_emitted": self.modules_emitted,
            "bindings_emitted": self.bindings_emitted,
            "total_skipped": len(self.skipped),
            "skipped_by_kind": skipped_by_kind,
            "total_warnings": len(self.warnings),
        }

    def format_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.get_summary()
        lines = []

        lines.append("=== Translation Summary ===")
        lines.append(f"Modules emitted: {summary['modules_emitted']}")
        lines.append(f"Bindings emitted: {summary['bindings_emitted']}")
        lines.append("")

        lines.append(f"Skipped declarations: {summary['total_skipped']}")
        if summary['skipped_by_kind']:
            for kind, count in summary['skipped_by_kind'].items():
                lines.append(f"  {kind.value}: {count}")
            lines.append("")

        if self.skipped:
            lines.append("Skipped details (top 10):")
            for skip in self.skipped[:10]:
                symbol_part = f"'{skip.symbol}': " if skip.symbol else ""
                line_part = f" (line {skip.line})" if skip.line else ""
                lines.append(f"  {skip.kind.value} - {symbol_part}{skip.reason}{line_part}")
            lines.append("")

        symbols = self.get_skipped_symbols()
        if symbols:
            lines.append(f"Skipped symbols: {', '.join(symbols)}")
            lines.append("")

        lines.append(f"Warnings: {summary['total_warnings']}")
        for warning in self.warnings:
            lines.append(f"  {warning}")

        return "\n".join(lines)

    def get_skipped_symbols(self) -> List[str]:
        return [skip.symbol for skip in self.skipped if skip.symbol]
