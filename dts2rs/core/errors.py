"""Error taxonomy for dts2rs

Every error is fatal for the current run: translation is all-or-nothing.
Errors carry the offending construct's source text so the declaration
file can be fixed by hand.
"""

from typing import Optional


class TranslationError(Exception):
    """Base class for all translation failures

    Attributes:
        source: Original text of the offending construct (if known)
        line: 1-based source line (if known)
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 line: Optional[int] = None) -> None:
        self.source = source
        self.line = line
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        if self.line is not None:
            message = f"{message} (line {self.line})"
        if self.source:
            message = f"{message}: {self.source}"
        return message


class MissingSourceFileError(TranslationError, FileNotFoundError):
    """Input path does not exist"""


class NotADeclarationFileError(TranslationError, ValueError):
    """Input path is not a .d.ts declaration file"""


class DeclarationSyntaxError(TranslationError):
    """Front end reported a syntax error in the declaration file"""


class MissingNameError(TranslationError):
    """Function or class declaration without an identifier"""


class MalformedNodeError(TranslationError):
    """Expected child node is absent"""


class UnsupportedConstructError(TranslationError):
    """Construct outside the supported type-expression subset"""


class MergeConflictError(TranslationError, ValueError):
    """Signature merged into an overload set with a different name"""
