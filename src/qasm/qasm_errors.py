"""
Error taxonomy for the OpenQASM front end.

Parsing fails with exactly one of a closed set of `ParseError` subclasses, each
carrying a fixed human-readable message and, when known, the token at which the
parser gave up. There is no recovery: the first error aborts the parse.

Classes:
    - ParseError: Base class (a `SyntaxError`) for every parse failure.
    - MissingVersion, UnsupportedVersion: Version header problems.
    - MissingSemicolon, MissingReal, MissingInt, MissingIdentifier: An expected
      terminal was absent or of the wrong type.
    - SourceError: Catch-all for structural mismatches and reading past the end
      of the token stream.
    - IncludeError: Raised by the preprocessor when an include cannot be resolved.
"""

from typing import ClassVar

from qasm.qasm_lexer import Token


class ParseError(SyntaxError):
    """Base class for all OpenQASM parse failures.

    Attributes:
        message (str): Fixed description of the failure kind.
        token (Token | None): The offending token, or None at end of stream.
    """

    message: ClassVar[str] = "Parse error"

    def __init__(self, token: Token | None = None) -> None:
        super().__init__(self.message)
        self.token = token

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.token is not None and self.token.line:
            return f"{self.message} at line {self.token.line}, col {self.token.col}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.kind}({self.token!r})"


class MissingVersion(ParseError):
    message = "Missing A Version Statement At The Start Of The File"


class UnsupportedVersion(ParseError):
    message = "Unsupported Version. Please Use OpenQASM Version 2.0"


class MissingSemicolon(ParseError):
    message = "Missing Semicolon"


class MissingReal(ParseError):
    message = "Missing A Real Number"


class MissingInt(ParseError):
    message = "Missing An Integer"


class MissingIdentifier(ParseError):
    message = "Missing An Identifier"


class SourceError(ParseError):
    message = "There Was An Error In Your Source Code"


class IncludeError(OSError):
    """Raised when an `include` directive cannot be expanded.

    Example:
        raise IncludeError(IncludeError.not_found.format("qelib1.inc"))
    """

    not_found = "Include file {} not found"
    circular = "Circular include of {}"
    too_deep = "Include depth exceeds {}, possible recursion"


__all__ = [
    "IncludeError",
    "MissingIdentifier",
    "MissingInt",
    "MissingReal",
    "MissingSemicolon",
    "MissingVersion",
    "ParseError",
    "SourceError",
    "UnsupportedVersion",
]
