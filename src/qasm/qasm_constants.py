"""
Token tables shared by the OpenQASM lexer and parser.

Everything here is read-only after import. The keyword table is exposed as a
``MappingProxyType`` so that no caller can register new keywords at runtime.

Exports:
    - KEYWORDS: identifier text -> token type for reserved words
    - SINGLE_CHAR_TOKENS: one-character punctuation/operators -> token type
    - TOKEN_LEXEMES: token type -> canonical source text
    - MATH_TOKENS: token types accepted inside a gate parameter expression
    - SUPPORTED_VERSIONS: OPENQASM header versions the parser accepts
"""

from types import MappingProxyType

KEYWORDS = MappingProxyType(
    {
        "OPENQASM": "OPENQASM",
        "qreg": "QREG",
        "creg": "CREG",
        "barrier": "BARRIER",
        "gate": "GATE",
        "measure": "MEASURE",
        "reset": "RESET",
        "include": "INCLUDE",
        "opaque": "OPAQUE",
        "if": "IF",
        "sin": "SIN",
        "cos": "COS",
        "tan": "TAN",
        "exp": "EXP",
        "ln": "LN",
        "sqrt": "SQRT",
        "pi": "PI",
    }
)

SINGLE_CHAR_TOKENS = MappingProxyType(
    {
        "+": "PLUS",
        "*": "MULT",
        "/": "DIV",
        "^": "POW",
        ";": "SEMICOLON",
        ",": "COMMA",
        "(": "LPAREN",
        ")": "RPAREN",
        "[": "LBRACK",
        "]": "RBRACK",
        "{": "LBRACE",
        "}": "RBRACE",
    }
)

TOKEN_LEXEMES = MappingProxyType(
    {
        **{tok_type: text for text, tok_type in KEYWORDS.items()},
        **{tok_type: text for text, tok_type in SINGLE_CHAR_TOKENS.items()},
        "SUB": "-",
        "ARROW": "->",
        "EQUALS": "==",
        "EOF": "EOF",
    }
)

LITERAL_TOKENS = frozenset({"REAL", "INT", "IDENT"})

MATH_FUNCTIONS = frozenset({"SIN", "COS", "TAN", "EXP", "LN", "SQRT"})

MATH_OPERATORS = frozenset({"PLUS", "SUB", "MULT", "DIV", "POW"})

MATH_TOKENS = (
    LITERAL_TOKENS | MATH_FUNCTIONS | MATH_OPERATORS | {"PI", "LPAREN", "RPAREN"}
)

SUPPORTED_VERSIONS = (2.0,)


def lookup_ident(ident: str) -> str:
    """Resolves identifier-shaped text to its keyword token type, or ``IDENT``."""
    return KEYWORDS.get(ident, "IDENT")


__all__ = [
    "KEYWORDS",
    "LITERAL_TOKENS",
    "MATH_FUNCTIONS",
    "MATH_OPERATORS",
    "MATH_TOKENS",
    "SINGLE_CHAR_TOKENS",
    "SUPPORTED_VERSIONS",
    "TOKEN_LEXEMES",
    "lookup_ident",
]
