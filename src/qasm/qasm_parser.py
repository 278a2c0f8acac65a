"""
OpenQASM 2.0 Parser

Parses lexer-generated `Token` sequences into a list of AST statements.

The parser is a recursive-descent engine with one method per grammar
production. It walks a cursor over the token list, strictly forward, and never
revisits a consumed token. A trailing `EOF` token, if present, marks the end
of the stream; an `EOF` anywhere else is an ordinary token and is rejected.

Grammar
-------
    program      := "OPENQASM" REAL ";" statement*
    statement    := ("qreg" | "creg") IDENT "[" INT "]" ";"
                  | "barrier" argument ";"
                  | "reset" argument ";"
                  | "measure" argument "->" argument ";"
                  | application
                  | "opaque" IDENT [ "(" [ id_list ] ")" ] argument_list ";"
                  | "gate" IDENT [ "(" [ id_list ] ")" ] id_list "{" application* "}"
                  | "if" "(" IDENT "==" INT ")" statement
    application  := IDENT [ "(" [ expr_list ] ")" ] argument_list ";"
    argument     := IDENT [ "[" INT "]" ]

`argument_list`, `expr_list` and `id_list` are one or more comma-separated
elements with no trailing comma.

Gate parameter expressions are not evaluated: each is captured as the
space-padded text of its tokens (`u2(0,pi)` gives `[" 0 ", " pi "]`).

Raises
------
ParseError
    One of the `qasm.qasm_errors` subclasses, raised at the first unmet
    expectation. There is no recovery and no partial result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from qasm.qasm_ast import (
    ApplyGate,
    Argument,
    ASTNode,
    Barrier,
    CReg,
    Gate,
    If,
    Measure,
    Opaque,
    QReg,
    Qubit,
    Register,
    Reset,
)
from qasm.qasm_constants import MATH_TOKENS, SUPPORTED_VERSIONS, TOKEN_LEXEMES
from qasm.qasm_errors import (
    MissingIdentifier,
    MissingInt,
    MissingReal,
    MissingSemicolon,
    MissingVersion,
    SourceError,
    UnsupportedVersion,
)
from qasm.qasm_lexer import Token

T = TypeVar("T")


def format_real(value: float) -> str:
    """Renders a REAL token for an expression string; integral values drop `.0`."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class Parser:
    """
    OpenQASM Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Index of the next unconsumed token.

    Methods
    -------
    parse() -> list[ASTNode]
        Check the version header, then parse every statement.
    parse_version() -> float
        Parse `OPENQASM <real>;` and return the version number.
    parse_statements() -> list[ASTNode]
        Parse statements until the stream is exhausted (no header).
    parse_statement() -> ASTNode
        Parse one top-level statement.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        self.position: int = 0

    # Cursor

    def at_end(self) -> bool:
        """True past the last token, or at an `EOF` that is the last token."""
        if self.position >= len(self.tokens):
            return True
        return (
            self.position == len(self.tokens) - 1
            and self.tokens[self.position].type == "EOF"
        )

    def current(self) -> Token:
        if self.at_end():
            return Token("EOF", "EOF")
        return self.tokens[self.position]

    def check(self, *types: str) -> bool:
        """True if the next token is one of `types`; never consumes."""
        return not self.at_end() and self.current().type in types

    def advance(self) -> Token:
        """Consumes and returns the next token; SourceError at end of stream."""
        if self.at_end():
            raise SourceError()
        tok = self.tokens[self.position]
        self.position += 1
        return tok

    # Terminals

    def match_token(self, type_: str) -> Token:
        tok = self.advance()
        if tok.type != type_:
            raise SourceError(tok)
        return tok

    def match_real(self) -> float:
        tok = self.advance()
        if tok.type != "REAL":
            raise MissingReal(tok)
        return float(tok.value)

    def match_int(self) -> int:
        tok = self.advance()
        if tok.type != "INT":
            raise MissingInt(tok)
        return int(tok.value)

    def match_identifier(self) -> str:
        tok = self.advance()
        if tok.type != "IDENT":
            raise MissingIdentifier(tok)
        return str(tok.value)

    def match_semicolon(self) -> None:
        tok = self.advance()
        if tok.type != "SEMICOLON":
            raise MissingSemicolon(tok)

    # Lists

    def match_list(self, element: Callable[[], T]) -> list[T]:
        """Parses `element ("," element)*`."""
        items = [element()]
        while self.check("COMMA"):
            self.advance()
            items.append(element())
        return items

    def match_optional_params(self, element: Callable[[], str]) -> list[str]:
        """Parses the optional `( [element_list] )` group after a gate name."""
        if not self.check("LPAREN"):
            return []
        self.advance()
        if self.check("RPAREN"):
            self.advance()
            return []
        params = self.match_list(element)
        self.match_token("RPAREN")
        return params

    def match_argument(self) -> Argument:
        tok = self.current()
        name = self.match_identifier()
        if self.check("LBRACK"):
            self.advance()
            index = self.match_int()
            self.match_token("RBRACK")
            return Qubit(name, index, line=tok.line, col=tok.col)
        return Register(name, line=tok.line, col=tok.col)

    def match_argument_list(self) -> list[Argument]:
        return self.match_list(self.match_argument)

    def match_id_list(self) -> list[str]:
        return self.match_list(self.match_identifier)

    def match_mathexpr(self) -> str:
        """Captures one parameter expression as space-padded source text.

        Stops, without consuming, at the first token outside the math token set
        or at a `)` that closes a paren opened before the expression began.
        """
        if self.at_end():
            raise SourceError()

        parts: list[str] = []
        depth = 0
        while self.check(*MATH_TOKENS):
            tok = self.current()
            if tok.type == "RPAREN":
                if depth == 0:
                    break
                depth -= 1
            elif tok.type == "LPAREN":
                depth += 1

            if tok.type == "REAL":
                text = format_real(float(tok.value))
            elif tok.type in ("INT", "IDENT"):
                text = str(tok.value)
            else:
                text = TOKEN_LEXEMES[tok.type]
            parts.append(f" {text} ")
            self.advance()

        if not parts:
            raise SourceError(self.current() if not self.at_end() else None)
        return "".join(parts)

    def match_mathexpr_list(self) -> list[str]:
        return self.match_list(self.match_mathexpr)

    def match_application_list(self) -> list[ASTNode]:
        """Parses one or more consecutive gate applications (a gate body)."""
        applications = [self.parse_application(self.advance())]
        while self.check("IDENT"):
            applications.append(self.parse_application(self.advance()))
        return applications

    # Program

    def parse(self) -> list[ASTNode]:
        """Parse a full OpenQASM program and return its top-level statements."""
        version = self.parse_version()
        if version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion()
        return self.parse_statements()

    def parse_version(self) -> float:
        if not self.check("OPENQASM"):
            raise MissingVersion(None if self.at_end() else self.current())
        self.advance()
        version = self.match_real()
        self.match_semicolon()
        return version

    def parse_statements(self) -> list[ASTNode]:
        nodes: list[ASTNode] = []
        while not self.at_end():
            nodes.append(self.parse_statement())
        return nodes

    def parse_statement(self) -> ASTNode:
        """Dispatch on the leading token of a statement."""
        tok = self.advance()

        if tok.type in ("QREG", "CREG"):
            return self.parse_register(tok)
        if tok.type == "BARRIER":
            argument = self.match_argument()
            self.match_semicolon()
            return Barrier(argument, line=tok.line, col=tok.col)
        if tok.type == "RESET":
            argument = self.match_argument()
            self.match_semicolon()
            return Reset(argument, line=tok.line, col=tok.col)
        if tok.type == "MEASURE":
            return self.parse_measure(tok)
        if tok.type == "IDENT":
            return self.parse_application(tok)
        if tok.type == "OPAQUE":
            return self.parse_opaque(tok)
        if tok.type == "GATE":
            return self.parse_gate(tok)
        if tok.type == "IF":
            return self.parse_if(tok)

        raise SourceError(tok)

    # Statements

    def parse_register(self, tok: Token) -> ASTNode:
        name = self.match_identifier()
        self.match_token("LBRACK")
        size = self.match_int()
        self.match_token("RBRACK")
        self.match_semicolon()
        node_type = QReg if tok.type == "QREG" else CReg
        return node_type(name, size, line=tok.line, col=tok.col)

    def parse_measure(self, tok: Token) -> Measure:
        source = self.match_argument()
        self.match_token("ARROW")
        dest = self.match_argument()
        self.match_semicolon()
        return Measure(source, dest, line=tok.line, col=tok.col)

    def parse_application(self, tok: Token) -> ApplyGate:
        """Parse the rest of a gate application whose name token was `tok`."""
        if tok.type != "IDENT":
            raise MissingIdentifier(tok)
        params = self.match_optional_params(self.match_mathexpr)
        arguments = self.match_argument_list()
        self.match_semicolon()
        return ApplyGate(str(tok.value), arguments, params, line=tok.line, col=tok.col)

    def parse_opaque(self, tok: Token) -> Opaque:
        name = self.match_identifier()
        params = self.match_optional_params(self.match_identifier)
        arguments = self.match_argument_list()
        self.match_semicolon()
        return Opaque(name, arguments, params, line=tok.line, col=tok.col)

    def parse_gate(self, tok: Token) -> Gate:
        name = self.match_identifier()
        params = self.match_optional_params(self.match_identifier)
        qubits = self.match_id_list()
        self.match_token("LBRACE")

        body: list[ASTNode] = []
        if not self.check("RBRACE"):
            body = self.match_application_list()
        self.match_token("RBRACE")

        return Gate(name, qubits, params, body, line=tok.line, col=tok.col)

    def parse_if(self, tok: Token) -> If:
        self.match_token("LPAREN")
        register = self.match_identifier()
        self.match_token("EQUALS")
        value = self.match_int()
        self.match_token("RPAREN")
        statement = self.parse_statement()
        return If(register, value, statement, line=tok.line, col=tok.col)


def parse(tokens: Iterable[Token]) -> list[ASTNode]:
    """Parses a token sequence that starts with the version header."""
    return Parser(tokens).parse()


__all__ = ["Parser", "format_real", "parse"]
