"""
Lexical analyzer for OpenQASM 2.0.

This module converts preprocessed OpenQASM source (no comments, no include
directives) into a stream of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace
    - Recognizes:
        * Identifiers, keywords and math function names
        * Numbers (non-negative integer and real)
        * `->` and `==`, plus single-character punctuation and operators
    - Never raises: unknown characters (including a lone `=`) and integers too
      long for `int()` become ILLEGAL tokens, which the parser rejects in context.

Example:
    >>> lexer = Lexer(CharacterStream("qreg q[2];"))
    >>> lexer.next_token()
    Token(QREG, qreg)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from typing import Any

from qasm.qasm_constants import SINGLE_CHAR_TOKENS, TOKEN_LEXEMES, lookup_ident


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in OpenQASM.

    Literal tokens carry their payload as `value` (`float` for REAL, `int` for
    INT, `str` for IDENT); every other token carries its canonical lexeme, which
    is filled in automatically when `value` is omitted.

    Equality and hashing use `type` and `value` only, so a hand-built token
    sequence compares equal to the same sequence produced by the lexer.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'REAL', 'EOF').
        value (Any): The literal payload or lexeme.
        line (int): The 1-based line number where the token appears (0 if unknown).
        col (int): The 1-based column number where the token starts (0 if unknown).
    """

    def __init__(self, type_: str, value: Any = None, line: int = 0, col: int = 0):
        self.type = type_
        self.value = TOKEN_LEXEMES.get(type_, type_) if value is None else value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))


class Lexer:
    """Lexical analyzer for OpenQASM 2.0.

    Produces one token per `next_token()` call using a single character of
    lookahead and no backtracking. A Lexer is also a single-pass iterator that
    stops before EOF; build a new Lexer to start over.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok.type == "EOF":
            raise StopIteration
        return tok

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def read_identifier(self) -> str:
        ident = ""
        while not self.stream.end_of_file() and (
            self.peek().isalnum() or self.peek() == "_"
        ):
            ident += self.advance()
        return ident

    def read_number(self) -> tuple[str, bool]:
        """Reads digits with at most one decimal point.

        Returns:
            tuple[str, bool]: The literal text and whether it contains a point.
        """
        num = ""
        has_dot = False
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch == "." and not has_dot:
                has_dot = True
            elif not ch.isdecimal():
                break
            num += self.advance()
        return num, has_dot

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.peek()

        # `==` is the only use of `=`
        if ch == "=":
            self.advance()
            if self.peek() == "=":
                self.advance()
                return Token("EQUALS", "==", line, col)
            return Token("ILLEGAL", "=", line, col)

        if ch == "-":
            self.advance()
            if self.peek() == ">":
                self.advance()
                return Token("ARROW", "->", line, col)
            return Token("SUB", "-", line, col)

        if ch in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[self.advance()], ch, line, col)

        if ch.isalpha() or ch == "_":
            ident = self.read_identifier()
            tok_type = lookup_ident(ident)
            return Token(tok_type, ident, line, col)

        if ch.isdecimal():
            num, has_dot = self.read_number()
            if has_dot:
                return Token("REAL", float(num), line, col)
            try:
                return Token("INT", int(num), line, col)
            except ValueError:
                # past the interpreter's int digit limit
                return Token("ILLEGAL", num, line, col)

        return Token("ILLEGAL", self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes a whole preprocessed source string, excluding the trailing EOF."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
