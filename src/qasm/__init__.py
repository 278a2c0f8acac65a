"""
qasm: a lexer and parser for OpenQASM 2.0.

Processing a file takes three steps, each available on its own:

1. `process` removes comments and splices in include files.
2. `lex` turns the processed text into a list of tokens.
3. `parse` turns the tokens into a list of AST statements.

Example:
    >>> from qasm import lex, parse
    >>> parse(lex("OPENQASM 2.0; qreg a[3]; CX a[0], a[1];"))
    [QReg(name='a', size=3), ApplyGate(name='CX', arguments=[Qubit(register='a', index=0), Qubit(register='a', index=1)], params=[])]
"""

from collections.abc import Sequence

from qasm.qasm_ast import ASTNode
from qasm.qasm_lexer import Token, tokenize
from qasm.qasm_parser import parse
from qasm.qasm_preprocess import process


def lex(source: str) -> list[Token]:
    """Lexes a comment- and include-free source string."""
    return tokenize(source)


def parse_source(
    source: str, cwd: str = ".", include_paths: Sequence[str] = ()
) -> list[ASTNode]:
    """Preprocesses, lexes and parses raw OpenQASM source."""
    return parse(lex(process(source, cwd=cwd, include_paths=include_paths)))


__all__ = ["lex", "parse", "parse_source", "process"]
