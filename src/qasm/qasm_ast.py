"""
Defines the abstract syntax tree (AST) produced by the OpenQASM parser.

Arguments:
    Qubit: A single addressed element of a register, e.g. `q[0]`.
    Register: A whole register, e.g. `q`.

Statements:
    QReg, CReg: Register declarations.
    Barrier, Reset: Single-argument operations.
    Measure: `measure <source> -> <dest>`.
    ApplyGate: A gate application. Parameters are kept as the reconstructed
        source text of each expression; evaluating them is left to consumers.
    Opaque: A gate declared without a body; parameters are identifiers.
    Gate: A gate definition whose body is a list of ApplyGate nodes.
    If: A conditional guarding exactly one statement.

Each node records the line/col of the token that opened it. Positions are
excluded from equality and repr so nodes compare on their syntactic content
only, which lets tests build expected trees by hand.

Usage:
    >>> QReg("q", 2) == QReg("q", 2, line=3, col=1)
    True
    >>> Gate("h", ["a"], [], []).to_dict()["kind"]
    'gate'
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

ASTDict = dict[str, Any]
"""Serialized form of a node: `kind`, its fields, `line` and `col`."""


def _serialize(value: Any) -> Any:
    if isinstance(value, (ASTNode, Argument)):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class _Serializable:
    kind: ClassVar[str]

    def to_dict(self) -> ASTDict:
        """Converts the node (and all descendants) into a nested dictionary."""
        out: ASTDict = {"kind": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            out[f.name] = _serialize(getattr(self, f.name))
        return out


class Argument(_Serializable):
    """Base class for the register-or-qubit operand of a statement."""


@dataclass
class Qubit(Argument):
    kind: ClassVar[str] = "qubit"

    register: str
    index: int
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Register(Argument):
    kind: ClassVar[str] = "register"

    register: str
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


class ASTNode(_Serializable):
    """Base class for every top-level or gate-body statement."""


@dataclass
class QReg(ASTNode):
    """Quantum register declaration: `qreg name[size];`."""

    kind: ClassVar[str] = "qreg"

    name: str
    size: int
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class CReg(ASTNode):
    """Classical register declaration: `creg name[size];`."""

    kind: ClassVar[str] = "creg"

    name: str
    size: int
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Barrier(ASTNode):
    kind: ClassVar[str] = "barrier"

    argument: Argument
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Reset(ASTNode):
    kind: ClassVar[str] = "reset"

    argument: Argument
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Measure(ASTNode):
    """Measurement of `source` (qubit/register) into `dest` (bit/register)."""

    kind: ClassVar[str] = "measure"

    source: Argument
    dest: Argument
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class ApplyGate(ASTNode):
    """Application of gate `name` to `arguments`.

    `params` holds each parameter expression as reconstructed source text,
    e.g. `[" 0 ", " pi "]` for `u2(0,pi)`.
    """

    kind: ClassVar[str] = "apply_gate"

    name: str
    arguments: list[Argument]
    params: list[str] = field(default_factory=list)
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Opaque(ASTNode):
    """Declaration of a gate with no known body."""

    kind: ClassVar[str] = "opaque"

    name: str
    arguments: list[Argument]
    params: list[str] = field(default_factory=list)
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class Gate(ASTNode):
    """Gate definition.

    `qubits` are the qubit parameter names, `params` the numeric parameter
    names, and `body` the gate applications it expands to (possibly none).
    """

    kind: ClassVar[str] = "gate"

    name: str
    qubits: list[str]
    params: list[str] = field(default_factory=list)
    body: list[ASTNode] = field(default_factory=list)
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


@dataclass
class If(ASTNode):
    """Runs `statement` only when classical register `register` equals `value`."""

    kind: ClassVar[str] = "if"

    register: str
    value: int
    statement: ASTNode
    line: int = field(default=0, compare=False, repr=False)
    col: int = field(default=0, compare=False, repr=False)


__all__ = [
    "ASTDict",
    "ASTNode",
    "ApplyGate",
    "Argument",
    "Barrier",
    "CReg",
    "Gate",
    "If",
    "Measure",
    "Opaque",
    "QReg",
    "Qubit",
    "Register",
    "Reset",
]
