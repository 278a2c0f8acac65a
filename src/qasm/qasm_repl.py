"""
Interactive OpenQASM REPL.

Each input is preprocessed, lexed and parsed as a run of statements; the
resulting AST nodes are echoed back. Gate bodies may span several lines: input
is collected until the braces balance. The version header is optional in the
REPL, but when given it must be `OPENQASM 2.0;`.

Commands:
    exit, quit     leave the REPL
    verbose-mode   toggle printing of the token stream
"""

from qasm.qasm_ast import ASTNode
from qasm.qasm_constants import SUPPORTED_VERSIONS
from qasm.qasm_errors import IncludeError, ParseError, UnsupportedVersion
from qasm.qasm_lexer import tokenize
from qasm.qasm_parser import Parser
from qasm.qasm_preprocess import process


def read_statement() -> str | None:
    """Reads lines until braces balance; None means the user asked to exit."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def eval_source(src: str, verbose: bool = False) -> list[ASTNode]:
    """Parses one REPL input and returns its statements.

    Raises:
        ParseError: If the input is not a valid run of statements.
        IncludeError: If an include directive cannot be resolved.
    """
    tokens = tokenize(process(src))
    if verbose:
        print(f"[tokens] >>> {tokens}")

    parser = Parser(tokens)
    if parser.check("OPENQASM"):
        version = parser.parse_version()
        if version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion()
        print(f"[version] >>> OpenQASM {version}")
    return parser.parse_statements()


def start_repl(verbose: bool = False) -> list[ASTNode]:
    """Runs the REPL until exit and returns every statement parsed in the session."""
    print("OpenQASM REPL. Type 'exit' or 'quit' to leave.")
    program: list[ASTNode] = []

    while True:
        try:
            src = read_statement()
            if src is None:
                print("Exiting OpenQASM REPL.")
                break
            if not src or src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            try:
                nodes = eval_source(src, verbose=verbose)
            except (ParseError, IncludeError) as e:
                print(f"[error] >>> {e}")
                continue

            for node in nodes:
                print(repr(node))
            program.extend(nodes)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting OpenQASM REPL.")
            break

    return program


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
