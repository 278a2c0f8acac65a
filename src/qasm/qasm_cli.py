"""
OpenQASM CLI Entrypoint.

This module provides the command-line interface for inspecting OpenQASM 2.0
source: it preprocesses, lexes and parses a file or string and prints the token
stream or the AST.

Features:
    - Read source from `.qasm` files or inline strings.
    - Resolve `include` directives beside the source and in `-I` directories.
    - Print the AST as one statement per line, or as JSON.
    - Print the token stream instead of parsing.
    - Output to console or file.
    - Launch an interactive REPL.

Example usage:
    qasm bell.qasm
    qasm -s "OPENQASM 2.0; qreg q[2];" --json
    qasm circuit.qasm -I lib/ --tokens -o tokens.txt
    qasm --repl

Functions:
    run_qasm(source: str, is_string: bool = False, ...) -> str:
        Executes the pipeline (process → lex → parse → render) and returns the output.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import os.path
import sys
from collections.abc import Sequence

from qasm.qasm_errors import IncludeError, ParseError
from qasm.qasm_lexer import tokenize
from qasm.qasm_parser import Parser
from qasm.qasm_preprocess import process, process_file


def run_qasm(
    source: str,
    is_string: bool = False,
    include_paths: Sequence[str] = (),
    tokens: bool = False,
    as_json: bool = False,
    out: str | None = None,
    pretty: bool = False,
) -> str:
    """
    Run the OpenQASM front end and print (or write) the result.

    Args:
        source (str): OpenQASM source code or path to a `.qasm` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        include_paths (Sequence[str]): Extra directories searched for includes.
        tokens (bool): If True, render the token stream instead of the AST.
        as_json (bool): If True, render the AST (or tokens) as JSON.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        pretty (bool): If True, prints a banner around the output.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.qasm'.
        IncludeError: If an include directive cannot be resolved.
        ParseError: If the source is not a valid OpenQASM 2.0 program.
    """
    if not is_string and not source.endswith(".qasm"):
        raise ValueError("Only .qasm files are supported.")

    # 1. Preprocess
    if is_string:
        text = process(source, include_paths=include_paths)
    else:
        text = process_file(source, include_paths=include_paths)

    # 2. Lexing
    token_list = tokenize(text)

    # 3. Parsing and rendering
    if tokens:
        if as_json:
            output = json.dumps(
                [{"type": t.type, "value": t.value, "line": t.line, "col": t.col} for t in token_list],
                indent=2,
            )
        else:
            output = "\n".join(repr(t) for t in token_list)
    else:
        ast = Parser(token_list).parse()
        if as_json:
            output = json.dumps([node.to_dict() for node in ast], indent=2)
        else:
            output = "\n".join(repr(node) for node in ast)

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        title = "Tokens" if tokens else "AST"
        print(f"{banner}\n{title}\n{banner}\n{output}\n{banner}\n")
    else:
        print(output)

    return output


def main() -> None:
    """
    Entry point for the OpenQASM CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise runs `run_qasm`; parse and include errors are reported on
      stderr and the process exits with status 1.
    """
    if len(sys.argv) == 1:
        from qasm.qasm_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="qasm")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-I",
        "--include",
        dest="include_paths",
        action="append",
        default=[],
        metavar="DIR",
        help="Additional directory to search for included files",
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream instead of the AST"
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Output JSON")
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show tokens in the REPL (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from qasm.qasm_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    if not args.string and not os.path.isfile(args.source):
        print(f"error: File {args.source} not found", file=sys.stderr)
        sys.exit(1)

    try:
        run_qasm(
            source=args.source,
            is_string=args.string,
            include_paths=args.include_paths,
            tokens=args.tokens,
            as_json=args.as_json,
            out=args.out,
            pretty=args.pretty,
        )
    except (ParseError, IncludeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
