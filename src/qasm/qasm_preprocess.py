"""
Source preprocessing for OpenQASM files.

The lexer expects text with no comments and no include directives. `process`
produces that text: it strips `//` line comments and replaces every
`include "file";` with the processed contents of the named file, recursively.

Include files are searched for in the directory of the including file first,
then in each of `include_paths` in order.

Raises:
    IncludeError: If an include cannot be found, is circular, or nests deeper
        than `DEPTH_LIMIT`.

Example:
    >>> process('OPENQASM 2.0; // header\\nqreg q[1];')
    'OPENQASM 2.0; \\nqreg q[1];'
"""

import os.path
import re
from collections.abc import Sequence

from qasm.qasm_errors import IncludeError

COMMENT_RE = re.compile(r"//.*")
INCLUDE_RE = re.compile(r'include\s*"(?P<path>.*?)"\s*;')

DEPTH_LIMIT = 10


def strip_comments(source: str) -> str:
    return COMMENT_RE.sub("", source)


def find_include(name: str, cwd: str, include_paths: Sequence[str] = ()) -> str:
    """Returns the path of the first existing candidate for an include."""
    for directory in (cwd, *include_paths):
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate
    raise IncludeError(IncludeError.not_found.format(name))


def process(
    source: str,
    cwd: str = ".",
    include_paths: Sequence[str] = (),
    _stack: tuple[str, ...] = (),
) -> str:
    """
    Remove comments and expand include directives.

    Args:
        source (str): Raw OpenQASM source.
        cwd (str): Directory that relative includes in `source` resolve against.
        include_paths (Sequence[str]): Extra directories searched after `cwd`.

    Returns:
        str: Comment-free source with every include spliced in place.
    """
    if len(_stack) > DEPTH_LIMIT:
        raise IncludeError(IncludeError.too_deep.format(DEPTH_LIMIT))

    def replace_with_file(match: re.Match[str]) -> str:
        path = os.path.abspath(find_include(match["path"], cwd, include_paths))
        if path in _stack:
            raise IncludeError(IncludeError.circular.format(match["path"]))
        with open(path, encoding="utf-8") as f:
            contents = f.read()
        return process(
            contents,
            cwd=os.path.dirname(path),
            include_paths=include_paths,
            _stack=(*_stack, path),
        )

    return INCLUDE_RE.sub(replace_with_file, strip_comments(source))


def process_file(path: str, include_paths: Sequence[str] = ()) -> str:
    """Reads and processes a source file; its includes resolve beside it."""
    with open(path, encoding="utf-8") as f:
        source = f.read()
    path = os.path.abspath(path)
    return process(
        source,
        cwd=os.path.dirname(path),
        include_paths=include_paths,
        _stack=(path,),
    )


__all__ = ["DEPTH_LIMIT", "find_include", "process", "process_file", "strip_comments"]
