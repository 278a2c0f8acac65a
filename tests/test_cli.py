import json
import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from qasm import qasm_cli
from qasm.qasm_errors import MissingVersion, SourceError


def test_run_qasm_string_input_prints(
    capsys: pytest.CaptureFixture[str], bell_source: str
) -> None:
    output = qasm_cli.run_qasm(source=bell_source, is_string=True)
    out = capsys.readouterr().out.strip()
    assert out == output
    assert out.splitlines() == [
        "QReg(name='q', size=2)",
        "CReg(name='c', size=2)",
        "ApplyGate(name='h', arguments=[Qubit(register='q', index=0)], params=[])",
        "ApplyGate(name='CX', arguments=[Qubit(register='q', index=0), "
        "Qubit(register='q', index=1)], params=[])",
        "Measure(source=Qubit(register='q', index=1), dest=Qubit(register='c', index=1))",
    ]


def test_run_qasm_file_input(bell_file: Path) -> None:
    output = qasm_cli.run_qasm(source=str(bell_file))
    assert output.startswith("QReg(name='q', size=2)")


def test_run_qasm_rejects_other_extensions(tmp_path: Path) -> None:
    path = tmp_path / "bell.txt"
    path.write_text("OPENQASM 2.0;")
    with pytest.raises(ValueError, match="Only .qasm files are supported."):
        qasm_cli.run_qasm(source=str(path))


def test_run_qasm_json(bell_source: str) -> None:
    output = qasm_cli.run_qasm(source=bell_source, is_string=True, as_json=True)
    data = json.loads(output)
    assert [d["kind"] for d in data] == ["qreg", "creg", "apply_gate", "apply_gate", "measure"]
    assert data[0] == {"kind": "qreg", "name": "q", "size": 2, "line": 2, "col": 1}


def test_run_qasm_tokens(bell_source: str) -> None:
    output = qasm_cli.run_qasm(source=bell_source, is_string=True, tokens=True)
    lines = output.splitlines()
    assert lines[:3] == ["Token(OPENQASM, OPENQASM)", "Token(REAL, 2.0)", "Token(SEMICOLON, ;)"]
    assert "Token(EOF, EOF)" not in lines


def test_run_qasm_tokens_json() -> None:
    output = qasm_cli.run_qasm(source="qreg q[2];", is_string=True, tokens=True, as_json=True)
    data = json.loads(output)
    assert data[0] == {"type": "QREG", "value": "qreg", "line": 1, "col": 1}
    assert data[3] == {"type": "INT", "value": 2, "line": 1, "col": 8}


def test_run_qasm_tokens_skip_parsing() -> None:
    output = qasm_cli.run_qasm(source="not a program ~", is_string=True, tokens=True)
    assert "Token(ILLEGAL, ~)" in output


def test_run_qasm_pretty_output(
    capsys: pytest.CaptureFixture[str], bell_source: str
) -> None:
    qasm_cli.run_qasm(source=bell_source, is_string=True, pretty=True)
    out = capsys.readouterr().out
    assert "AST" in out
    assert "=" * 20 in out

    qasm_cli.run_qasm(source=bell_source, is_string=True, tokens=True, pretty=True)
    assert "Tokens" in capsys.readouterr().out


def test_run_qasm_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], bell_source: str
) -> None:
    output_path = tmp_path / "out.txt"
    output = qasm_cli.run_qasm(source=bell_source, is_string=True, out=str(output_path))
    assert output_path.read_text() == output + "\n"
    assert capsys.readouterr().out == ""

    qasm_cli.run_qasm(
        source=bell_source, is_string=True, out=str(output_path), pretty=True
    )
    assert f"(wrote to {output_path})" in capsys.readouterr().out


def test_run_qasm_expands_includes(tmp_path: Path) -> None:
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "gates.inc").write_text("gate h a { u2(0,pi) a; }")
    main = tmp_path / "main.qasm"
    main.write_text('OPENQASM 2.0;\ninclude "gates.inc";\nqreg q[1];\nh q[0];')
    output = qasm_cli.run_qasm(source=str(main), include_paths=[str(lib)], as_json=True)
    assert [d["kind"] for d in json.loads(output)] == ["gate", "qreg", "apply_gate"]


def test_run_qasm_propagates_parse_errors() -> None:
    with pytest.raises(MissingVersion):
        qasm_cli.run_qasm(source="qreg q[1];", is_string=True)
    with pytest.raises(SourceError):
        qasm_cli.run_qasm(source="OPENQASM 2.0; if (c = 1) x q;", is_string=True)


def test_main_string_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["qasm", "-s", "OPENQASM 2.0; qreg q[3];"])
    qasm_cli.main()
    assert capsys.readouterr().out.strip() == "QReg(name='q', size=3)"


def test_main_file_source_with_json(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], bell_file: Path
) -> None:
    monkeypatch.setattr(sys, "argv", ["qasm", str(bell_file), "--json"])
    qasm_cli.main()
    assert len(json.loads(capsys.readouterr().out)) == 5


def test_main_include_flag(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "regs.inc").write_text("qreg q[1];")
    source = 'OPENQASM 2.0; include "regs.inc";'
    monkeypatch.setattr(sys, "argv", ["qasm", "-s", source, "-I", str(lib)])
    qasm_cli.main()
    assert "QReg(name='q', size=1)" in capsys.readouterr().out


def test_main_missing_file(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["qasm", "nonexistent.qasm"])
    with pytest.raises(SystemExit) as excinfo:
        qasm_cli.main()
    assert excinfo.value.code == 1
    assert "error: File nonexistent.qasm not found" in capsys.readouterr().err


def test_main_parse_error_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["qasm", "-s", "OPENQASM 2.0; qreg q[2]"])
    with pytest.raises(SystemExit) as excinfo:
        qasm_cli.main()
    assert excinfo.value.code == 1
    assert "error: There Was An Error In Your Source Code" in capsys.readouterr().err


def test_main_include_error_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["qasm", "-s", 'include "missing.inc";'])
    with pytest.raises(SystemExit):
        qasm_cli.main()
    assert "Include file missing.inc not found" in capsys.readouterr().err


def test_main_wrong_extension_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    path = tmp_path / "prog.txt"
    path.write_text("OPENQASM 2.0;")
    monkeypatch.setattr(sys, "argv", ["qasm", str(path)])
    with pytest.raises(SystemExit):
        qasm_cli.main()
    assert "Only .qasm files are supported." in capsys.readouterr().err


def test_main_no_args_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, bool] = {}
    monkeypatch.setattr(sys, "argv", ["qasm"])
    monkeypatch.setattr(
        "qasm.qasm_repl.start_repl", lambda verbose=False: called.setdefault("repl", verbose)
    )
    qasm_cli.main()
    assert called == {"repl": False}


def test_main_repl_flag_with_verbose(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, bool] = {}
    monkeypatch.setattr(sys, "argv", ["qasm", "--repl", "--verbose"])
    monkeypatch.setattr(
        "qasm.qasm_repl.start_repl", lambda verbose=False: called.setdefault("repl", verbose)
    )
    qasm_cli.main()
    assert called == {"repl": True}


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(size=st.integers(min_value=0, max_value=10**6))  # type: ignore[misc]
def test_run_qasm_register_sizes(
    size: int, capsys: pytest.CaptureFixture[str]
) -> None:
    output = qasm_cli.run_qasm(source=f"OPENQASM 2.0; creg c[{size}];", is_string=True)
    capsys.readouterr()
    assert output == f"CReg(name='c', size={size})"
