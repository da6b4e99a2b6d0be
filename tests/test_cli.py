from __future__ import annotations

from pathlib import Path

import pytest

from rackc.cli import main


def _write(tmp_path: Path, src: str, name: str = "prog.rk") -> Path:
    p = tmp_path / name
    p.write_text(src, encoding="utf-8")
    return p


def test_successful_compile(tmp_path: Path) -> None:
    src = _write(tmp_path, 'fn main -> int begin "hi\\n" puts end\n')
    assert main([str(src)]) == 0
    asm = (tmp_path / "prog.asm").read_text(encoding="utf-8")
    assert "func_main:" in asm
    assert "\tstr_0: db `hi\\n`" in asm


def test_output_flag(tmp_path: Path) -> None:
    src = _write(tmp_path, "fn main -> int begin end")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    assert main([str(src), "-o", str(out_dir / "bin")]) == 0
    assert (out_dir / "bin.asm").exists()


def test_hard_error_reports_and_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, "fn main -> int begin foo end")
    assert main([str(src)]) == 1
    err = capsys.readouterr().err
    assert "error: undeclared function foo" in err
    assert f"--> {src}:1:22" in err
    assert "aborting due to 1 previous error" in err


def test_diagnostics_alone_fail_the_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, "fn main -> int begin 7 print end")
    assert main([str(src)]) == 1
    assert "Number is not allowed in this context" in capsys.readouterr().err
    # Best-effort output is still written.
    assert "func_main:" in (tmp_path / "prog.asm").read_text(encoding="utf-8")


def test_lex_errors_are_all_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, "fn main -> int begin\n  @ print\n  # print\nend\n")
    assert main([str(src)]) == 1
    err = capsys.readouterr().err
    assert "unexpected character '@'" in err
    assert "unexpected character '#'" in err
    assert "aborting due to 2 previous errors" in err
    assert not (tmp_path / "prog.asm").exists()


def test_empty_source(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, "")
    assert main([str(src)]) == 1
    assert "LexError::EmptySource" in capsys.readouterr().err


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nope.rk"
    assert main([str(missing)]) == 1
    out = capsys.readouterr().out
    assert f"[ERROR]: error occurred while reading file {missing}: no such file" in out


def test_dump_tokens(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, "fn main -> int begin end")
    assert main([str(src), "--dump-tokens"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 6
    assert out[0].startswith("Token { lexeme: fn, kind: KeywordOrIdentifier, span: ")
    assert out[2].startswith("Token { lexeme: ->, kind: Arrow, span: ")
    assert not (tmp_path / "prog.asm").exists()


def test_unknown_target_is_rejected(tmp_path: Path) -> None:
    src = _write(tmp_path, "fn main -> int begin end")
    with pytest.raises(SystemExit) as e:
        main([str(src), "--target", "z80"])
    assert e.value.code == 2


def test_unknown_target_from_env_is_rejected(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("RACKC_TARGET", "z80")
    src = _write(tmp_path, "fn main -> int begin end")
    with pytest.raises(SystemExit) as e:
        main([str(src)])
    assert e.value.code == 2
    assert "unknown target 'z80'" in capsys.readouterr().err
    assert not (tmp_path / "prog.asm").exists()


def test_dump_tokens_reports_diagnostics(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = _write(tmp_path, 'fn "abc')
    assert main([str(src), "--dump-tokens"]) == 1
    captured = capsys.readouterr()
    assert captured.out.startswith("Token { lexeme: fn, kind: KeywordOrIdentifier, span: ")
    assert "error: unexpected eof: unterminated string literal" in captured.err
    assert "aborting due to 1 previous error" in captured.err
