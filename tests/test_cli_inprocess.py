from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

import suffixscan.cli as cli
from suffixscan._cli_args import build_parser
from suffixscan.contracts import (
    CLASSPATH_ENV,
    DEFAULT_MAX_RESOURCES,
    REPORT_SCHEMA_VERSION,
    ExitCode,
)
from tests._classfile_fixtures import write_jar
from tests.conftest import ClassTreeFactory

EXPECTED_REPORT = (
    "org.pkg.beans.factory.BeanFactory\n"
    "org.pkg.core.env.PropertyResolver\n"
    "org.pkg.core.io.DefaultResourceLoader\n"
    "org.pkg.core.io.Resource\n"
)


def _run_main(monkeypatch: pytest.MonkeyPatch, args: list[str]) -> None:
    monkeypatch.setattr(sys, "argv", ["suffixscan", *args])
    cli.main()


def _run_exit_code(monkeypatch: pytest.MonkeyPatch, args: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, args)
    code = exc.value.code
    return code if isinstance(code, int) else 0


def test_cli_reports_representatives(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    _run_main(monkeypatch, ["--classpath", str(root)])
    captured = capsys.readouterr()
    assert captured.out == EXPECTED_REPORT


def test_cli_output_stable_across_runs(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    _run_main(monkeypatch, ["--classpath", str(root)])
    first = capsys.readouterr().out
    _run_main(monkeypatch, ["--classpath", str(root)])
    assert capsys.readouterr().out == first


def test_cli_uses_classpath_env(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    monkeypatch.setenv(CLASSPATH_ENV, str(root))
    _run_main(monkeypatch, [])
    assert capsys.readouterr().out == EXPECTED_REPORT


def test_cli_defaults_to_current_directory(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    monkeypatch.delenv(CLASSPATH_ENV, raising=False)
    monkeypatch.chdir(root)
    _run_main(monkeypatch, [])
    assert capsys.readouterr().out == EXPECTED_REPORT


def test_cli_pattern_narrows_scan(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    _run_main(
        monkeypatch,
        ["--classpath", str(root), "classpath*:org/pkg/core/io/**/*.class"],
    )
    assert capsys.readouterr().out == (
        "org.pkg.core.io.support.PathMatchingResourcePatternResolver\n"
        "org.pkg.core.io.DefaultResourceLoader\n"
        "org.pkg.core.io.Resource\n"
    )


def test_cli_multiple_roots(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree("app.web.HomeController", "app.web.UserController")
    jar = write_jar(tmp_path / "lib.jar", ["lib.AdminController", "lib.Helper"])
    classpath = os.pathsep.join([str(root), str(jar)])
    _run_main(monkeypatch, ["-cp", classpath])
    assert capsys.readouterr().out == "app.web.HomeController\nlib.Helper\n"


def test_cli_corrupt_resource_is_skipped(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree("org.Alpha")
    (root / "org" / "Broken.class").write_bytes(b"junk")
    _run_main(monkeypatch, ["--classpath", str(root), "--summary"])
    captured = capsys.readouterr()
    assert captured.out == "org.Alpha\n"
    assert "Skipping resource" in captured.err
    assert "Scan Summary" in captured.err
    assert "Resources skipped" in captured.err


def test_cli_quiet_hides_warnings(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree("org.Alpha")
    (root / "org" / "Broken.class").write_bytes(b"junk")
    _run_main(monkeypatch, ["--classpath", str(root), "--quiet"])
    captured = capsys.readouterr()
    assert captured.out == "org.Alpha\n"
    assert captured.err == ""


def test_cli_summary_counts(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    _run_main(monkeypatch, ["--classpath", str(root), "--summary", "--no-color"])
    captured = capsys.readouterr()
    assert captured.out == EXPECTED_REPORT
    assert "Suffix groups" in captured.err
    assert "Type names filtered" in captured.err
    assert "accounting mismatch" not in captured.err


def test_cli_json_report(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    out = tmp_path / "reports" / "conventions.json"
    _run_main(monkeypatch, ["--classpath", str(root), "--json", str(out)])
    captured = capsys.readouterr()
    assert captured.out == EXPECTED_REPORT
    assert "JSON report saved" in captured.err

    payload = json.loads(out.read_text("utf-8"))
    assert payload["meta"]["report_schema_version"] == REPORT_SCHEMA_VERSION
    assert payload["meta"]["patterns"] == ["classpath*:**/*.class"]
    assert payload["meta"]["names_kept"] == 8
    assert payload["groups"][0] == {
        "suffix": "Factory",
        "representative": "org.pkg.beans.factory.BeanFactory",
        "size": 3,
    }
    assert [group["suffix"] for group in payload["groups"]] == [
        "Factory",
        "Resolver",
        "Loader",
        "Resource",
    ]


def test_cli_json_invalid_extension(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    code = _run_exit_code(
        monkeypatch, ["--classpath", str(root), "--json", str(tmp_path / "r.txt")]
    )
    captured = capsys.readouterr()
    assert code == ExitCode.CONTRACT_ERROR
    assert captured.out == ""
    assert "CONTRACT ERROR" in captured.err


def test_cli_invalid_classpath_root(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    code = _run_exit_code(monkeypatch, ["--classpath", str(tmp_path / "missing")])
    captured = capsys.readouterr()
    assert code == ExitCode.CONTRACT_ERROR
    assert captured.out == ""
    assert "Cannot set up the collector" in captured.err


def test_cli_resource_limit(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()
    code = _run_exit_code(
        monkeypatch, ["--classpath", str(root), "--max-resources", "2"]
    )
    captured = capsys.readouterr()
    assert code == ExitCode.CONTRACT_ERROR
    assert "Scan failed" in captured.err


def test_cli_internal_error(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()

    def _boom(*_args: object, **_kwargs: object) -> object:
        raise RuntimeError("grouping exploded")

    monkeypatch.setattr(cli, "build_groups", _boom)
    code = _run_exit_code(monkeypatch, ["--classpath", str(root)])
    captured = capsys.readouterr()
    assert code == ExitCode.INTERNAL_ERROR
    assert "INTERNAL ERROR" in captured.err
    assert "RuntimeError: grouping exploded" in captured.err
    assert "Traceback" not in captured.err


def test_cli_internal_error_debug(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    class_tree: ClassTreeFactory,
) -> None:
    root = class_tree()

    def _boom(*_args: object, **_kwargs: object) -> object:
        raise RuntimeError("grouping exploded")

    monkeypatch.setattr(cli, "build_groups", _boom)
    code = _run_exit_code(monkeypatch, ["--classpath", str(root), "--debug"])
    captured = capsys.readouterr()
    assert code == ExitCode.INTERNAL_ERROR
    assert "DEBUG DETAILS" in captured.err
    assert "Traceback" in captured.err


def test_is_debug_enabled() -> None:
    assert cli._is_debug_enabled(argv=["--debug"], environ={}) is True
    assert cli._is_debug_enabled(argv=[], environ={"SUFFIXSCAN_DEBUG": "1"}) is True
    assert cli._is_debug_enabled(argv=[], environ={}) is False


def test_cli_version(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    code = _run_exit_code(monkeypatch, ["--version"])
    assert code == 0
    assert capsys.readouterr().out.startswith("SuffixScan ")


def test_cli_help_shows_defaults_and_keeps_epilog(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("COLUMNS", "200")
    text = build_parser("1.0.0").format_help()
    assert "worker processes used to read class files. (default: 1)" in text
    assert f"(default: {DEFAULT_MAX_RESOURCES})" in text
    assert "Exit codes\n  - 0 - " in text
    assert "PATTERN" in text
    assert "(default: None)" not in text
