import runpy
import sys

import pytest


def test_cli_main_guard_runpy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delitem(sys.modules, "suffixscan.cli", raising=False)
    monkeypatch.setattr(sys, "argv", ["suffixscan", "--help"])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("suffixscan.cli", run_name="__main__")
    assert exc.value.code == 0
