from __future__ import annotations

import runpy


def test_main_module_runs_uvicorn(monkeypatch):
    captured = {}

    def fake_run(app: str, **kwargs) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)

    runpy.run_module("fleetops.main.__main__", run_name="__main__")

    assert captured["app"] == "fleetops.main.app:app"
    assert captured["port"] == 8000
    assert captured["log_config"] is None
