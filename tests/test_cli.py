from __future__ import annotations

import json
from pathlib import Path

import pytest

from barangay.cli import build_parser, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BARANGAY_STORE_URL", "REDIS_URL", "PORT", "BARANGAY_PORT"):
        monkeypatch.delenv(name, raising=False)


def test_stats_on_empty_memory_store(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--store-url", "memory://", "stats"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["genderStats"] == [{"_id": "Male", "count": 0}, {"_id": "Female", "count": 0}]


def test_seed(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--store-url", "memory://", "seed"]) == 0
    assert "Created 21 profiles" in capsys.readouterr().out


def test_health(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--store-url", "memory://", "health"]) == 0
    assert json.loads(capsys.readouterr().out)["status"] == "OK"


def test_export_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--store-url", "memory://", "export", "--format", "csv", "--output", str(tmp_path)]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["count"] == 0
    assert Path(result["filepath"]).exists()


def test_bad_store_url() -> None:
    assert main(["--store-url", "ftp://nowhere", "stats"]) == 1


def test_bad_port_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert main(["--store-url", "memory://", "stats"]) == 2


def test_serve_options_parse() -> None:
    args = build_parser().parse_args(["serve", "--port", "8000", "--seed"])
    assert args.command == "serve"
    assert args.port == 8000
    assert args.seed
