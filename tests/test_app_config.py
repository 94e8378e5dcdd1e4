from __future__ import annotations

import json
from pathlib import Path

from audiotranslator.app import config as app_config
from audiotranslator.nlp.languages import Language


def test_load_default_config_contains_expected_keys() -> None:
    cfg = app_config.load_default_config()
    assert cfg["translator"] in {"http", "stub"}
    assert cfg["source_language"] == "english"
    assert cfg["target_language"] == "hindi"
    assert cfg["endpoint"] == "/translate"
    assert cfg["request_timeout"] is None


def test_resolve_defaults_uses_explicit_config(tmp_path: Path) -> None:
    cfg_path = tmp_path / "explicit.json"
    cfg_path.write_text(json.dumps({"sr": 48000, "target_language": "tamil"}), encoding="utf-8")
    defaults, used = app_config.resolve_defaults(str(cfg_path))
    assert used == cfg_path
    assert defaults["sr"] == 48000
    assert defaults["target_language"] == "tamil"
    assert defaults["source_language"] == "english"


def test_ensure_user_config_exists_creates_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    created = app_config.ensure_user_config_exists({"translator": "stub", "sr": 16000})
    assert created.exists()
    loaded = json.loads(created.read_text(encoding="utf-8"))
    assert loaded["translator"] == "stub"
    assert loaded["sr"] == 16000


def test_load_user_config_ignores_unknown_keys(tmp_path: Path) -> None:
    cfg_path = tmp_path / "user.json"
    cfg_path.write_text(
        json.dumps({"sr": 48000, "translator": "stub", "unexpected": 1}),
        encoding="utf-8",
    )
    loaded, used = app_config.load_user_config(str(cfg_path))
    assert used == cfg_path
    assert loaded["sr"] == 48000
    assert loaded["translator"] == "stub"
    assert "unexpected" not in loaded


def test_load_user_config_accepts_bom(tmp_path: Path) -> None:
    cfg_path = tmp_path / "bom.json"
    cfg_path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"poll_ms": 25}).encode("utf-8"))
    loaded, _ = app_config.load_user_config(str(cfg_path))
    assert loaded["poll_ms"] == 25


def test_save_user_config_merges_and_filters_keys(tmp_path: Path) -> None:
    cfg_path = tmp_path / "user.json"
    cfg_path.write_text(
        json.dumps({"sr": 16000, "translator": "stub", "debug": False}),
        encoding="utf-8",
    )
    saved = app_config.save_user_config(
        {"translator": "http", "poll_ms": 30, "junk": "x"},
        config_path=str(cfg_path),
    )
    assert saved == cfg_path
    loaded = json.loads(cfg_path.read_text(encoding="utf-8"))
    assert loaded["sr"] == 16000
    assert loaded["translator"] == "http"
    assert loaded["poll_ms"] == 30
    assert "junk" not in loaded


def test_save_language_selection_is_read_back_on_next_start(tmp_path: Path) -> None:
    cfg_path = tmp_path / "user.json"
    cfg_path.write_text(json.dumps({"sr": 48000}), encoding="utf-8")
    app_config.save_language_selection(Language.TAMIL, "fr", config_path=str(cfg_path))

    loaded = json.loads(cfg_path.read_text(encoding="utf-8"))
    assert loaded["source_language"] == "tamil"
    assert loaded["target_language"] == "french"
    assert loaded["sr"] == 48000

    args = app_config.resolve_args(["--config", str(cfg_path)])
    assert (args.source_language, args.target_language) == ("tamil", "french")
