from __future__ import annotations

import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from pydantic import ValidationError

from opener.apps import ExternalApp
from opener.errors import PersistenceError
from opener.models import DEFAULT_APP, PREFERENCES_FILE, PreferenceStore


def test_fresh_store_returns_default(tmp_path):
    store = PreferenceStore(tmp_path)
    assert store.get_last_used() is DEFAULT_APP
    assert not (tmp_path / PREFERENCES_FILE).exists()


def test_set_then_get(tmp_path):
    store = PreferenceStore(tmp_path)
    store.set_last_used(ExternalApp.ZED)
    assert store.get_last_used() is ExternalApp.ZED


def test_set_twice_is_idempotent(tmp_path):
    store = PreferenceStore(tmp_path)
    store.set_last_used(ExternalApp.VSCODE)
    first = (tmp_path / PREFERENCES_FILE).read_text(encoding="utf-8")
    store.set_last_used(ExternalApp.VSCODE)
    assert store.get_last_used() is ExternalApp.VSCODE
    assert (tmp_path / PREFERENCES_FILE).read_text(encoding="utf-8") == first


def test_last_write_wins_and_survives_reopen(tmp_path):
    with PreferenceStore(tmp_path) as store:
        store.set_last_used(ExternalApp.SUBLIME)
        store.set_last_used(ExternalApp.WARP)
    reopened = PreferenceStore(tmp_path)
    assert reopened.get_last_used() is ExternalApp.WARP
    payload = json.loads((tmp_path / PREFERENCES_FILE).read_text(encoding="utf-8"))
    assert payload == {"last_used_app": "warp"}


def test_single_record_file(tmp_path):
    store = PreferenceStore(tmp_path)
    for app in (ExternalApp.CURSOR, ExternalApp.ZED, ExternalApp.FINDER):
        store.set_last_used(app)
    assert [p.name for p in tmp_path.iterdir()] == [PREFERENCES_FILE]


def test_string_value_is_coerced(tmp_path):
    store = PreferenceStore(tmp_path)
    store.set_last_used("pycharm")
    assert store.get_last_used() is ExternalApp.PYCHARM


def test_invalid_app_rejected(tmp_path):
    store = PreferenceStore(tmp_path)
    with pytest.raises(ValidationError):
        store.set_last_used("notepad")
    assert store.get_last_used() is DEFAULT_APP


def test_corrupt_file_raises_on_read(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json", encoding="utf-8")
    store = PreferenceStore(tmp_path)
    with pytest.raises(PersistenceError):
        store.get_last_used()


def test_write_repairs_corrupt_file(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json", encoding="utf-8")
    store = PreferenceStore(tmp_path)
    store.set_last_used(ExternalApp.ZED)
    assert store.get_last_used() is ExternalApp.ZED
    assert PreferenceStore(tmp_path).get_last_used() is ExternalApp.ZED


def test_unknown_stored_app_raises(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text('{"last_used_app": "emacs"}', encoding="utf-8")
    store = PreferenceStore(tmp_path)
    with pytest.raises(PersistenceError):
        store.get_last_used()


def test_closed_store_rejects_use(tmp_path):
    store = PreferenceStore(tmp_path)
    store.close()
    assert store.closed
    with pytest.raises(PersistenceError):
        store.get_last_used()
    with pytest.raises(PersistenceError):
        store.set_last_used(ExternalApp.ZED)


def test_write_failure_raises(tmp_path, monkeypatch):
    store = PreferenceStore(tmp_path)

    def fail(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("opener.models.os.replace", fail)
    with pytest.raises(PersistenceError):
        store.set_last_used(ExternalApp.ZED)
    assert store.get_last_used() is DEFAULT_APP
    assert [p.name for p in tmp_path.iterdir()] == []


def test_stores_are_isolated(tmp_path):
    a = PreferenceStore(tmp_path / "a")
    b = PreferenceStore(tmp_path / "b")
    a.set_last_used(ExternalApp.XCODE)
    assert b.get_last_used() is DEFAULT_APP
