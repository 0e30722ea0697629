from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from pydantic import ValidationError

from opener import service
from opener.apps import ExternalApp
from opener.errors import ApplicationNotFoundError, DefaultOpenError, ExternalActionError, PersistenceError
from opener.models import DEFAULT_APP, PREFERENCES_FILE, PreferenceStore
from opener.service import ExternalActions


class FakeDispatcher:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def open(self, path, app, *, line=None, column=None):
        self.calls.append((path, app, line, column))
        if self.error is not None:
            raise self.error


def _actions(tmp_path, dispatcher=None, clipboard=None):
    store = PreferenceStore(tmp_path)
    return ExternalActions(dispatcher or FakeDispatcher(), store, clipboard=clipboard)


def test_open_in_app_stores_preference_and_dispatches(tmp_path):
    actions = _actions(tmp_path)
    asyncio.run(actions.open_in_app("/work/repo", ExternalApp.ZED))
    assert actions.preferences.get_last_used() is ExternalApp.ZED
    assert actions.dispatcher.calls == [("/work/repo", ExternalApp.ZED, None, None)]


def test_open_in_app_stores_preference_even_when_dispatch_fails(tmp_path):
    dispatcher = FakeDispatcher(error=ApplicationNotFoundError("missing", "zed"))
    actions = _actions(tmp_path, dispatcher)
    with pytest.raises(ApplicationNotFoundError):
        asyncio.run(actions.open_in_app("/work/repo", "zed"))
    assert actions.preferences.get_last_used() is ExternalApp.ZED


def test_open_in_app_validates_input(tmp_path):
    actions = _actions(tmp_path)
    with pytest.raises(ValidationError):
        asyncio.run(actions.open_in_app("/work/repo", "notepad"))
    with pytest.raises(ValidationError):
        asyncio.run(actions.open_in_app("", ExternalApp.ZED))
    assert actions.dispatcher.calls == []
    assert actions.preferences.get_last_used() is DEFAULT_APP


def test_open_file_in_editor_uses_default_app(tmp_path):
    actions = _actions(tmp_path)
    asyncio.run(actions.open_file_in_editor("/src/main.py", line=10, column=3))
    assert actions.dispatcher.calls == [(os.path.normpath("/src/main.py"), DEFAULT_APP, 10, 3)]


def test_open_file_in_editor_uses_last_used_and_cwd(tmp_path):
    actions = _actions(tmp_path)
    actions.preferences.set_last_used(ExternalApp.SUBLIME)
    asyncio.run(actions.open_file_in_editor("pkg/mod.py", cwd="/work/repo"))
    expected = os.path.normpath("/work/repo/pkg/mod.py")
    assert actions.dispatcher.calls == [(expected, ExternalApp.SUBLIME, None, None)]


def test_open_file_in_editor_does_not_change_preference(tmp_path):
    actions = _actions(tmp_path)
    actions.preferences.set_last_used(ExternalApp.WINDSURF)
    asyncio.run(actions.open_file_in_editor("/a.py"))
    assert actions.preferences.get_last_used() is ExternalApp.WINDSURF


def test_open_file_in_editor_rejects_bad_line(tmp_path):
    actions = _actions(tmp_path)
    with pytest.raises(ValidationError):
        asyncio.run(actions.open_file_in_editor("/a.py", line=0))


def test_copy_path_uses_clipboard(tmp_path):
    copied = []
    actions = _actions(tmp_path, clipboard=copied.append)
    actions.copy_path("/work/a.txt")
    assert copied == ["/work/a.txt"]


def test_copy_path_without_clipboard(tmp_path):
    with pytest.raises(ExternalActionError):
        _actions(tmp_path).copy_path("/work/a.txt")


def test_open_in_finder_reveals(tmp_path, monkeypatch):
    revealed = []
    monkeypatch.setattr(service, "reveal_in_file_manager", revealed.append)
    _actions(tmp_path).open_in_finder("/work/a.txt")
    assert revealed == ["/work/a.txt"]


def test_open_url_wraps_errors(tmp_path, monkeypatch):
    async def failing(url):
        raise DefaultOpenError("no browser", url)

    monkeypatch.setattr(service, "open_url", failing)
    with pytest.raises(ExternalActionError) as info:
        asyncio.run(_actions(tmp_path).open_url("https://example.com"))
    assert str(info.value) == "no browser"


def test_open_url_success(tmp_path, monkeypatch):
    opened = []

    async def fake(url):
        opened.append(url)

    monkeypatch.setattr(service, "open_url", fake)
    asyncio.run(_actions(tmp_path).open_url("https://example.com"))
    assert opened == ["https://example.com"]


def test_open_in_app_overwrites_damaged_preferences(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json", encoding="utf-8")
    actions = _actions(tmp_path)
    with pytest.raises(PersistenceError):
        asyncio.run(actions.open_file_in_editor("/a.py"))
    asyncio.run(actions.open_in_app("/work/repo", ExternalApp.ZED))
    assert actions.preferences.get_last_used() is ExternalApp.ZED
    assert actions.dispatcher.calls == [("/work/repo", ExternalApp.ZED, None, None)]
