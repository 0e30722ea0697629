"""Data models and persistence for the opener."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .apps import ExternalApp
from .errors import PersistenceError

_LOGGER = logging.getLogger(__name__)

APP_TITLE = "Open In"
PREFERENCES_FILE = "preferences.json"
DEFAULT_APP = ExternalApp.CURSOR


class Preferences(BaseModel):
    """The single preference record kept per installation."""

    last_used_app: ExternalApp = DEFAULT_APP

    model_config = {"validate_assignment": True}


class OpenInAppRequest(BaseModel):
    path: str = Field(min_length=1)
    app: ExternalApp


class OpenFileInEditorRequest(BaseModel):
    path: str = Field(min_length=1)
    line: Optional[int] = Field(default=None, ge=1)
    column: Optional[int] = Field(default=None, ge=1)
    cwd: Optional[str] = None


class PreferenceStore:
    """Persist the last used application.

    Open it once at startup and ``close()`` it at shutdown; every write
    replaces the whole record on disk. The record is read on first access,
    so a damaged file only fails reads and is repaired by the next write.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / PREFERENCES_FILE
        self._closed = False
        self._prefs: Optional[Preferences] = None

    # ----- Lifecycle ---------------------------------------------------
    def __enter__(self) -> "PreferenceStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise PersistenceError("Preference store is closed")

    # ----- Persistence -------------------------------------------------
    def _load(self) -> Optional[Preferences]:
        if not self.path.exists():
            return None
        try:
            data = self.path.read_text(encoding="utf-8")
            return Preferences.model_validate_json(data)
        except (OSError, ValidationError) as exc:
            raise PersistenceError(f"Cannot read {self.path}: {exc}") from exc

    def _save(self, prefs: Preferences) -> None:
        payload = prefs.model_dump_json(indent=2)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".prefs-", dir=self.base_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self.path}: {exc}") from exc

    # ----- Access ------------------------------------------------------
    def get_last_used(self) -> ExternalApp:
        self._check_open()
        if self._prefs is None:
            self._prefs = self._load()
        if self._prefs is None:
            return DEFAULT_APP
        return self._prefs.last_used_app

    def set_last_used(self, app: ExternalApp) -> None:
        self._check_open()
        prefs = Preferences(last_used_app=app)
        self._save(prefs)
        self._prefs = prefs
        _LOGGER.debug("Last used app set to %s", prefs.last_used_app.value)


__all__ = [
    "APP_TITLE",
    "DEFAULT_APP",
    "PREFERENCES_FILE",
    "OpenFileInEditorRequest",
    "OpenInAppRequest",
    "PreferenceStore",
    "Preferences",
]
