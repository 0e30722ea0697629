"""Actions the desktop UI invokes to hand paths and URLs to other programs."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from .apps import ExternalApp
from .dispatch import Dispatcher
from .errors import ExternalActionError
from .models import OpenFileInEditorRequest, OpenInAppRequest, PreferenceStore
from .system import open_url, resolve_path, reveal_in_file_manager

_LOGGER = logging.getLogger(__name__)


class ExternalActions:
    def __init__(
        self,
        dispatcher: Dispatcher,
        preferences: PreferenceStore,
        clipboard: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.preferences = preferences
        self.clipboard = clipboard

    async def open_url(self, url: str) -> None:
        try:
            await open_url(url)
        except Exception as exc:
            _LOGGER.error("Failed to open URL %s: %s", url, exc)
            raise ExternalActionError(str(exc) or "Unknown error") from exc

    def open_in_finder(self, path: str) -> None:
        reveal_in_file_manager(path)

    async def open_in_app(self, path: str, app: ExternalApp) -> None:
        """Remember ``app`` as the last used application, then open ``path`` in it."""
        request = OpenInAppRequest(path=path, app=app)
        self.preferences.set_last_used(request.app)
        await self.dispatcher.open(request.path, request.app)

    def copy_path(self, path: str) -> None:
        if self.clipboard is None:
            raise ExternalActionError("No clipboard available")
        self.clipboard(path)

    async def open_file_in_editor(
        self,
        path: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        cwd: Optional[str] = None,
    ) -> None:
        """Open ``path`` in the last used application, at ``line``/``column`` when given."""
        request = OpenFileInEditorRequest(path=path, line=line, column=column, cwd=cwd)
        target = resolve_path(request.path, request.cwd)
        app = self.preferences.get_last_used()
        await self.dispatcher.open(target, app, line=request.line, column=request.column)


__all__ = ["ExternalActions"]
