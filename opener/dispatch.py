"""Fallback dispatch of a path to an external application."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Sequence

from .apps import ExternalApp, LaunchCandidate, resolve_candidates
from .errors import ApplicationNotFoundError
from .launch import launch_candidate
from .system import open_with_default, reveal_in_file_manager

_LOGGER = logging.getLogger(__name__)

Resolver = Callable[..., Sequence[LaunchCandidate]]
Launcher = Callable[[LaunchCandidate], Awaitable[None]]


class Dispatcher:
    """Open paths in external applications, falling back across candidates.

    Candidates are tried in order. A candidate whose application is not
    installed moves on to the next one; any other launch failure is raised
    immediately. When every candidate is missing, the last not-found error is
    raised.
    """

    def __init__(
        self,
        resolve: Resolver = resolve_candidates,
        launch: Launcher = launch_candidate,
        reveal: Callable[[str], object] = reveal_in_file_manager,
        default_open: Callable[[str], Awaitable[None]] = open_with_default,
    ) -> None:
        self._resolve = resolve
        self._launch = launch
        self._reveal = reveal
        self._default_open = default_open

    async def open(
        self,
        path: str,
        app: ExternalApp,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        app = ExternalApp(app)
        if app is ExternalApp.FINDER:
            self._reveal(path)
            return

        if line is None:
            candidates = tuple(self._resolve(app, path))
        else:
            candidates = tuple(self._resolve(app, path, line=line, column=column))
        if not candidates:
            _LOGGER.debug("No launcher known for %s; using OS default for %s", app.value, path)
            await self._default_open(path)
            return

        last_error: Optional[ApplicationNotFoundError] = None
        for index, candidate in enumerate(candidates):
            _LOGGER.debug("Trying %s candidate %d: %s", app.value, index, candidate.command)
            try:
                await self._launch(candidate)
            except ApplicationNotFoundError as exc:
                _LOGGER.info("%s not available: %s", candidate.command, exc)
                last_error = exc
                continue
            return

        if last_error is not None:
            raise last_error


__all__ = ["Dispatcher"]
