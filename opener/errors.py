"""Exception types raised while opening paths in external applications."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple


class OpenerError(Exception):
    """Base class for every error raised by the opener package."""


class LaunchError(OpenerError):
    """A launch candidate could not be started."""

    def __init__(self, message: str, command: str = "", args: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = command
        self.launch_args: Tuple[str, ...] = tuple(args)


class ApplicationNotFoundError(LaunchError):
    """The candidate's executable or application bundle is not installed."""


class OtherLaunchError(LaunchError):
    """The executable exists but failed to start (bad path, permissions, ...)."""


class DefaultOpenError(OpenerError):
    """The operating system's default handler could not open the path."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class PersistenceError(OpenerError):
    """Reading or writing the preference record failed."""


class ExternalActionError(OpenerError):
    """A boundary action (open URL, copy path) failed."""


__all__ = [
    "OpenerError",
    "LaunchError",
    "ApplicationNotFoundError",
    "OtherLaunchError",
    "DefaultOpenError",
    "PersistenceError",
    "ExternalActionError",
]
