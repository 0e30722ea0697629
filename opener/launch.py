"""Start external processes for launch candidates and classify failures."""
from __future__ import annotations

import asyncio
import errno
import logging
import shutil
import subprocess
import sys
from typing import Tuple

from .apps import LaunchCandidate
from .errors import ApplicationNotFoundError, LaunchError, OtherLaunchError

_LOGGER = logging.getLogger(__name__)

# Wrapper output that means "no such application"; matched case-insensitively.
NOT_FOUND_PHRASES: Tuple[str, ...] = ("unable to find application",)


def classify_spawn_error(
    exc: OSError, command: str, args: Tuple[str, ...] = (), located: bool = False
) -> LaunchError:
    """Map an OSError raised while spawning ``command`` to a launch error.

    ``located`` says ``command`` itself resolves on the search path; an ENOENT
    then comes from a missing interpreter or library, not a missing program.
    """

    missing = isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT
    if missing and not located:
        return ApplicationNotFoundError(f"Executable not found: {command}", command, args)
    return OtherLaunchError(f"Failed to launch {command}: {exc}", command, args)


def classify_wrapper_failure(
    returncode: int, stderr: str, command: str, args: Tuple[str, ...] = ()
) -> LaunchError:
    """Map a launcher wrapper's non-zero exit to a launch error."""

    message = stderr.strip() or f"{command} exited with status {returncode}"
    lowered = message.lower()
    if any(phrase in lowered for phrase in NOT_FOUND_PHRASES):
        return ApplicationNotFoundError(message, command, args)
    return OtherLaunchError(message, command, args)


def _detach_kwargs() -> dict:
    if sys.platform.startswith("win"):
        flags = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
            subprocess, "CREATE_NEW_PROCESS_GROUP", 0
        )
        return {"creationflags": flags}
    return {"start_new_session": True}


async def launch_candidate(candidate: LaunchCandidate) -> None:
    """Start ``candidate`` as an independent process.

    Returns once the process has been created. Wrapper candidates are awaited
    until the wrapper exits, since its exit status is the only signal that
    the wrapped application exists.
    """

    command, args = candidate.command, tuple(candidate.args)
    if not candidate.waits:
        # Popen, not an asyncio transport: the transport kills its child when collected.
        try:
            proc = await asyncio.to_thread(
                subprocess.Popen,
                [command, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **_detach_kwargs(),
            )
        except OSError as exc:
            raise classify_spawn_error(exc, command, args, shutil.which(command) is not None) from exc
        _LOGGER.info("Launched %s (pid %s)", command, proc.pid)
        return

    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise classify_spawn_error(exc, command, args, shutil.which(command) is not None) from exc

    _, err = await proc.communicate()
    if proc.returncode != 0:
        text = (err or b"").decode("utf-8", errors="replace")
        raise classify_wrapper_failure(proc.returncode, text, command, args)
    _LOGGER.info("Launched %s %s", command, " ".join(args))


__all__ = [
    "NOT_FOUND_PHRASES",
    "classify_spawn_error",
    "classify_wrapper_failure",
    "launch_candidate",
]
