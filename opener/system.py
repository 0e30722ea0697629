"""Operating system primitives: reveal, default-open and path resolution."""
from __future__ import annotations

import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Union

from .errors import DefaultOpenError

_LOGGER = logging.getLogger(__name__)


def resolve_path(path: str, cwd: Optional[str] = None) -> str:
    """Expand ``~`` and anchor a relative ``path`` on ``cwd`` (or the process cwd)."""
    target = Path(path.strip()).expanduser()
    if not target.is_absolute():
        base = Path(cwd).expanduser() if cwd else Path.cwd()
        target = base / target
    return os.path.normpath(str(target))


def _reveal_command(path: str, platform: Optional[str] = None) -> Union[str, list[str]]:
    platform = platform or sys.platform
    if platform == "darwin":
        return ["open", "-R", path]
    if platform.startswith("win"):
        # explorer only parses /select, when the quotes wrap the path alone
        return f'explorer /select,"{path}"'
    target = Path(path)
    folder = target if target.is_dir() else target.parent
    return ["xdg-open", str(folder)]


def reveal_in_file_manager(path: str) -> bool:
    """Show ``path`` in the system file manager. Fire-and-forget."""
    cmd = _reveal_command(path)
    try:
        subprocess.Popen(cmd, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as exc:
        _LOGGER.warning("Could not reveal %s: %s", path, exc)
        return False
    _LOGGER.info("Revealed %s", path)
    return True


def _default_open_command(target: str) -> list[str]:
    if sys.platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


async def _start(target: str) -> None:
    if sys.platform.startswith("win"):
        try:
            os.startfile(target)  # type: ignore[attr-defined]
        except OSError as exc:
            raise DefaultOpenError(f"No handler could open {target}: {exc}", target) from exc
        return

    cmd = _default_open_command(target)
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd, stdin=subprocess.DEVNULL, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE
        )
    except OSError as exc:
        raise DefaultOpenError(f"Cannot run {cmd[0]}: {exc}", target) from exc
    _, err = await proc.communicate()
    if proc.returncode != 0:
        detail = (err or b"").decode("utf-8", errors="replace").strip()
        raise DefaultOpenError(detail or f"{cmd[0]} exited with status {proc.returncode}", target)


async def open_with_default(path: str) -> None:
    """Open ``path`` with the handler the OS has registered for it."""
    await _start(path)
    _LOGGER.info("Opened with OS handler: %s", path)


async def open_url(url: str) -> None:
    await _start(url)
    _LOGGER.info("Opened URL: %s", url)
