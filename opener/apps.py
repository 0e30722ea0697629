"""Application identifiers and the per-platform launch candidates for each."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ExternalApp(str, Enum):
    FINDER = "finder"
    VSCODE = "vscode"
    VSCODE_INSIDERS = "vscode_insiders"
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    ZED = "zed"
    SUBLIME = "sublime"
    XCODE = "xcode"
    INTELLIJ = "intellij"
    WEBSTORM = "webstorm"
    PYCHARM = "pycharm"
    ITERM = "iterm"
    WARP = "warp"
    TERMINAL = "terminal"


APP_LABELS: Dict[ExternalApp, str] = {
    ExternalApp.FINDER: "File Manager",
    ExternalApp.VSCODE: "VS Code",
    ExternalApp.VSCODE_INSIDERS: "VS Code Insiders",
    ExternalApp.CURSOR: "Cursor",
    ExternalApp.WINDSURF: "Windsurf",
    ExternalApp.ZED: "Zed",
    ExternalApp.SUBLIME: "Sublime Text",
    ExternalApp.XCODE: "Xcode",
    ExternalApp.INTELLIJ: "IntelliJ IDEA",
    ExternalApp.WEBSTORM: "WebStorm",
    ExternalApp.PYCHARM: "PyCharm",
    ExternalApp.ITERM: "iTerm",
    ExternalApp.WARP: "Warp",
    ExternalApp.TERMINAL: "Terminal",
}


@dataclass(frozen=True)
class LaunchCandidate:
    """One concrete way to invoke an application.

    ``waits`` marks a short-lived launcher wrapper (``open -a``) whose exit
    status tells whether the application exists.
    """

    command: str
    args: Tuple[str, ...]
    waits: bool = False


# macOS application bundle names, most likely first.
MAC_BUNDLES: Dict[ExternalApp, Tuple[str, ...]] = {
    ExternalApp.VSCODE: ("Visual Studio Code",),
    ExternalApp.VSCODE_INSIDERS: ("Visual Studio Code - Insiders",),
    ExternalApp.CURSOR: ("Cursor",),
    ExternalApp.WINDSURF: ("Windsurf",),
    ExternalApp.ZED: ("Zed", "Zed Preview"),
    ExternalApp.SUBLIME: ("Sublime Text",),
    ExternalApp.XCODE: ("Xcode",),
    ExternalApp.INTELLIJ: ("IntelliJ IDEA", "IntelliJ IDEA CE"),
    ExternalApp.WEBSTORM: ("WebStorm",),
    ExternalApp.PYCHARM: ("PyCharm", "PyCharm CE"),
    ExternalApp.ITERM: ("iTerm",),
    ExternalApp.WARP: ("Warp",),
    ExternalApp.TERMINAL: ("Terminal",),
}

# Command line executables searched on PATH (Linux and other Unixes).
CLI_EXECUTABLES: Dict[ExternalApp, Tuple[str, ...]] = {
    ExternalApp.VSCODE: ("code",),
    ExternalApp.VSCODE_INSIDERS: ("code-insiders",),
    ExternalApp.CURSOR: ("cursor",),
    ExternalApp.WINDSURF: ("windsurf",),
    ExternalApp.ZED: ("zed", "zeditor"),
    ExternalApp.SUBLIME: ("subl", "sublime_text"),
    ExternalApp.INTELLIJ: ("idea", "intellij-idea-ultimate", "intellij-idea-community"),
    ExternalApp.WEBSTORM: ("webstorm",),
    ExternalApp.PYCHARM: ("pycharm", "charm", "pycharm-community"),
}

# Windows ships most editor shims as batch files.
WIN_EXECUTABLES: Dict[ExternalApp, Tuple[str, ...]] = {
    ExternalApp.VSCODE: ("code.cmd", "code"),
    ExternalApp.VSCODE_INSIDERS: ("code-insiders.cmd", "code-insiders"),
    ExternalApp.CURSOR: ("cursor.cmd", "cursor"),
    ExternalApp.WINDSURF: ("windsurf.cmd", "windsurf"),
    ExternalApp.ZED: ("zed",),
    ExternalApp.SUBLIME: ("subl",),
    ExternalApp.INTELLIJ: ("idea64.exe", "idea.cmd"),
    ExternalApp.WEBSTORM: ("webstorm64.exe", "webstorm.cmd"),
    ExternalApp.PYCHARM: ("pycharm64.exe", "pycharm.cmd"),
}

_GOTO_APPS = {
    ExternalApp.VSCODE,
    ExternalApp.VSCODE_INSIDERS,
    ExternalApp.CURSOR,
    ExternalApp.WINDSURF,
}
_SUFFIX_APPS = {ExternalApp.ZED, ExternalApp.SUBLIME}
_JETBRAINS_APPS = {ExternalApp.INTELLIJ, ExternalApp.WEBSTORM, ExternalApp.PYCHARM}


def _location(path: str, line: Optional[int], column: Optional[int]) -> str:
    if line is None:
        return path
    if column is None:
        return f"{path}:{line}"
    return f"{path}:{line}:{column}"


def _cli_args(
    app: ExternalApp, path: str, line: Optional[int], column: Optional[int]
) -> Tuple[str, ...]:
    if line is None:
        return (path,)
    if app in _GOTO_APPS:
        return ("--goto", _location(path, line, column))
    if app in _SUFFIX_APPS:
        return (_location(path, line, column),)
    if app in _JETBRAINS_APPS:
        args = ["--line", str(line)]
        if column is not None:
            args.extend(["--column", str(column)])
        args.append(path)
        return tuple(args)
    return (path,)


def resolve_candidates(
    app: ExternalApp,
    path: str,
    *,
    line: Optional[int] = None,
    column: Optional[int] = None,
    platform: Optional[str] = None,
) -> List[LaunchCandidate]:
    """Return the ordered launch candidates for ``app`` on ``platform``.

    An empty list means no specific launcher is known and the OS default
    handler should be used. The file manager is handled by the dispatcher
    and never has candidates.
    """

    platform = platform or sys.platform
    app = ExternalApp(app)
    if app is ExternalApp.FINDER:
        return []

    if platform == "darwin":
        return [
            LaunchCandidate("open", ("-a", bundle, path), waits=True)
            for bundle in MAC_BUNDLES.get(app, ())
        ]

    table = WIN_EXECUTABLES if platform.startswith("win") else CLI_EXECUTABLES
    args = _cli_args(app, path, line, column)
    return [LaunchCandidate(executable, args) for executable in table.get(app, ())]


__all__ = [
    "APP_LABELS",
    "ExternalApp",
    "LaunchCandidate",
    "resolve_candidates",
]
