"""Application entry point."""
from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
import sys

from PySide6 import QtWidgets
import qasync

from opener.dispatch import Dispatcher
from opener.models import PreferenceStore
from opener.service import ExternalActions
from ui.main_window import MainWindow

LOG_DIR = Path(__file__).resolve().parent / "logs"
LOG_DIR.mkdir(exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.FileHandler(LOG_DIR / "app.log", encoding="utf-8"),
        logging.StreamHandler(),
    ],
)


def data_dir() -> Path:
    override = os.environ.get("OPENER_DATA_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path(sys.argv[0]).resolve().parent


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)
    with PreferenceStore(data_dir()) as store:
        actions = ExternalActions(
            Dispatcher(),
            store,
            clipboard=lambda text: QtWidgets.QApplication.clipboard().setText(text),
        )
        win = MainWindow(actions)
        win.show()
        with loop:
            loop.run_forever()
    sys.exit(0)


if __name__ == "__main__":
    main()
