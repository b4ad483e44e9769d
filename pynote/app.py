from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from pynote.di.container import Container
from pynote.services.config import build_app_config
from pynote.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    config = build_app_config()
    configure_logging(config.log_level())
    logger.info("Starting %s %s (config: %s)", APP_NAME, config.get_version(), config.loaded_from)
    logger.debug("Effective config: %s", {s: dict(v) for s, v in config.as_dict().items()})

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default(config=config)

    # Optional file path to open passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    try:
        return app.exec()
    finally:
        container.shutdown()
