"""
Application Initialization
==========================
This module wires the model, controllers and views together and starts the
Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the stores (SavedCollection, CardStack).
2. Instantiates the controllers (scheduler, notices, batch loader).
3. Passes them into the Main Window (View).
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys

from PySide6.QtCore import QSettings

from swipelines.application import create_app
from swipelines.config import AppConfig, load_stylesheet
from swipelines.controller.notices import NoticeChannel
from swipelines.controller.scheduler import QtScheduler
from swipelines.controller.source import BatchSource
from swipelines.controller.workers import ThreadedBatchLoader
from swipelines.logging_config import setup_logging
from swipelines.model.collection import SavedCollection
from swipelines.model.io import SettingsStorage
from swipelines.model.stack import CardStack
from swipelines.view.main_window import MainWindow


def main() -> int:
    # 1. Setup Logging (Console)
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = create_app()
    app.setStyleSheet(load_stylesheet())

    # 3. Resolve configuration (defaults + QSettings overrides)
    config = AppConfig.from_settings(QSettings())

    # 4. Controllers and stores
    scheduler = QtScheduler(app)
    notices = NoticeChannel(scheduler)
    collection = SavedCollection(SettingsStorage())
    collection.persist_failed.connect(notices.show)

    source = BatchSource(url=config.api_url, timeout=config.request_timeout)
    loader = ThreadedBatchLoader(source)
    stack = CardStack(collection, loader, notices, batch_size=config.batch_size)

    # 5. Main Window
    window = MainWindow(stack, collection, notices, scheduler, config)
    window.show()

    # Do not tear down a QThread that is still fetching
    app.aboutToQuit.connect(loader.wait)

    # 6. First batch, then Event Loop
    stack.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
