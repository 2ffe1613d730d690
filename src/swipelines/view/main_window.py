"""
Main Application Window
=======================
The primary GUI container: tab bar, the swipe/saved views and the menu bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It switches between the swipe view and the saved-lines view and
   connects global actions (File -> Export) to the model.
"""
from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QFileDialog, QMainWindow, QMessageBox, QStackedWidget, QTabBar, QVBoxLayout, QWidget
)
from PySide6.QtGui import QAction

from swipelines.config import AppConfig
from swipelines.controller.notices import NoticeChannel
from swipelines.model.collection import SavedCollection
from swipelines.model.io import CollectionIO
from swipelines.model.scheduling import Scheduler
from swipelines.model.stack import CardStack
from swipelines.view.saved_panel import SavedPanel
from swipelines.view.swipe_panel import SwipePanel

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "SwipeLines"

SWIPE_TAB = 0
SAVED_TAB = 1


class MainWindow(QMainWindow):
    def __init__(
        self,
        stack: CardStack,
        collection: SavedCollection,
        notices: NoticeChannel,
        scheduler: Scheduler,
        config: AppConfig,
    ) -> None:
        super().__init__()
        self.stack = stack
        self.collection = collection
        self.notices = notices

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(480, 760)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # --- 1. TOP TAB BAR ---
        self.tab_bar = QTabBar()
        self.tab_bar.setExpanding(True)
        self.tab_bar.addTab("Swipe")
        self.tab_bar.addTab("Saved")
        main_layout.addWidget(self.tab_bar)

        # --- 2. VIEWS (Order must match Tab Bar order) ---
        self.views = QStackedWidget()
        self.swipe_panel = SwipePanel(stack, notices, scheduler, threshold=config.swipe_threshold)
        self.saved_panel = SavedPanel(collection, notices)
        self.views.addWidget(self.swipe_panel)  # Index 0
        self.views.addWidget(self.saved_panel)  # Index 1
        main_layout.addWidget(self.views, 1)

        # --- SIGNAL CONNECTIONS ---
        self.tab_bar.currentChanged.connect(self.on_tab_changed)
        self.collection.changed.connect(self.update_saved_count)
        self.notices.message_changed.connect(self.on_notice)

        self._create_actions()
        self._create_menus()
        self.update_saved_count()

    def _create_actions(self) -> None:
        self.act_export = QAction("Export Saved...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export)

        self.act_exit = QAction("Quit", self)
        self.act_exit.setShortcut("Ctrl+Q")
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- SLOTS ---

    def on_tab_changed(self, index: int) -> None:
        self.views.setCurrentIndex(index)
        if index == SWIPE_TAB:
            # Arrow keys only act while the swipe view has focus
            self.swipe_panel.setFocus()

    def on_notice(self, message: str) -> None:
        if message:
            self.statusBar().showMessage(message)
        else:
            self.statusBar().clearMessage()

    def update_saved_count(self) -> None:
        count = len(self.collection)
        self.tab_bar.setTabText(SAVED_TAB, f"Saved ({count})" if count else "Saved")
        self.act_export.setEnabled(count > 0)

    def on_export(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Saved Lines", "saved_lines.json", "JSON Files (*.json)"
        )
        if not fname:
            return
        if not fname.endswith(".json"):
            fname += ".json"
        try:
            CollectionIO.export_json(self.collection, fname)
            self.notices.show(f"Exported {len(self.collection)} lines")
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not export saved lines:\n{e}")

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if self.tab_bar.currentIndex() == SWIPE_TAB:
            self.swipe_panel.setFocus()
