"""
Saved Lines View
================
Lists the saved collection (newest first) with per-line copy/delete and a
"Clear All" action.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QScrollArea, QVBoxLayout, QWidget
)

from swipelines.controller.clipboard import copy_text
from swipelines.controller.notices import NoticeChannel
from swipelines.model.collection import SavedCollection
from swipelines.model.item import Item


class SavedLineRow(QFrame):
    def __init__(self, item: Item, panel: SavedPanel) -> None:
        super().__init__(panel.list_widget)
        self.item = item
        self.setObjectName("savedLine")

        layout = QHBoxLayout(self)

        text_box = QVBoxLayout()
        lbl_text = QLabel(item.text)
        lbl_text.setObjectName("savedLineText")
        lbl_text.setWordWrap(True)
        lbl_text.setTextInteractionFlags(Qt.TextSelectableByMouse)
        text_box.addWidget(lbl_text)

        lbl_category = QLabel(item.category)
        lbl_category.setObjectName("savedLineCategory")
        text_box.addWidget(lbl_category)
        layout.addLayout(text_box, 1)

        self.btn_copy = QPushButton("Copy")
        self.btn_copy.clicked.connect(lambda: panel.on_copy_clicked(item))
        layout.addWidget(self.btn_copy)

        self.btn_delete = QPushButton("Delete")
        self.btn_delete.setObjectName("deleteButton")
        self.btn_delete.clicked.connect(lambda: panel.on_delete_clicked(item))
        layout.addWidget(self.btn_delete)


class SavedPanel(QWidget):
    def __init__(self, collection: SavedCollection, notices: NoticeChannel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.collection = collection
        self.notices = notices
        self.rows: list[SavedLineRow] = []

        layout = QVBoxLayout(self)

        # --- Empty state ---
        self.lbl_empty = QLabel("No saved lines yet.\nSwipe right on lines you like!")
        self.lbl_empty.setObjectName("savedEmpty")
        self.lbl_empty.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.lbl_empty)

        # --- List ---
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.list_widget = QWidget()
        self.list_layout = QVBoxLayout(self.list_widget)
        self.list_layout.addStretch()
        self.scroll.setWidget(self.list_widget)
        layout.addWidget(self.scroll, 1)

        self.btn_clear = QPushButton("Clear All")
        self.btn_clear.setObjectName("clearAllButton")
        self.btn_clear.clicked.connect(self.on_clear_clicked)
        layout.addWidget(self.btn_clear)

        self.collection.changed.connect(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the rows from the collection."""
        for row in self.rows:
            self.list_layout.removeWidget(row)
            row.deleteLater()
        self.rows = []

        for item in self.collection:
            row = SavedLineRow(item, self)
            # Keep the trailing stretch last
            self.list_layout.insertWidget(self.list_layout.count() - 1, row)
            self.rows.append(row)

        has_items = len(self.collection) > 0
        self.lbl_empty.setVisible(not has_items)
        self.scroll.setVisible(has_items)
        self.btn_clear.setVisible(has_items)

    # --- SLOTS ---

    def on_copy_clicked(self, item: Item) -> None:
        copy_text(item.text, self.notices)

    def on_delete_clicked(self, item: Item) -> None:
        self.collection.remove(item.id)

    def on_clear_clicked(self) -> None:
        self.collection.clear()
        self.notices.show("All lines cleared")
