"""
Swipe View
==========
The card scene, the loading/retry state and the three action buttons.
Left/Right arrow keys drive reject/accept while this panel has focus.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QKeyEvent, QPainter
from PySide6.QtWidgets import (
    QGraphicsScene, QGraphicsView, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget
)

from swipelines.config import SWIPE_THRESHOLD
from swipelines.controller.clipboard import copy_text
from swipelines.controller.notices import NoticeChannel
from swipelines.model.item import ACCEPT, REJECT, Direction, Item
from swipelines.model.scheduling import Scheduler
from swipelines.model.stack import CardStack
from swipelines.view.card_item import CARD_HEIGHT, CARD_WIDTH, SwipeCardItem

logger = logging.getLogger(__name__)

# Depth cue for inert cards below the active one
STACK_PEEK = 4.0
STACK_PEEK_CARDS = 3


class CardView(QGraphicsView):
    """QGraphicsView that reports the pointer leaving the viewport."""
    pointer_left = Signal()

    def leaveEvent(self, event) -> None:
        self.pointer_left.emit()
        super().leaveEvent(event)


class SwipePanel(QWidget):
    def __init__(
        self,
        stack: CardStack,
        notices: NoticeChannel,
        scheduler: Scheduler,
        threshold: float = SWIPE_THRESHOLD,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.stack = stack
        self.notices = notices
        self.scheduler = scheduler
        self.threshold = threshold
        self.cards: dict[int, SwipeCardItem] = {}
        self._departing: set[SwipeCardItem] = set()

        self.setFocusPolicy(Qt.StrongFocus)
        layout = QVBoxLayout(self)

        # --- Card scene ---
        self.scene = QGraphicsScene(self)
        # Fixed rect so cards flying off-stage do not grow the scene
        self.scene.setSceneRect(-CARD_WIDTH * 0.75, -CARD_HEIGHT * 0.6, CARD_WIDTH * 1.5, CARD_HEIGHT * 1.2)

        self.view = CardView(self.scene)
        self.view.setObjectName("cardView")
        self.view.setRenderHint(QPainter.Antialiasing)
        self.view.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.view.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.view.setFocusPolicy(Qt.NoFocus)
        self.view.setMinimumSize(int(CARD_WIDTH) + 40, int(CARD_HEIGHT) + 40)
        self.view.pointer_left.connect(self.on_pointer_left)
        layout.addWidget(self.view, 1)

        # --- Loading / retry ---
        self.lbl_loading = QLabel("Loading rizz...")
        self.lbl_loading.setObjectName("loadingLabel")
        self.lbl_loading.setAlignment(Qt.AlignCenter)
        self.lbl_loading.setVisible(False)
        layout.addWidget(self.lbl_loading)

        self.btn_retry = QPushButton("Retry")
        self.btn_retry.setVisible(False)
        self.btn_retry.clicked.connect(self.on_retry_clicked)
        layout.addWidget(self.btn_retry, 0, Qt.AlignHCenter)

        # --- Actions ---
        actions = QHBoxLayout()
        self.btn_nope = QPushButton("✕")
        self.btn_nope.setObjectName("nopeButton")
        self.btn_nope.setToolTip("Pass (Left arrow)")
        self.btn_nope.clicked.connect(lambda: self.stack.force_swipe(REJECT))

        self.btn_copy = QPushButton("Copy")
        self.btn_copy.setObjectName("copyButton")
        self.btn_copy.setToolTip("Copy the current line")
        self.btn_copy.clicked.connect(self.on_copy_clicked)

        self.btn_like = QPushButton("♥")
        self.btn_like.setObjectName("likeButton")
        self.btn_like.setToolTip("Save (Right arrow)")
        self.btn_like.clicked.connect(lambda: self.stack.force_swipe(ACCEPT))

        for btn in (self.btn_nope, self.btn_copy, self.btn_like):
            btn.setFocusPolicy(Qt.NoFocus)
            actions.addWidget(btn)
        layout.addLayout(actions)

        # --- SIGNAL CONNECTIONS ---
        self.stack.batch_loaded.connect(self.on_batch_loaded)
        self.stack.active_index_changed.connect(self.on_active_index_changed)
        self.stack.loading_changed.connect(self.on_loading_changed)
        self.stack.load_failed.connect(self.on_load_failed)

    # --- SLOTS ---

    def on_batch_loaded(self, items: list[Item]) -> None:
        self._clear_cards()
        for index, item in enumerate(items):
            card = SwipeCardItem(item, index, self.scheduler, threshold=self.threshold)
            card.setZValue(index)
            card.swiped.connect(lambda direction, it=item: self.stack.swiped(Direction(direction), it))
            card.left_screen.connect(lambda c=card: self._on_card_left_screen(c))
            self.scene.addItem(card)
            self.cards[index] = card
            self.stack.bind_handle(index, card.tracker)
        self._layout_cards()

    def on_active_index_changed(self, index: int) -> None:
        for i, card in self.cards.items():
            card.set_interactive(i == index)
        self._layout_cards()

    def on_loading_changed(self, loading: bool) -> None:
        self.lbl_loading.setVisible(loading)
        if loading:
            self.btn_retry.setVisible(False)

    def on_load_failed(self, message: str) -> None:
        self.btn_retry.setVisible(True)

    def on_retry_clicked(self) -> None:
        self.stack.reload()

    def on_copy_clicked(self) -> None:
        item = self.stack.active_item
        if item is not None:
            copy_text(item.text, self.notices)

    def on_pointer_left(self) -> None:
        card = self.cards.get(self.stack.active_index)
        if card is not None:
            card.release()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key_Left:
            self.stack.force_swipe(REJECT)
        elif event.key() == Qt.Key_Right:
            self.stack.force_swipe(ACCEPT)
        else:
            super().keyPressEvent(event)

    # --- HELPERS ---

    def _layout_cards(self) -> None:
        """Rest the inert cards slightly below the active one."""
        top = self.stack.active_index
        for i, card in self.cards.items():
            if card.tracker.state.leaving or card.tracker.state.dragging:
                continue
            depth = min(max(top - i, 0), STACK_PEEK_CARDS)
            card.set_anchor(QPointF(0.0, depth * STACK_PEEK))

    def _on_card_left_screen(self, card: SwipeCardItem) -> None:
        if self.cards.get(card.index) is card:
            del self.cards[card.index]
            self.stack.release_handle(card.index)
        self._departing.discard(card)
        if card.scene() is self.scene:
            self.scene.removeItem(card)

    def _clear_cards(self) -> None:
        for card in self.cards.values():
            if card.tracker.state.leaving:
                # Removed by its own left_screen signal once the exit settles
                self._departing.add(card)
            elif card.scene() is self.scene:
                self.scene.removeItem(card)
        self.cards = {}
