"""
Swipe Card (Graphics Item)
==========================
One draggable card in the stack scene.

Why is this file needed?
------------------------
1. Input: It forwards primary-button mouse events (touch drags arrive as
   synthesized mouse events) to its GestureTracker.
2. Rendering: It mirrors the GestureState onto its position, rotation and
   opacity: jumping while dragging, animating otherwise.
"""
from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import (
    QEasingCurve, QParallelAnimationGroup, QPointF, QPropertyAnimation, QRectF, Qt, Signal
)
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QGraphicsObject, QGraphicsSceneHoverEvent, QGraphicsSceneMouseEvent

from swipelines.config import SETTLE_DELAY_MS, SWIPE_THRESHOLD
from swipelines.model.gesture import GestureState, GestureTracker, SwipeResolver
from swipelines.model.item import Direction, Item
from swipelines.model.scheduling import Scheduler

CARD_WIDTH = 320.0
CARD_HEIGHT = 420.0
CARD_RADIUS = 18.0

LIKE_COLOR = QColor("#2ecc71")
NOPE_COLOR = QColor("#e74c3c")


class SwipeCardItem(QGraphicsObject):
    # Direction value ("left"/"right"/...) of the committed swipe
    swiped = Signal(str)
    left_screen = Signal()

    def __init__(
        self,
        item: Item,
        index: int,
        scheduler: Scheduler,
        excluded: Iterable[Direction] = (Direction.UP, Direction.DOWN),
        threshold: float = SWIPE_THRESHOLD,
    ) -> None:
        super().__init__()
        self.item = item
        self.index = index

        self.resolver = SwipeResolver(
            scheduler,
            on_swipe=self.swiped.emit,
            on_left_screen=self.left_screen.emit,
        )
        self.tracker = GestureTracker(
            self.resolver,
            excluded=excluded,
            threshold=threshold,
            on_change=self._apply_state,
        )

        self._anchor = QPointF(0.0, 0.0)
        self._interactive = False
        self._animations = QParallelAnimationGroup(self)

        self.setAcceptHoverEvents(True)
        self.set_interactive(False)

    # --- PUBLIC API ---

    @property
    def interactive(self) -> bool:
        return self._interactive

    def set_anchor(self, anchor: QPointF) -> None:
        """Resting position of the card in scene coordinates."""
        self._anchor = QPointF(anchor)
        self.setPos(self._anchor)

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive
        self.setAcceptedMouseButtons(Qt.LeftButton if interactive else Qt.NoButton)
        self.setCursor(Qt.OpenHandCursor if interactive else Qt.ArrowCursor)

    def release(self) -> None:
        """Ends an ongoing drag (pointer left the card or the view)."""
        if self.tracker.state.dragging:
            self.tracker.end()
            if not self.tracker.state.leaving:
                self.setCursor(Qt.OpenHandCursor)

    # --- QGraphicsItem ---

    def boundingRect(self) -> QRectF:
        return QRectF(-CARD_WIDTH / 2, -CARD_HEIGHT / 2, CARD_WIDTH, CARD_HEIGHT)

    def paint(self, painter: QPainter, option, widget=None) -> None:
        rect = self.boundingRect()
        painter.setRenderHint(QPainter.Antialiasing)

        # Card body
        painter.setPen(QPen(QColor("#dddddd"), 1.0))
        painter.setBrush(QBrush(QColor("#ffffff")))
        painter.drawRoundedRect(rect, CARD_RADIUS, CARD_RADIUS)

        inner = rect.adjusted(24, 24, -24, -24)

        # Category badge
        font = QFont(painter.font())
        font.setPointSize(9)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#fd5068"))
        painter.drawText(inner, Qt.AlignTop | Qt.AlignLeft, self.item.category.upper())

        # Main text
        font.setPointSize(15)
        font.setBold(False)
        painter.setFont(font)
        painter.setPen(QColor("#222222"))
        painter.drawText(inner, Qt.AlignCenter | Qt.TextWordWrap, self.item.text)

        # Hint
        font.setPointSize(8)
        painter.setFont(font)
        painter.setPen(QColor("#999999"))
        painter.drawText(inner, Qt.AlignBottom | Qt.AlignHCenter, "swipe or use buttons below")

        self._paint_overlay(painter, rect, "LIKE", LIKE_COLOR, self.tracker.like_opacity, left=True)
        self._paint_overlay(painter, rect, "NOPE", NOPE_COLOR, self.tracker.nope_opacity, left=False)

    def _paint_overlay(self, painter: QPainter, rect: QRectF, text: str, color: QColor, opacity: float, left: bool) -> None:
        if opacity <= 0.0:
            return
        painter.save()
        painter.setOpacity(opacity)
        badge = QRectF(0, 0, 110, 44)
        if left:
            badge.moveTopLeft(rect.topLeft() + QPointF(20, 40))
        else:
            badge.moveTopRight(rect.topRight() + QPointF(-20, 40))
        painter.setPen(QPen(color, 3.0))
        painter.setBrush(Qt.NoBrush)
        painter.drawRoundedRect(badge, 6, 6)
        font = QFont(painter.font())
        font.setPointSize(18)
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(badge, Qt.AlignCenter, text)
        painter.restore()

    # --- INPUT ---

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent) -> None:
        if not self._interactive or event.button() != Qt.LeftButton:
            event.ignore()
            return
        pos = event.scenePos()
        self.tracker.begin(pos.x(), pos.y())
        self.setCursor(Qt.ClosedHandCursor)
        event.accept()

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent) -> None:
        pos = event.scenePos()
        self.tracker.update(pos.x(), pos.y())

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self.release()

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent) -> None:
        self.release()
        super().hoverLeaveEvent(event)

    # --- STATE -> VISUALS ---

    def _apply_state(self, state: GestureState) -> None:
        target = self._anchor + QPointF(state.x, state.y)
        if not state.animated:
            self._animations.stop()
            self.setPos(target)
            self.setRotation(state.rotation)
        else:
            self._animate_to(target, state.rotation, state.opacity)
        if state.leaving:
            self.set_interactive(False)
        self.update()

    def _animate_to(self, pos: QPointF, rotation: float, opacity: float) -> None:
        self._animations.stop()
        self._animations.clear()
        for prop, value in ((b"pos", pos), (b"rotation", rotation), (b"opacity", opacity)):
            anim = QPropertyAnimation(self, prop)
            anim.setDuration(SETTLE_DELAY_MS)
            anim.setEasingCurve(QEasingCurve.OutCubic)
            anim.setEndValue(value)
            self._animations.addAnimation(anim)
        self._animations.start()
