"""
Clipboard access for the copy buttons.
"""
from __future__ import annotations

import logging

from PySide6.QtGui import QGuiApplication

from swipelines.controller.notices import NoticeChannel

logger = logging.getLogger(__name__)


def copy_text(text: str, notices: NoticeChannel) -> bool:
    """
    Put `text` on the system clipboard and report the outcome as a notice.
    Failures are never raised to the caller.
    """
    try:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            raise RuntimeError("No clipboard available on this platform")
        clipboard.setText(text)
    except Exception as e:
        logger.warning(f"Clipboard copy failed: {e}")
        notices.show("Could not copy to clipboard")
        return False

    notices.show("Copied to clipboard!")
    return True
