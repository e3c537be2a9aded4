"""
Pet Window
==========
The frameless, transparent, always-on-top window that shows the pet.

Why is this file needed?
------------------------
1. Layout: It is the only visible surface of the application.
2. Routing: It turns Qt events (mouse, keys, drops, timer ticks) into
   FrameInput for the FrameController and applies the FrameOutput
   (window position/size, repaint, timer interval).
"""
from __future__ import annotations

import logging
from typing import Optional, Set

from PySide6.QtCore import QCoreApplication, Qt, QTimer
from PySide6.QtGui import QColor, QCursor, QFont, QKeyEvent, QPainter
from PySide6.QtWidgets import QWidget

from asciipet.config import ACTIVE_TPS, GLYPH_CELL_HEIGHT_PX, SAVED_IMAGE_PATH
from asciipet.controller.frame import FrameController, FrameInput, Toggle
from asciipet.controller.image_loader import ImageLoadError, load_image_bytes
from asciipet.controller.monitor import MonitorWorker
from asciipet.model.io import PreferencesIO
from asciipet.model.render_state import RenderFrame

logger = logging.getLogger(__name__)

KEY_TOGGLES = {
    Qt.Key.Key_C: Toggle.COLOR,
    Qt.Key.Key_G: Toggle.GLITCH,
    Qt.Key.Key_A: Toggle.ANIMATION,
    Qt.Key.Key_Tab: Toggle.MONITOR,
}


class PetWindow(QWidget):
    def __init__(
        self,
        controller: FrameController,
        preferences_path: str,
        monitor: Optional[MonitorWorker] = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self.preferences_path = preferences_path
        self.monitor = monitor

        self._pressed: bool = False
        self._pending_toggles: Set[Toggle] = set()
        self._frame = RenderFrame()
        self._saved_on_exit = False

        self.setWindowTitle("asciipet")
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setMouseTracking(True)
        self.setAcceptDrops(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._font = QFont("Monospace")
        self._font.setStyleHint(QFont.StyleHint.TypeWriter)
        self._font.setPixelSize(GLYPH_CELL_HEIGHT_PX - 2)

        self._apply_size()

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_tick)
        self._tps = ACTIVE_TPS
        self._timer.start(1000 // self._tps)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        pos = self.pos()
        cursor = QCursor.pos()
        screen = self.screen().availableGeometry()

        frame = FrameInput(
            pressed=self._pressed,
            pointer=(cursor.x() - pos.x(), cursor.y() - pos.y()),
            window_pos=(pos.x(), pos.y()),
            screen_size=(screen.width(), screen.height()),
            toggles=frozenset(self._pending_toggles),
        )
        self._pending_toggles.clear()

        out = self.controller.advance(frame)

        if out.moved:
            self.move(*out.window_pos)
        if (self.width(), self.height()) != out.window_size:
            self._apply_size()

        if out.tps != self._tps:
            self._tps = out.tps
            self._timer.setInterval(1000 // self._tps)
            logger.debug(f"Tick rate -> {self._tps}/s")

        self._frame = out.render
        self.update()

    def _apply_size(self) -> None:
        w, h = self.controller.pet.window_size
        if w > 0 and h > 0:
            self.setFixedSize(w, h)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setFont(self._font)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, False)

        for cmd in self._frame.glyphs:
            painter.setPen(QColor(*cmd.color))
            painter.drawText(cmd.x, cmd.y, cmd.glyph)

        hud = self._frame.hud
        if hud is not None:
            painter.setPen(QColor(*hud.color))
            painter.drawText(hud.x, hud.y, hud.text)

        painter.end()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._pressed = True
            # Tool windows do not take keyboard focus on their own
            self.activateWindow()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._pressed = False
        super().mouseReleaseEvent(event)

    def focusNextPrevChild(self, next: bool) -> bool:
        # Tab is a toggle here, not focus navigation
        return False

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat():
            return
        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.close()
            return
        if key in KEY_TOGGLES:
            self._pending_toggles.add(KEY_TOGGLES[key])
            return
        super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Drag & drop of image files
    # ------------------------------------------------------------------

    def dragEnterEvent(self, event) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:
        urls = [u for u in event.mimeData().urls() if u.isLocalFile()]
        if not urls:
            return
        path = urls[0].toLocalFile()

        try:
            with open(path, "rb") as f:
                data = f.read()
            image = load_image_bytes(data, name=path)
        except (OSError, ImageLoadError) as e:
            logger.error(f"Dropped file could not be loaded: {e}")
            return

        self.controller.load_image(image, path=path)
        self._apply_size()
        logger.info(f"Loaded dropped image: {path}")

        cached = PreferencesIO.cache_image(data, SAVED_IMAGE_PATH)
        if cached is not None:
            self.controller.config.image_path = cached
            self.save_preferences()
        event.acceptProposedAction()

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def save_preferences(self) -> None:
        try:
            PreferencesIO.save(self.controller.preferences(), self.preferences_path)
        except OSError:
            logger.warning("Preferences were not saved; continuing.")

    def closeEvent(self, event) -> None:
        self._timer.stop()
        if not self._saved_on_exit:
            self._saved_on_exit = True
            self.save_preferences()
        if self.monitor is not None:
            self.monitor.stop()
            self.monitor.wait(1000)
        super().closeEvent(event)
        # Tool windows do not count towards quitOnLastWindowClosed
        QCoreApplication.quit()
