# src/fruit_slicer/ui/menu.py
# Rectangular buttons for the menu / pause / game-over screens.
# A button fires on click, on a fast swipe across it, or after hovering for dwell_s.

from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2

from .render import CanvasRenderer, WHITE


@dataclass
class Button:
    key: str
    label: str
    rect: Tuple[int, int, int, int]  # x, y, w, h

    def contains(self, x: int, y: int) -> bool:
        rx, ry, rw, rh = self.rect
        return (rx <= x <= rx + rw) and (ry <= y <= ry + rh)


def centered_buttons(width: int, height: int, items: List[Tuple[str, str]],
                     w: int = 260, h: int = 64, gap: int = 24) -> List[Button]:
    total = len(items) * h + (len(items) - 1) * gap
    y = (height - total) // 2 + height // 8
    x = (width - w) // 2
    buttons = []
    for key, label in items:
        buttons.append(Button(key, label, (x, y, w, h)))
        y += h + gap
    return buttons


class MenuUI:
    def __init__(
        self,
        buttons: List[Button],
        dwell_s: float = 0.8,
        swipe_speed_px_s: float = 1800.0,
        click_cooldown_s: float = 0.4,
    ):
        self.buttons = buttons
        self.dwell_s = float(dwell_s)
        self.swipe_speed_px_s = float(swipe_speed_px_s)
        self.click_cooldown_s = float(click_cooldown_s)

        self._hover_key: Optional[str] = None
        self._hover_t0: float = 0.0
        self._last_click_t: float = float("-inf")

    def _hovered(self, cursor_xy: Optional[Tuple[int, int]]) -> Optional[Button]:
        if cursor_xy is None:
            return None
        cx, cy = cursor_xy
        for b in self.buttons:
            if b.contains(cx, cy):
                return b
        return None

    def _fire(self, button: Button, now: float) -> Optional[str]:
        if (now - self._last_click_t) < self.click_cooldown_s:
            return None
        self._last_click_t = now
        self._hover_t0 = now
        return button.key

    def update(self, cursor_xy: Optional[Tuple[int, int]], cursor_speed: float,
               now: float, clicked: bool = False) -> Optional[str]:
        """Returns the key of the button that fired, if any."""
        hovered = self._hovered(cursor_xy)
        if hovered is None:
            self._hover_key = None
            return None

        if hovered.key != self._hover_key:
            self._hover_key = hovered.key
            self._hover_t0 = now

        if clicked or cursor_speed >= self.swipe_speed_px_s:
            return self._fire(hovered, now)
        if (now - self._hover_t0) >= self.dwell_s:
            return self._fire(hovered, now)
        return None

    def draw(self, surface: CanvasRenderer) -> None:
        frame = surface.frame
        for b in self.buttons:
            x, y, w, h = b.rect
            if b.key == self._hover_key:
                cv2.rectangle(frame, (x, y), (x + w, y + h), (60, 60, 60), thickness=-1)
            cv2.rectangle(frame, (x, y), (x + w, y + h), WHITE, thickness=2)
            surface.draw_text(b.label, x + 16, y + int(h * 0.65))
