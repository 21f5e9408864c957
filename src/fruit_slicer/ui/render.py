# src/fruit_slicer/ui/render.py
#
# Drawing surface on top of a numpy BGR frame, shown with cv2.imshow.

from typing import Dict, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..game.state import Phase

WHITE = (255, 255, 255)
RED = (40, 40, 230)
YELLOW = (0, 220, 255)
BACKGROUND = (40, 28, 22)


def overlay_rgba(bg_bgr: np.ndarray, fg_rgba: np.ndarray, x: int, y: int) -> None:
    """Alpha-blend fg onto bg in place, clipped to the frame."""
    bh, bw = bg_bgr.shape[:2]
    fh, fw = fg_rgba.shape[:2]
    if x >= bw or y >= bh or x + fw <= 0 or y + fh <= 0:
        return

    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(bw, x + fw), min(bh, y + fh)
    fx0, fy0 = x0 - x, y0 - y
    fx1, fy1 = fx0 + (x1 - x0), fy0 + (y1 - y0)

    roi = bg_bgr[y0:y1, x0:x1]
    fg = fg_rgba[fy0:fy1, fx0:fx1, :3].astype(np.float32)
    a = fg_rgba[fy0:fy1, fx0:fx1, 3:4].astype(np.float32) / 255.0
    roi[:] = (a * fg + (1.0 - a) * roi.astype(np.float32)).astype(np.uint8)


class CanvasRenderer:
    def __init__(self, width: int, height: int, background: Optional[np.ndarray] = None):
        self.width = int(width)
        self.height = int(height)
        self.frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        self._background = None
        if background is not None:
            bg = cv2.resize(background, (self.width, self.height), interpolation=cv2.INTER_AREA)
            self._background = bg[:, :, :3].copy()

        # resized sprites, keyed by (id(sprite), w, h)
        self._scaled: Dict[Tuple[int, int, int], np.ndarray] = {}

    def clear(self) -> None:
        if self._background is not None:
            self.frame[:] = self._background
        else:
            self.frame[:] = BACKGROUND

    def draw_image(self, sprite: np.ndarray, x: float, y: float, w: float, h: float) -> None:
        w, h = max(1, int(round(w))), max(1, int(round(h)))
        key = (id(sprite), w, h)
        scaled = self._scaled.get(key)
        if scaled is None:
            if len(self._scaled) > 256:
                self._scaled.clear()
            scaled = cv2.resize(sprite, (w, h), interpolation=cv2.INTER_AREA)
            self._scaled[key] = scaled
        overlay_rgba(self.frame, scaled, int(x), int(y))

    def stroke_path(self, points: Sequence[Tuple[int, int]], color=WHITE, thickness: int = 5) -> None:
        """Blade trail: older segments are drawn thinner."""
        n = len(points)
        for i in range(1, n):
            t = max(1, int(round(thickness * i / (n - 1))))
            cv2.line(self.frame, points[i - 1], points[i], color, t, cv2.LINE_AA)

    def draw_text(self, text: str, x: int, y: int, scale: float = 0.9,
                  color=WHITE, thickness: int = 2) -> None:
        cv2.putText(self.frame, text, (int(x), int(y)), cv2.FONT_HERSHEY_SIMPLEX,
                    scale, color, thickness, cv2.LINE_AA)

    def draw_centered(self, text: str, y: int, scale: float = 1.2, color=WHITE) -> None:
        (tw, _), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
        self.draw_text(text, (self.width - tw) // 2, y, scale, color)

    def shade(self, alpha: float = 0.5) -> None:
        self.frame[:] = (self.frame.astype(np.float32) * (1.0 - alpha)).astype(np.uint8)


def draw_hud(surface: CanvasRenderer, engine) -> None:
    surface.draw_text(f"Score: {engine.score}", 16, 34)
    surface.draw_text(f"Best: {engine.high_score}", 16, 66, scale=0.7)

    # one cross per remaining chance, red once used
    max_misses = engine.cfg.max_misses
    for i in range(max_misses):
        cx = surface.width - 30 - (max_misses - 1 - i) * 36
        color = RED if i < engine.missed else WHITE
        cv2.line(surface.frame, (cx - 12, 18), (cx + 12, 42), color, 4, cv2.LINE_AA)
        cv2.line(surface.frame, (cx + 12, 18), (cx - 12, 42), color, 4, cv2.LINE_AA)

    multiplier = engine.visible_multiplier()
    if multiplier:
        surface.draw_text(f"{multiplier}x", surface.width // 2 - 20, 60, scale=1.4, color=YELLOW, thickness=3)

    if engine.phase is Phase.PAUSED:
        surface.shade(0.4)
        surface.draw_centered("Paused", surface.height // 3)
    elif engine.phase is Phase.GAME_OVER:
        surface.shade(0.5)
        surface.draw_centered("Game over!", surface.height // 3, scale=1.6)
        if engine.game_over_reason:
            surface.draw_centered(engine.game_over_reason, surface.height // 3 + 48, scale=0.9)
        surface.draw_centered(f"Score {engine.score}   Best {engine.high_score}",
                              surface.height // 3 + 90, scale=0.8)
