# src/fruit_slicer/main/main.py
#
# Desktop front-end: OpenCV window + mouse input driving GameEngine.
#
#   python -m fruit_slicer            (or the `fruit-slicer` script)
#
# Keys:
#   q / Esc  - quit
#   space    - start / resume
#   p        - pause / resume
#   m        - back to menu (after game over)

import argparse
import logging
import os
import random
import time
from typing import List, Optional, Tuple

import cv2 as cv

from ..game.game_core import GameConfig, GameEngine
from ..game.highscore import JsonHighScoreStore
from ..game.scheduler import Scheduler
from ..game.state import Phase
from ..ui.menu import MenuUI, centered_buttons
from ..ui.render import CanvasRenderer, draw_hud
from ..ui.sprites import SpriteLoader
from . import config
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

MENUS = {
    Phase.IDLE: [("start", "Play"), ("quit", "Quit")],
    Phase.PAUSED: [("resume", "Resume"), ("quit", "Quit")],
    Phase.GAME_OVER: [("start", "Play again"), ("menu", "Back to menu")],
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="fruit-slicer")
    ap.add_argument("--width", type=int, default=config.WIDTH)
    ap.add_argument("--height", type=int, default=config.HEIGHT)
    ap.add_argument("--assets", type=str, default=config.ASSETS_DIR,
                    help="folder containing images/ (fruit, bomb and background sprites)")
    ap.add_argument("--highscore-file", type=str, default=config.HIGHSCORE_FILE)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--quiet", action="store_true")
    ap.add_argument("--debug", action="store_true")
    return ap.parse_args(argv)


class App:
    def __init__(self, args: argparse.Namespace):
        if not os.path.isdir(args.assets):
            raise FileNotFoundError(
                f"Assets folder not found: {args.assets}\n"
                f"Pass --assets pointing at a folder with an images/ sub-folder."
            )

        self.width = args.width
        self.height = args.height

        self.scheduler = Scheduler()
        self.loader = SpriteLoader(args.assets)
        self.engine = GameEngine(
            self.width,
            self.height,
            self.loader,
            GameConfig(trail_len=config.TRAIL_LEN, trail_ttl=config.TRAIL_TTL_SEC),
            scheduler=self.scheduler,
            store=JsonHighScoreStore(args.highscore_file),
            rng=random.Random(args.seed),
        )

        background = cv.imread(os.path.join(args.assets, config.BACKGROUND_IMAGE))
        if background is None:
            logger.warning("no background image under %s, using a plain fill", args.assets)
        self.surface = CanvasRenderer(self.width, self.height, background)

        self._events: List[Tuple[int, int, float, bool]] = []
        self._cursor: Optional[Tuple[int, int]] = None
        self._menus = {}
        self.running = True

    # ------------------------------------------------------------------
    # input
    # ------------------------------------------------------------------
    def _on_mouse(self, event, x, y, flags, param) -> None:
        if event == cv.EVENT_MOUSEMOVE:
            self._events.append((x, y, time.time(), False))
        elif event == cv.EVENT_LBUTTONDOWN:
            self._events.append((x, y, time.time(), True))

    def _menu(self) -> Optional[MenuUI]:
        phase = self.engine.phase
        if phase not in MENUS:
            return None
        if phase not in self._menus:
            self._menus[phase] = MenuUI(
                centered_buttons(self.width, self.height, MENUS[phase]),
                dwell_s=config.DWELL_S,
                swipe_speed_px_s=config.SWIPE_SPEED_PX_S,
            )
        return self._menus[phase]

    def _cursor_speed(self) -> float:
        data = self.engine.trails.data
        if len(data) < 2:
            return 0.0
        p0, p1 = data[-2], data[-1]
        dt = p1.t - p0.t
        if dt <= 1e-6:
            return 0.0
        return ((p1.x - p0.x) ** 2 + (p1.y - p0.y) ** 2) ** 0.5 / dt

    def _select(self, key: str) -> None:
        logger.debug("menu selection: %s", key)
        if key == "start":
            self.engine.start()
        elif key == "resume":
            self.engine.resume()
        elif key == "menu":
            self.engine.return_to_menu()
        elif key == "quit":
            self.running = False

    def _dispatch_events(self) -> None:
        events, self._events = self._events, []
        for x, y, t, clicked in events:
            self._cursor = (x, y)
            self.engine.on_pointer(x, y, t)

            menu = self._menu()
            if menu is not None:
                key = menu.update(self._cursor, self._cursor_speed(), t, clicked)
                if key:
                    self._select(key)

        # dwell needs a tick even when the mouse is still
        menu = self._menu()
        if menu is not None and self._cursor is not None:
            key = menu.update(self._cursor, 0.0, time.time())
            if key:
                self._select(key)

    def _on_key(self, key: int) -> None:
        if key in (ord("q"), 27):
            self.running = False
        elif key == ord(" "):
            if self.engine.phase is Phase.PAUSED:
                self.engine.resume()
            else:
                self.engine.start()
        elif key == ord("p"):
            if self.engine.phase is Phase.PLAYING:
                self.engine.pause()
            else:
                self.engine.resume()
        elif key == ord("m"):
            self.engine.return_to_menu()

    # ------------------------------------------------------------------
    # frame
    # ------------------------------------------------------------------
    def _draw(self) -> None:
        surface = self.surface
        surface.clear()
        self.engine.draw(surface)

        trail = self.engine.trails.get(time.time())
        if len(trail) >= 2:
            surface.stroke_path(trail)

        if self.engine.phase is not Phase.IDLE:
            draw_hud(surface, self.engine)
        else:
            surface.draw_centered(config.WINDOW_NAME, self.height // 4, scale=2.0)
            surface.draw_centered(f"Best: {self.engine.high_score}", self.height // 4 + 50, scale=0.9)

        menu = self._menu()
        if menu is not None:
            menu.draw(surface)

    def run(self) -> None:
        cv.namedWindow(config.WINDOW_NAME, cv.WINDOW_AUTOSIZE)
        cv.setMouseCallback(config.WINDOW_NAME, self._on_mouse)

        print("Fruit Slicer started.")
        print("Keys: q quit | space start/resume | p pause | m menu")

        last = time.time()
        try:
            while self.running:
                self._dispatch_events()

                now = time.time()
                elapsed_ms = min(config.MAX_FRAME_MS, (now - last) * 1000.0)
                last = now
                self.scheduler.advance(elapsed_ms)

                self._draw()
                cv.imshow(config.WINDOW_NAME, self.surface.frame)

                key = cv.waitKey(1) & 0xFF
                if key != 0xFF:
                    self._on_key(key)
                if cv.getWindowProperty(config.WINDOW_NAME, cv.WND_PROP_VISIBLE) < 1:
                    break
        finally:
            self.loader.close()
            cv.destroyAllWindows()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args)
    App(args).run()


if __name__ == "__main__":
    main()
