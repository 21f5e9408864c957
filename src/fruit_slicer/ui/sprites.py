# src/fruit_slicer/ui/sprites.py
#
# Asynchronous sprite loading (cv2.imread on a small thread pool).
#
# load(path) returns a concurrent.futures.Future resolving to a BGRA numpy
# image, or failing with ResourceLoadFailure. The board only looks at the
# future from the game thread, so nothing here touches game state.
#
# Sliced halves follow the "<name>_v1.png" / "_h2.png" naming. When an asset
# pack only ships the whole fruit, the half is cut out of it.

import logging
import os
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional

import cv2
import numpy as np

from ..game.errors import ResourceLoadFailure

logger = logging.getLogger(__name__)

_HALF_RE = re.compile(r"^(?P<stem>.+)_(?P<axis>[vh])(?P<part>[12])(?P<ext>\.[^./\\]+)$")


def ensure_bgra(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.shape[2] == 3:
        b, g, r = cv2.split(img)
        a = np.full_like(b, 255)
        return cv2.merge((b, g, r, a))
    if img.shape[2] == 4:
        return img
    raise ValueError(f"unsupported channel count: {img.shape[2]}")


def cut_half(img: np.ndarray, axis: str, part: int) -> np.ndarray:
    """axis 'v' splits left/right, 'h' splits top/bottom; part is 1 or 2."""
    h, w = img.shape[:2]
    if axis == "v":
        mid = w // 2
        return img[:, :mid] if part == 1 else img[:, mid:]
    mid = h // 2
    return img[:mid, :] if part == 1 else img[mid:, :]


class SpriteLoader:
    def __init__(self, assets_dir: str, max_workers: int = 2):
        self.assets_dir = assets_dir
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="sprite-loader")
        self._cache: Dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    def _cached(self, path: str) -> Optional[np.ndarray]:
        with self._lock:
            return self._cache.get(path)

    def _read_file(self, path: str) -> Optional[np.ndarray]:
        cached = self._cached(path)
        if cached is not None:
            return cached

        full = os.path.join(self.assets_dir, path)
        if not os.path.isfile(full):
            return None
        img = cv2.imread(full, cv2.IMREAD_UNCHANGED)
        if img is None:
            return None

        img = ensure_bgra(img)
        with self._lock:
            self._cache[path] = img
        return img

    def _read(self, path: str) -> np.ndarray:
        img = self._read_file(path)
        if img is not None:
            return img

        m = _HALF_RE.match(path)
        if m is not None:
            whole = self._read_file(m.group("stem") + m.group("ext"))
            if whole is not None:
                half = cut_half(whole, m.group("axis"), int(m.group("part")))
                with self._lock:
                    self._cache[path] = half
                logger.debug("cut %s out of its whole sprite", path)
                return half

        raise ResourceLoadFailure(path, f"not found under {self.assets_dir}")

    def load(self, path: str) -> "Future[np.ndarray]":
        cached = self._cached(path)
        if cached is not None:
            future: Future = Future()
            future.set_result(cached)
            return future
        return self._executor.submit(self._read, path)

    def close(self) -> None:
        self._executor.shutdown(wait=False)
