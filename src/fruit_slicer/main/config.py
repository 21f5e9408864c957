# config.py
# =========================
# Application settings
# =========================

import os

# -------- Window --------
WIDTH = 1280
HEIGHT = 720
WINDOW_NAME = "Fruit Slicer"
MAX_FRAME_MS = 100.0   # clamp on elapsed time fed to the scheduler per frame

# -------- Assets --------
ASSETS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..", "assets"))
BACKGROUND_IMAGE = "images/background.jpg"

# -------- High score --------
HIGHSCORE_FILE = os.path.join(os.path.expanduser("~"), ".fruit_slicer", "highscore.json")

# -------- Trails --------
TRAIL_TTL_SEC = 0.25
TRAIL_LEN = 12

# -------- Menu / UI --------
DWELL_S = 0.8
SWIPE_SPEED_PX_S = 1800.0

# -------- Logging --------
LOG_LEVEL_ENV = "FRUIT_SLICER_LOG_LEVEL"
