# src/fruit_slicer/game/errors.py
#
# Error kinds raised by the game core. None of them is fatal to a session:
# callers drop the affected spawn / object and carry on.


class SlicerError(Exception):
    """Base class for every error raised by fruit_slicer."""


class InvalidParameters(SlicerError, ValueError):
    """Canvas geometry or timing constants that cannot yield a trajectory."""


class NotFound(SlicerError, LookupError):
    """A slice was requested on an object that is no longer on the board."""


class ResourceLoadFailure(SlicerError, OSError):
    """A sprite could not be loaded; the object it belongs to is dropped."""

    def __init__(self, path: str, reason: str = "could not be read"):
        super().__init__(f"sprite {path!r} {reason}")
        self.path = path
