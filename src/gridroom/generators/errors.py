"""
Exception hierarchy for room generation.

Only conditions that stop a whole run are raised. Missing assets, placement
conflicts and empty pools are absorbed by the phase that meets them and show
up as counters in the phase metrics instead.
"""


class RoomGenerationError(Exception):
    """Base class for room generation errors."""
    pass


class ConfigurationMissingError(RoomGenerationError):
    """No room spec, or no floor or wall style to generate with."""
    pass


class StyleLoadError(RoomGenerationError):
    """A style or room file is malformed or missing required keys."""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
