# gpsreplay/errors

"""
gpsreplay.errors

Central exception hierarchy for gpsreplay.

Rationale:
  - Load failures are fatal to a session and should name what was wrong.
  - Rejected user input (e.g. a playback speed) is recoverable.
  - Callers can catch GPSReplayError (broad) or specific subclasses (narrow).
"""


class GPSReplayError(RuntimeError):
    """Base class for all gpsreplay runtime errors."""


# ---- Load errors -------------------------------

class LoadError(GPSReplayError):
    """A track could not be loaded. No partial track is produced."""

class EmptyTrackError(LoadError):
    """The parsed input contained no samples."""

class MalformedSampleError(LoadError):
    """A sample lacks a usable latitude/longitude pair."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"Sample {index} is malformed: {reason}")
        self.index = index

class InvalidGpxError(LoadError):
    """GPX file could not be parsed or did not contain expected data structures."""


# ---- Playback errors ---------------------------

class PlaybackError(GPSReplayError):
    """Errors raised by playback control."""

class InvalidSpeedError(PlaybackError, ValueError):
    """Playback speed multiplier must be a finite number greater than zero."""


# ---- Config / environment errors ---------------

class ConfigError(GPSReplayError):
    """A configuration file exists but could not be parsed."""

class FzfNotFoundError(GPSReplayError):
    """fzf is required but not available on PATH."""
