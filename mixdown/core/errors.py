"""
Mixdown error taxonomy.

Every failure aborts the whole run. Nothing is retried, and there is no
partial output: a run either writes one complete file or none.
"""

from pathlib import Path


class MixdownError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(MixdownError):
    """An input file could not be read as PCM WAV."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot decode {self.path}: {reason}")


class ResampleError(MixdownError):
    """Sample-rate conversion could not be set up for a track."""

    def __init__(self, track_id: str, reason: str):
        self.track_id = track_id
        self.reason = reason
        super().__init__(f"Cannot resample track '{track_id}': {reason}")


class EncodeError(MixdownError):
    """The output file could not be written."""

    def __init__(self, path: str | Path, cause: BaseException | str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot write {self.path}: {cause}")
