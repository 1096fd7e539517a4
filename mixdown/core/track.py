"""
Track record carried through the mixdown pipeline.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional
import numpy as np


@dataclass(frozen=True, eq=False)
class Track:
    """
    One normalized input recording.

    Transforms never modify a track; resampling and padding return a new
    Track with replaced channel buffers and the same identity.

    Attributes:
        id: Unique identifier derived from the source filename
        channels: Float channel buffers, Shape: (2, num_samples), range -1.0 to 1.0
        sample_rate: Sample rate of the channel buffers
        original_bit_depth: Bit depth of the decoded source file
        source_path: Path to source file
    """
    id: str
    channels: np.ndarray
    sample_rate: int
    original_bit_depth: int
    source_path: Optional[Path] = None

    def __post_init__(self):
        """Validate buffer layout."""
        if self.channels.ndim != 2:
            raise ValueError("Channel buffers must be 2D (channels, samples)")
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be positive")

    @property
    def num_channels(self) -> int:
        return self.channels.shape[0]

    @property
    def num_samples(self) -> int:
        """Number of samples per channel."""
        return self.channels.shape[1]

    @property
    def duration_seconds(self) -> float:
        return self.num_samples / self.sample_rate

    def get_channel(self, channel: int) -> np.ndarray:
        """
        Extract a single channel buffer.

        Args:
            channel: 0 for left, 1 for right

        Returns:
            1D numpy array with the channel samples
        """
        if not 0 <= channel < self.num_channels:
            raise ValueError(f"Track has no channel {channel}")
        return self.channels[channel]

    def with_channels(self, channels: np.ndarray, sample_rate: Optional[int] = None) -> "Track":
        """Return a copy of this track carrying new channel buffers."""
        return replace(
            self,
            channels=channels,
            sample_rate=self.sample_rate if sample_rate is None else sample_rate,
        )
