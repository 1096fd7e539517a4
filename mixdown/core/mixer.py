"""
Mixer

Sums aligned tracks and limits the result to the output integer range.

Technical assumptions:
- Tracks are summed, not averaged. Mixing N tracks raises the level and
  relies on the limiter for overflow protection. Averaging by track count
  is available as an explicit policy.
- The limiter is a hard clipper in the integer domain of the output bit
  depth. Samples at or beyond the clip level are replaced by the largest
  integer strictly inside it; all other samples keep their value.
- Conversion to integers truncates toward zero
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal
import logging

import numpy as np

from .audio_io import encode_wav, interleave
from .config import MixConfig
from .track import Track


logger = logging.getLogger(__name__)


@dataclass
class MixBuffer:
    """
    Final mix in the output integer domain.

    Attributes:
        samples: Scaled and clipped integers, Shape: (channels, num_samples)
        sample_rate: Sample rate of the mix
        bit_depth: Output bit depth the integers are scaled to
        clipped_samples: Number of samples replaced by the limiter
        peak: Peak of the float sum before limiting (1.0 = full scale)
    """
    samples: np.ndarray
    sample_rate: int
    bit_depth: int
    clipped_samples: int = 0
    peak: float = 0.0

    @property
    def num_channels(self) -> int:
        return self.samples.shape[0]

    @property
    def num_samples(self) -> int:
        return self.samples.shape[1]


def sum_tracks(
    tracks: list[Track],
    normalization: Literal["sum", "average"] = "sum",
) -> np.ndarray:
    """
    Element-wise sum of aligned channel buffers.

    Args:
        tracks: Tracks with identical shape and sample rate
        normalization: "sum" or "average" (divide by track count)

    Returns:
        Float sum, Shape: (channels, num_samples)
    """
    if not tracks:
        raise ValueError("Nothing to mix: no tracks")

    shapes = {track.channels.shape for track in tracks}
    if len(shapes) > 1:
        raise ValueError(f"Tracks are not aligned: {sorted(shapes)}")

    mix = np.zeros_like(tracks[0].channels, dtype=np.float64)
    for track in tracks:
        mix += track.channels

    if normalization == "average":
        mix /= len(tracks)
    elif normalization != "sum":
        raise ValueError(f"Unknown normalization policy: {normalization}")

    return mix


def downmix_to_mono(mix: np.ndarray) -> np.ndarray:
    """
    Average all channels into one.

    No energy compensation: correlated material loses no level, uncorrelated
    material drops by 3 dB.

    Returns:
        Shape: (1, num_samples)
    """
    return mix.mean(axis=0, keepdims=True)


def apply_limiter(mix: np.ndarray, config: MixConfig) -> tuple[np.ndarray, int]:
    """
    Scale a float mix to the output bit depth and hard-clip it.

    Args:
        mix: Float samples (1.0 = full scale)
        config: Output bit depth and clip levels

    Returns:
        Tuple of (int64 samples, number of clipped samples)
    """
    scaled = mix * config.full_scale

    over = scaled >= config.ceiling_limit
    under = scaled <= -config.floor_limit

    scaled[over] = config.safe_ceiling
    scaled[under] = -config.safe_floor

    clipped = int(np.count_nonzero(over) + np.count_nonzero(under))
    return np.trunc(scaled).astype(np.int64), clipped


def compute_peak(data: np.ndarray) -> float:
    """Absolute maximum of the signal, 0.0 for empty input."""
    if data.size == 0:
        return 0.0
    return float(np.max(np.abs(data)))


def mix_tracks(tracks: list[Track], config: MixConfig) -> MixBuffer:
    """
    Mix aligned tracks into the final limited buffer.

    Args:
        tracks: Aligned tracks at config.target_sample_rate
        config: Mix configuration

    Returns:
        MixBuffer with config.target_channel_count channels
    """
    mix = sum_tracks(tracks, config.normalization)

    if config.target_channel_count == 1:
        mix = downmix_to_mono(mix)

    peak = compute_peak(mix)
    samples, clipped = apply_limiter(mix, config)

    if clipped:
        logger.warning(
            "Limiter clipped %d samples (peak %.3f of full scale)", clipped, peak
        )

    return MixBuffer(
        samples=samples,
        sample_rate=tracks[0].sample_rate,
        bit_depth=config.target_bit_depth,
        clipped_samples=clipped,
        peak=peak,
    )


def write_mix(buffer: MixBuffer, file_path: str | Path) -> None:
    """
    Hand the mix to the encoder.

    Channels are interleaved sample by sample before writing.

    Raises:
        EncodeError: The file could not be written
    """
    encode_wav(
        interleave(buffer.samples),
        file_path,
        sample_rate=buffer.sample_rate,
        bit_depth=buffer.bit_depth,
        channels=buffer.num_channels,
    )
