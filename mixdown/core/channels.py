"""
Channel Normalizer

Converts decoded integer PCM into float, channel-separated stereo.

Technical assumptions:
- Integer samples are divided by the positive full scale 2^(bits-1) - 1
- Mono sources are duplicated into left and right
- Sources with two or more channels are split by sample parity: even
  positions become channel 0, odd positions channel 1. For more than two
  channels this is an approximation and does not pick the first two
  logical channels.
"""

import logging
import numpy as np

from .audio_io import RawAudio
from .track import Track


logger = logging.getLogger(__name__)


def normalize_channels(
    samples: np.ndarray,
    channels: int,
    bit_depth: int,
) -> np.ndarray:
    """
    Convert interleaved integer samples to two float channel buffers.

    Args:
        samples: Interleaved integer samples (1D)
        channels: Channel count of the source
        bit_depth: Bit depth of the source

    Returns:
        Float64 array, Shape: (2, num_samples), range -1.0 to 1.0
    """
    if channels < 1:
        raise ValueError(f"Invalid channel count: {channels}")
    if bit_depth < 2:
        raise ValueError(f"Invalid bit depth: {bit_depth}")
    if samples.ndim != 1:
        raise ValueError("Samples must be interleaved (1D)")

    full_scale = 2 ** (bit_depth - 1) - 1
    scaled = np.clip(samples.astype(np.float64) / full_scale, -1.0, 1.0)

    if channels == 1:
        return np.vstack([scaled, scaled])

    if channels > 2:
        logger.warning(
            "Source has %d channels, splitting by parity keeps only an approximation of two",
            channels,
        )

    # An odd trailing sample has no partner in the other channel
    num_samples = len(scaled) // 2
    left = scaled[0:2 * num_samples:2]
    right = scaled[1:2 * num_samples:2]
    return np.vstack([left, right])


def track_from_raw(raw: RawAudio, track_id: str) -> Track:
    """Build a normalized stereo Track from decoded audio."""
    return Track(
        id=track_id,
        channels=normalize_channels(raw.samples, raw.channels, raw.bit_depth),
        sample_rate=raw.sample_rate,
        original_bit_depth=raw.bit_depth,
        source_path=raw.file_path,
    )
