"""
Track Alignment

Equalizes track lengths by appending silence.

All tracks are padded at the end to the length of the longest track.
Start positions are never shifted. Tracks that already have the maximum
length are passed through untouched, whichever of them was seen first.
"""

import logging
import numpy as np

from .track import Track


logger = logging.getLogger(__name__)


def pad_track(track: Track, length: int) -> Track:
    """
    Append trailing zeros to every channel of a track.

    Args:
        track: Track to extend
        length: Target length in samples

    Returns:
        The same track if it already has the length, otherwise a new Track
        whose samples [0, n) are unchanged and [n, length) are exact zeros
    """
    missing = length - track.num_samples
    if missing < 0:
        raise ValueError(
            f"Track '{track.id}' has {track.num_samples} samples, cannot pad to {length}"
        )
    if missing == 0:
        return track

    padded = np.pad(track.channels, ((0, 0), (0, missing)), mode="constant")
    return track.with_channels(padded)


def align_tracks(tracks: list[Track]) -> list[Track]:
    """
    Pad all tracks to the length of the longest one.

    Args:
        tracks: Tracks sharing one sample rate and channel count

    Returns:
        Tracks in the input order, all with the same number of samples
    """
    if not tracks:
        return []

    rates = {track.sample_rate for track in tracks}
    if len(rates) > 1:
        raise ValueError(f"Cannot align tracks with different sample rates: {sorted(rates)}")

    channel_counts = {track.num_channels for track in tracks}
    if len(channel_counts) > 1:
        raise ValueError(
            f"Cannot align tracks with different channel counts: {sorted(channel_counts)}"
        )

    length = max(track.num_samples for track in tracks)

    for track in tracks:
        if track.num_samples < length:
            logger.debug(
                "Padding '%s' with %d samples of silence",
                track.id, length - track.num_samples,
            )

    return [pad_track(track, length) for track in tracks]
