"""
Mixdown Pipeline

Runs decode -> normalize -> resample for every input file in parallel,
then aligns, mixes and writes the result.

Technical assumptions:
- Each worker owns its track until it hands back the finished result;
  workers share no mutable state
- Track order follows the order of the input paths, independent of which
  worker finishes first
- The first failure cancels all pending work and aborts the run; there is
  no partial output
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence
import logging
import os
import time

from .alignment import align_tracks
from .audio_io import decode_wav
from .channels import track_from_raw
from .config import MixConfig
from .mixer import mix_tracks, write_mix
from .resampling import resample_track
from .track import Track
from ..utils.formatting import (
    format_format,
    format_peak,
    format_sample_rate,
    format_time,
    samples_to_time_str,
)


logger = logging.getLogger(__name__)


@dataclass
class MixResult:
    """
    Summary of a completed mixdown.

    Attributes:
        output_path: Written WAV file
        num_samples: Samples per channel in the output
        sample_rate: Output sample rate
        bit_depth: Output bit depth
        channels: Output channel count
        track_ids: Identifiers of the mixed tracks, in input order
        clipped_samples: Samples replaced by the limiter
        peak: Peak of the float sum before limiting (1.0 = full scale)
        elapsed_seconds: Wall-clock duration of the run
    """
    output_path: Path
    num_samples: int
    sample_rate: int
    bit_depth: int
    channels: int
    track_ids: list[str]
    clipped_samples: int
    peak: float
    elapsed_seconds: float

    @property
    def duration_seconds(self) -> float:
        return self.num_samples / self.sample_rate


def make_track_ids(paths: Sequence[str | Path]) -> list[str]:
    """
    Derive unique track identifiers from file names.

    The identifier is the file name without extension. Repeated names get a
    numeric suffix in input order: "voice", "voice-2", "voice-3".
    """
    ids: list[str] = []
    seen: set[str] = set()

    for path in paths:
        stem = Path(path).stem
        track_id = stem
        counter = 2
        while track_id in seen:
            track_id = f"{stem}-{counter}"
            counter += 1
        seen.add(track_id)
        ids.append(track_id)

    return ids


def load_track(path: str | Path, track_id: str, config: MixConfig) -> Track:
    """
    Decode, normalize and resample one input file.

    Raises:
        DecodeError: The file could not be read
        ResampleError: The track could not be converted to the target rate
    """
    raw = decode_wav(path)
    track = track_from_raw(raw, track_id)
    track = resample_track(track, config.target_sample_rate, config.resampler)

    logger.info(
        "Loaded '%s': %s, %s -> %s",
        track_id,
        format_format(raw.sample_rate, raw.bit_depth, raw.channels),
        format_time(raw.duration_seconds),
        format_sample_rate(track.sample_rate),
    )
    return track


def load_tracks(paths: Sequence[str | Path], config: MixConfig) -> list[Track]:
    """
    Load all input files in parallel.

    One task per file is submitted to a thread pool. Results are collected
    as they complete and returned in input order. On the first failure the
    remaining tasks are cancelled and the error is re-raised.
    """
    if not paths:
        return []

    track_ids = make_track_ids(paths)
    max_workers = config.max_workers or min(len(paths), os.cpu_count() or 4)
    results: list[Optional[Track]] = [None] * len(paths)

    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mixdown")
    try:
        future_to_index = {
            executor.submit(load_track, path, track_id, config): index
            for index, (path, track_id) in enumerate(zip(paths, track_ids))
        }
        for future in as_completed(future_to_index):
            results[future_to_index[future]] = future.result()
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()

    return results


def mixdown(
    paths: Sequence[str | Path],
    output_path: str | Path,
    config: Optional[MixConfig] = None,
) -> MixResult:
    """
    Mix input WAV files into one output file.

    Args:
        paths: Input PCM WAV files
        output_path: Target WAV file
        config: Output format and limiter settings

    Returns:
        MixResult describing the written file

    Raises:
        ValueError: No input files
        DecodeError, ResampleError, EncodeError: The run failed, nothing was written
    """
    if config is None:
        config = MixConfig()
    if not paths:
        raise ValueError("No input files given")

    output_path = Path(output_path)
    start = time.perf_counter()

    logger.info(
        "Mixing %d files into %s (%s)",
        len(paths),
        output_path,
        format_format(config.target_sample_rate, config.target_bit_depth,
                      config.target_channel_count),
    )

    tracks = load_tracks(paths, config)
    track_ids = [track.id for track in tracks]

    tracks = align_tracks(tracks)
    buffer = mix_tracks(tracks, config)
    del tracks

    write_mix(buffer, output_path)
    elapsed = time.perf_counter() - start

    logger.info(
        "Wrote %s: %s, peak %s, %d clipped samples, took %.2f s",
        output_path.name,
        samples_to_time_str(buffer.num_samples, buffer.sample_rate),
        format_peak(buffer.peak),
        buffer.clipped_samples,
        elapsed,
    )

    return MixResult(
        output_path=output_path,
        num_samples=buffer.num_samples,
        sample_rate=buffer.sample_rate,
        bit_depth=buffer.bit_depth,
        channels=buffer.num_channels,
        track_ids=track_ids,
        clipped_samples=buffer.clipped_samples,
        peak=buffer.peak,
        elapsed_seconds=elapsed,
    )
