"""
Audio I/O Module

Decodes and encodes PCM WAV files. This is the service boundary of the
mixdown pipeline: no signal manipulation happens here.

Technical assumptions:
- WAV files are read with soundfile (libsndfile) as left-justified int32
  and shifted down to their native bit depth, so the decoder hands out the
  integer sample values stored in the file
- Samples are returned interleaved (frame 0 ch 0, frame 0 ch 1, ...)
- Only integer PCM subtypes are accepted; float WAV and compressed formats
  are rejected
- The encoder receives integers already scaled into the output bit depth
"""

from dataclasses import dataclass
from pathlib import Path
import logging
import os
import re

import numpy as np
import soundfile as sf

from .config import pcm_subtype
from .errors import DecodeError, EncodeError


logger = logging.getLogger(__name__)

WAV_FORMATS = ("WAV", "WAVEX")

# libsndfile header dump line for a data chunk larger than the file, e.g.
# "data : 2000 (should be 1499)"
DATA_CHUNK_MISMATCH = re.compile(r"data\s*:\s*(\d+)\s*\(should be (\d+)\)")


@dataclass
class RawAudio:
    """
    Decoded contents of one PCM WAV file.

    Attributes:
        samples: Interleaved integer samples, Shape: (num_samples * channels,)
        channels: Number of interleaved channels
        sample_rate: Sample rate of the file
        bit_depth: Bit depth of the stored samples
        file_path: Path to source file
    """
    samples: np.ndarray
    channels: int
    sample_rate: int
    bit_depth: int
    file_path: Path

    @property
    def num_frames(self) -> int:
        """Number of samples per channel."""
        return len(self.samples) // self.channels

    @property
    def duration_seconds(self) -> float:
        return self.num_frames / self.sample_rate


def decode_wav(file_path: str | Path) -> RawAudio:
    """
    Decode a PCM WAV file into interleaved integer samples.

    Supported subtypes: PCM_S8, PCM_U8, PCM_16, PCM_24, PCM_32.

    Args:
        file_path: Path to WAV file

    Returns:
        RawAudio with samples at the file's native bit depth

    Raises:
        DecodeError: File missing, not a WAV, not integer PCM, truncated
            or unreadable
    """
    path = Path(file_path)

    if not path.is_file():
        raise DecodeError(path, "file not found")

    try:
        info = sf.info(path)
    except (sf.SoundFileError, RuntimeError) as e:
        raise DecodeError(path, str(e)) from e

    if info.format not in WAV_FORMATS:
        raise DecodeError(path, f"not a WAV file (format {info.format})")

    bit_depth = _extract_bit_depth(info.subtype)
    if bit_depth is None:
        raise DecodeError(path, f"unsupported subtype {info.subtype}, integer PCM required")

    # libsndfile silently shortens a data chunk that runs past the end of file
    mismatch = DATA_CHUNK_MISMATCH.search(info.extra_info or "")
    if mismatch and int(mismatch.group(1)) > int(mismatch.group(2)):
        raise DecodeError(
            path,
            f"truncated data: header declares {mismatch.group(1)} bytes, "
            f"file holds {mismatch.group(2)}",
        )

    try:
        data, sample_rate = sf.read(path, dtype="int32", always_2d=True)
    except (sf.SoundFileError, RuntimeError) as e:
        raise DecodeError(path, str(e)) from e

    if data.shape[0] != info.frames:
        raise DecodeError(
            path, f"truncated data: expected {info.frames} frames, read {data.shape[0]}"
        )

    # libsndfile left-justifies every subtype into 32 bit
    samples = (data >> (32 - bit_depth)).reshape(-1)

    logger.debug(
        "Decoded %s: %d frames, %d ch, %d Hz, %d bit",
        path.name, data.shape[0], info.channels, sample_rate, bit_depth,
    )

    return RawAudio(
        samples=samples,
        channels=info.channels,
        sample_rate=sample_rate,
        bit_depth=bit_depth,
        file_path=path,
    )


def encode_wav(
    samples: np.ndarray,
    file_path: str | Path,
    sample_rate: int,
    bit_depth: int,
    channels: int,
) -> None:
    """
    Write interleaved integer samples as PCM WAV.

    The file is written next to the target and renamed into place once
    complete, so a failed write never leaves a partial output behind.

    Args:
        samples: Interleaved integers in the range of bit_depth
        file_path: Target path
        sample_rate: Sample rate
        bit_depth: 8, 16, 24 or 32
        channels: Number of interleaved channels

    Raises:
        ValueError: Invalid data or parameters
        EncodeError: The file could not be written
    """
    path = Path(file_path)

    if samples.ndim != 1:
        raise ValueError("Samples must be interleaved (1D)")
    if not np.issubdtype(samples.dtype, np.integer):
        raise ValueError("Samples must be integers")
    if channels < 1 or len(samples) % channels != 0:
        raise ValueError(f"{len(samples)} samples cannot be split into {channels} channels")

    subtype = pcm_subtype(bit_depth)
    frames = _to_container(samples, bit_depth).reshape(-1, channels)

    tmp_path = path.with_name(path.name + ".part")
    try:
        sf.write(tmp_path, frames, sample_rate, subtype=subtype, format="WAV")
        os.replace(tmp_path, path)
    except (sf.SoundFileError, RuntimeError, OSError) as e:
        tmp_path.unlink(missing_ok=True)
        raise EncodeError(path, e) from e

    logger.debug("Encoded %s: %d frames, %s", path.name, frames.shape[0], subtype)


def interleave(channels: np.ndarray) -> np.ndarray:
    """
    Interleave channel buffers sample by sample.

    Args:
        channels: Shape (channels, num_samples)

    Returns:
        1D array: ch0[0], ch1[0], ch0[1], ch1[1], ...
    """
    if channels.ndim != 2:
        raise ValueError("Expected 2D array of shape (channels, samples)")
    return channels.T.reshape(-1)


def _to_container(samples: np.ndarray, bit_depth: int) -> np.ndarray:
    """
    Left-justify integer samples into the dtype soundfile expects.

    soundfile treats int16/int32 input as full-range values of that width,
    so narrower depths are shifted up to the container's most significant bits.
    """
    if bit_depth <= 16:
        return (samples.astype(np.int16) << (16 - bit_depth)).astype(np.int16)
    return (samples.astype(np.int32) << (32 - bit_depth)).astype(np.int32)


def _extract_bit_depth(subtype: str) -> int | None:
    """Extract bit depth from an integer PCM soundfile subtype string."""
    bit_depth_map = {
        "PCM_16": 16,
        "PCM_24": 24,
        "PCM_32": 32,
        "PCM_S8": 8,
        "PCM_U8": 8,
    }
    return bit_depth_map.get(subtype)
