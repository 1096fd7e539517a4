"""
Core mixdown module - fully testable without the command line.

This module contains the whole pipeline:
- Audio I/O (PCM WAV decode/encode)
- Channel normalization
- Sample-rate conversion (windowed sinc)
- Track alignment
- Summation and peak limiting
"""

from .errors import MixdownError, DecodeError, ResampleError, EncodeError
from .config import MixConfig, ResamplerConfig
from .audio_io import RawAudio, decode_wav, encode_wav, interleave
from .track import Track
from .channels import normalize_channels, track_from_raw
from .resampling import resample_channels, resample_track
from .alignment import align_tracks, pad_track
from .mixer import MixBuffer, sum_tracks, apply_limiter, mix_tracks, write_mix
from .pipeline import MixResult, load_tracks, mixdown

__all__ = [
    "MixdownError",
    "DecodeError",
    "ResampleError",
    "EncodeError",
    "MixConfig",
    "ResamplerConfig",
    "RawAudio",
    "decode_wav",
    "encode_wav",
    "interleave",
    "Track",
    "normalize_channels",
    "track_from_raw",
    "resample_channels",
    "resample_track",
    "align_tracks",
    "pad_track",
    "MixBuffer",
    "sum_tracks",
    "apply_limiter",
    "mix_tracks",
    "write_mix",
    "MixResult",
    "load_tracks",
    "mixdown",
]
