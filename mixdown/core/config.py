"""
Mixdown Configuration

Immutable settings for one mixdown run.

All parameters have explicit defaults matching the common delivery format
(44.1 kHz, 24 bit, stereo). Validation happens at construction time so an
invalid configuration never reaches the pipeline.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional
import math


SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)

# Headroom below full scale that keeps the encoder away from wraparound
DEFAULT_CLIP_LEVEL = 0.999992


@dataclass(frozen=True)
class ResamplerConfig:
    """
    Parameters of the band-limited resampler.

    Attributes:
        method: "sinc" (windowed-sinc interpolation) or "polyphase"
            (scipy.signal.resample_poly)
        half_width: Kernel half-width in input samples (taps per side)
        cutoff: Low-pass cutoff as fraction of the lower Nyquist frequency
        window: Window applied to the sinc kernel
        block_size: Output samples evaluated per vectorized block
    """
    method: Literal["sinc", "polyphase"] = "sinc"
    half_width: int = 256
    cutoff: float = 0.95
    window: Literal["blackmanharris"] = "blackmanharris"
    block_size: int = 4096

    def __post_init__(self):
        if self.method not in ("sinc", "polyphase"):
            raise ValueError(f"Unknown resampling method: {self.method}")
        if self.half_width < 1:
            raise ValueError("Kernel half-width must be at least 1")
        if not 0.0 < self.cutoff <= 1.0:
            raise ValueError("Cutoff must be in (0, 1]")
        if self.window != "blackmanharris":
            raise ValueError(f"Unknown kernel window: {self.window}")
        if self.block_size < 1:
            raise ValueError("Block size must be at least 1")


@dataclass(frozen=True)
class MixConfig:
    """
    Output format and limiter settings for a mixdown.

    The limiter works in the integer domain of the output bit depth.
    Clip levels are fractions of 2^(bits-1); a sample reaching the limit is
    replaced by the largest integer strictly below it.
    At 16 bit that is 32767, the int16 maximum. It lies below the 32767.74
    limit and cannot wrap, so a full scale sum of 1.0 passes unclipped.

    Attributes:
        target_sample_rate: Output sample rate in Hz
        target_bit_depth: Output PCM bit depth (8, 16, 24 or 32)
        target_channel_count: 1 (mono) or 2 (stereo)
        clip_ceiling: Positive clip level as fraction of full scale
        clip_floor: Negative clip level as fraction of full scale
        normalization: "sum" adds tracks, "average" divides by track count
        resampler: Resampler parameters
        max_workers: Worker threads for decoding; None picks automatically
    """
    target_sample_rate: int = 44100
    target_bit_depth: int = 24
    target_channel_count: int = 2
    clip_ceiling: float = DEFAULT_CLIP_LEVEL
    clip_floor: float = DEFAULT_CLIP_LEVEL
    normalization: Literal["sum", "average"] = "sum"
    resampler: ResamplerConfig = field(default_factory=ResamplerConfig)
    max_workers: Optional[int] = None

    def __post_init__(self):
        """Validate output format and limiter levels."""
        if self.target_sample_rate <= 0:
            raise ValueError("Target sample rate must be positive")
        if self.target_bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(
                f"Unsupported bit depth: {self.target_bit_depth} "
                f"(supported: {', '.join(map(str, SUPPORTED_BIT_DEPTHS))})"
            )
        if self.target_channel_count not in (1, 2):
            raise ValueError("Target channel count must be 1 or 2")
        if not 0.0 < self.clip_ceiling <= 1.0:
            raise ValueError("Clip ceiling must be in (0, 1]")
        if not 0.0 < self.clip_floor <= 1.0:
            raise ValueError("Clip floor must be in (0, 1]")
        if self.normalization not in ("sum", "average"):
            raise ValueError(f"Unknown normalization policy: {self.normalization}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    @property
    def full_scale(self) -> int:
        """Largest positive integer of the output bit depth."""
        return 2 ** (self.target_bit_depth - 1) - 1

    @property
    def ceiling_limit(self) -> float:
        """Scaled sample value at which positive clipping starts."""
        return self.clip_ceiling * 2 ** (self.target_bit_depth - 1)

    @property
    def floor_limit(self) -> float:
        """Magnitude at which negative clipping starts."""
        return self.clip_floor * 2 ** (self.target_bit_depth - 1)

    @property
    def safe_ceiling(self) -> int:
        """Replacement value for samples above the ceiling."""
        return math.ceil(self.ceiling_limit) - 1

    @property
    def safe_floor(self) -> int:
        """Magnitude of the replacement value for samples below the floor."""
        return math.ceil(self.floor_limit) - 1

    @property
    def subtype(self) -> str:
        """soundfile subtype of the output file."""
        return pcm_subtype(self.target_bit_depth)


def pcm_subtype(bit_depth: int) -> str:
    """Map a PCM bit depth to the soundfile WAV subtype."""
    subtype_map = {
        8: "PCM_U8",
        16: "PCM_16",
        24: "PCM_24",
        32: "PCM_32",
    }
    try:
        return subtype_map[bit_depth]
    except KeyError:
        raise ValueError(f"Unsupported bit depth: {bit_depth}") from None
