"""
Command-line interface.

Usage:
    mixdown OUTPUT INPUT [INPUT ...] [options]

Example:
    mixdown mix.wav drums.wav bass.wav vocals.wav --sample-rate 48000 --bit-depth 16
"""

from typing import Optional, Sequence
import argparse
import logging
import sys

from . import __version__
from .core.config import MixConfig, ResamplerConfig, SUPPORTED_BIT_DEPTHS
from .core.errors import MixdownError
from .core.pipeline import mixdown
from .utils.formatting import format_time


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all options."""
    parser = argparse.ArgumentParser(
        prog="mixdown",
        description="Mix PCM WAV files into one synchronized, peak-limited track",
    )
    parser.add_argument("output", help="Output WAV file")
    parser.add_argument("inputs", nargs="+", help="Input WAV files")

    fmt = parser.add_argument_group("Output Format")
    fmt.add_argument("--sample-rate", type=int, default=44100,
                     help="Output sample rate in Hz (default: 44100)")
    fmt.add_argument("--bit-depth", type=int, default=24, choices=SUPPORTED_BIT_DEPTHS,
                     help="Output bit depth (default: 24)")
    fmt.add_argument("--channels", type=int, default=2, choices=(1, 2),
                     help="Output channel count (default: 2)")

    mix = parser.add_argument_group("Mixing")
    mix.add_argument("--average", action="store_true",
                     help="Divide the sum by the number of tracks instead of clipping it")
    mix.add_argument("--resampler", choices=("sinc", "polyphase"), default="sinc",
                     help="Sample-rate conversion method (default: sinc)")
    mix.add_argument("--workers", type=int, default=None,
                     help="Number of decoding threads (default: one per file, up to CPU count)")

    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log output (-v info, -vv debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> MixConfig:
    """Build the mix configuration from parsed arguments."""
    return MixConfig(
        target_sample_rate=args.sample_rate,
        target_bit_depth=args.bit_depth,
        target_channel_count=args.channels,
        normalization="average" if args.average else "sum",
        resampler=ResamplerConfig(method=args.resampler),
        max_workers=args.workers,
    )


def _configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a mixdown from the command line. Returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = mixdown(args.inputs, args.output, config)
    except MixdownError as e:
        logger.debug("Mixdown failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Wrote {result.output_path} ({len(result.track_ids)} tracks, "
        f"{format_time(result.duration_seconds)}, "
        f"{result.clipped_samples} clipped samples)"
    )
    return 0
