#!/usr/bin/env python3
"""
Mixdown - Einstiegspunkt

Mischt beliebige PCM-WAV-Aufnahmen zu einer synchronen, pegelbegrenzten Spur.

Verwendung:
    python main.py OUTPUT INPUT [INPUT ...] [options]

Beispiel:
    python main.py mix.wav drums.wav bass.wav vocals.wav
"""

import sys


def main():
    """Start the mixdown command line."""
    # Check Python version
    if sys.version_info < (3, 11):
        print("Error: Python 3.11 or higher is required.")
        print(f"Current version: {sys.version}")
        sys.exit(1)

    from mixdown.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
