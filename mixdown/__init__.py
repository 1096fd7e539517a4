"""
Mixdown - mixes PCM WAV recordings into one synchronized, peak-limited track.
"""

__version__ = "1.0.0"
