"""
Tests für Spurausrichtung.
"""

import pytest
import numpy as np

from mixdown.core.alignment import align_tracks, pad_track
from mixdown.core.track import Track


def _track(track_id, num_samples, sample_rate=44100, value=0.5):
    channels = np.vstack([
        np.full(num_samples, value),
        np.full(num_samples, -value),
    ])
    return Track(track_id, channels, sample_rate, 16)


class TestPadTrack:
    """Tests für pad_track."""

    def test_padding_correctness(self):
        """Original bei [0, N), exakt Null bei [N, L), in jedem Kanal."""
        track = _track("short", 3)

        padded = pad_track(track, 8)

        assert padded.num_samples == 8
        for ch in range(2):
            np.testing.assert_array_equal(padded.get_channel(ch)[:3], track.get_channel(ch))
            np.testing.assert_array_equal(padded.get_channel(ch)[3:], 0.0)

    def test_original_unchanged(self):
        """Eingabespur wird nicht verändert."""
        track = _track("short", 3)

        pad_track(track, 10)

        assert track.num_samples == 3

    def test_same_length_returns_track(self):
        track = _track("full", 5)

        assert pad_track(track, 5) is track

    def test_cannot_shorten(self):
        with pytest.raises(ValueError):
            pad_track(_track("long", 10), 5)


class TestAlignTracks:
    """Tests für align_tracks."""

    def test_common_length(self):
        """Alle Spuren erhalten die maximale Länge."""
        tracks = [_track("a", 4), _track("b", 2), _track("c", 7)]

        aligned = align_tracks(tracks)

        assert [t.num_samples for t in aligned] == [7, 7, 7]

    def test_order_preserved(self):
        tracks = [_track("a", 4), _track("b", 2), _track("c", 7)]

        aligned = align_tracks(tracks)

        assert [t.id for t in aligned] == ["a", "b", "c"]

    def test_longest_untouched(self):
        """Längste Spur wird nicht verändert."""
        longest = _track("long", 9)
        tracks = [_track("a", 3), longest]

        aligned = align_tracks(tracks)

        assert aligned[1] is longest

    def test_tie_on_maximum(self):
        """Gleich lange Spuren werden beide unverändert übernommen."""
        first = _track("a", 6)
        second = _track("b", 6)

        aligned = align_tracks([first, _track("c", 2), second])

        assert aligned[0] is first
        assert aligned[2] is second
        assert aligned[1].num_samples == 6

    def test_empty(self):
        assert align_tracks([]) == []

    def test_mixed_sample_rates(self):
        """Unterschiedliche Raten werden abgelehnt."""
        with pytest.raises(ValueError, match="sample rates"):
            align_tracks([_track("a", 4, 44100), _track("b", 4, 48000)])

    def test_mixed_channel_counts(self):
        mono = Track("m", np.zeros((1, 4)), 44100, 16)

        with pytest.raises(ValueError, match="channel counts"):
            align_tracks([mono, _track("s", 4)])
