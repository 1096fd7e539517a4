"""
Tests für Audio I/O Modul.

Testet Dekodieren und Kodieren von PCM-WAV-Dateien.
"""

import pytest
import numpy as np
import soundfile as sf

from mixdown.core.audio_io import (
    RawAudio,
    decode_wav,
    encode_wav,
    interleave,
)
from mixdown.core.errors import DecodeError, EncodeError


class TestDecode:
    """Tests für decode_wav."""

    def test_decode_mono_16bit(self, write_wav):
        """16-Bit-Mono liefert die gespeicherten Integerwerte."""
        values = [0, 1000, -1000, 32767, -32768]
        path = write_wav("mono.wav", values, sample_rate=22050)

        raw = decode_wav(path)

        assert isinstance(raw, RawAudio)
        assert raw.channels == 1
        assert raw.sample_rate == 22050
        assert raw.bit_depth == 16
        assert raw.num_frames == 5
        np.testing.assert_array_equal(raw.samples, values)

    def test_decode_24bit(self, write_wav):
        """24-Bit-Werte werden auf native Bittiefe zurückgeschoben."""
        values = [0, 8388607, -8388608, 12345, -54321]
        path = write_wav("deep.wav", values, bit_depth=24)

        raw = decode_wav(path)

        assert raw.bit_depth == 24
        np.testing.assert_array_equal(raw.samples, values)

    def test_decode_stereo_interleaved(self, write_wav):
        """Stereo wird verschachtelt zurückgegeben."""
        frames = np.array([[1, 2], [3, 4], [5, 6]])
        path = write_wav("stereo.wav", frames)

        raw = decode_wav(path)

        assert raw.channels == 2
        assert raw.num_frames == 3
        np.testing.assert_array_equal(raw.samples, [1, 2, 3, 4, 5, 6])

    def test_duration(self, write_wav):
        """Dauer aus Frames und Samplerate."""
        path = write_wav("second.wav", np.zeros(44100))

        assert decode_wav(path).duration_seconds == pytest.approx(1.0)


class TestDecodeErrors:
    """Tests für Fehlerbehandlung beim Dekodieren."""

    def test_file_not_found(self, tmp_path):
        """Fehlende Datei erzeugt DecodeError mit Pfad."""
        missing = tmp_path / "missing.wav"

        with pytest.raises(DecodeError) as exc_info:
            decode_wav(missing)

        assert exc_info.value.path == missing
        assert "missing.wav" in str(exc_info.value)

    def test_malformed_file(self, tmp_path):
        """Keine Audiodatei erzeugt DecodeError."""
        path = tmp_path / "garbage.wav"
        path.write_bytes(b"this is not a RIFF header at all")

        with pytest.raises(DecodeError):
            decode_wav(path)

    def test_truncated_file(self, write_wav):
        """Datenblock kürzer als im Header angegeben erzeugt DecodeError."""
        path = write_wav("cut.wav", np.full(1000, 1234))
        path.write_bytes(path.read_bytes()[:-501])

        with pytest.raises(DecodeError, match="truncated") as exc_info:
            decode_wav(path)

        assert exc_info.value.path == path

    def test_intact_file_not_truncated(self, write_wav):
        """Vollständige Datei wird nicht als abgeschnitten gemeldet."""
        path = write_wav("whole.wav", np.full(1001, -77))

        assert decode_wav(path).num_frames == 1001

    def test_float_wav_rejected(self, tmp_path):
        """Float-WAV ist kein Integer-PCM."""
        path = tmp_path / "float.wav"
        sf.write(path, np.zeros(100), 44100, subtype="FLOAT")

        with pytest.raises(DecodeError, match="integer PCM"):
            decode_wav(path)


class TestEncode:
    """Tests für encode_wav."""

    def test_encode_16bit_stereo(self, tmp_path):
        """Verschachtelte Samples landen in den richtigen Kanälen."""
        path = tmp_path / "out.wav"
        samples = np.array([100, -100, 32767, -32767, 0, 5])

        encode_wav(samples, path, sample_rate=48000, bit_depth=16, channels=2)

        data, sr = sf.read(path, dtype="int16", always_2d=True)
        assert sr == 48000
        assert sf.info(path).subtype == "PCM_16"
        np.testing.assert_array_equal(data, [[100, -100], [32767, -32767], [0, 5]])

    @pytest.mark.parametrize("bit_depth", [8, 24, 32])
    def test_encode_decode_native_values(self, tmp_path, bit_depth):
        """Integerwerte überstehen Kodieren und Dekodieren unverändert."""
        path = tmp_path / f"out_{bit_depth}.wav"
        top = 2 ** (bit_depth - 1) - 1
        samples = np.array([0, 1, -1, top, -top, top // 3])

        encode_wav(samples, path, sample_rate=44100, bit_depth=bit_depth, channels=1)
        raw = decode_wav(path)

        assert raw.bit_depth == bit_depth
        np.testing.assert_array_equal(raw.samples, samples)

    def test_encode_error(self, tmp_path):
        """Schreibfehler erzeugt EncodeError, keine Teildatei bleibt zurück."""
        path = tmp_path / "no_such_dir" / "out.wav"

        with pytest.raises(EncodeError) as exc_info:
            encode_wav(np.zeros(4, dtype=np.int64), path, 44100, 16, 2)

        assert exc_info.value.path == path
        assert not path.exists()
        assert not (tmp_path / "no_such_dir").exists()

    def test_reject_float_samples(self, tmp_path):
        """Float-Daten werden abgelehnt."""
        with pytest.raises(ValueError, match="integers"):
            encode_wav(np.zeros(4), tmp_path / "x.wav", 44100, 16, 2)

    def test_reject_uneven_channels(self, tmp_path):
        """Sampleanzahl muss durch Kanalanzahl teilbar sein."""
        with pytest.raises(ValueError):
            encode_wav(np.zeros(5, dtype=np.int32), tmp_path / "x.wav", 44100, 16, 2)


class TestInterleave:
    """Tests für interleave."""

    def test_interleave_stereo(self):
        """Kanal 0 Sample 0, Kanal 1 Sample 0, ..."""
        channels = np.array([[1, 2, 3], [4, 5, 6]])

        np.testing.assert_array_equal(interleave(channels), [1, 4, 2, 5, 3, 6])

    def test_interleave_mono(self):
        """Mono bleibt unverändert."""
        channels = np.array([[1, 2, 3]])

        np.testing.assert_array_equal(interleave(channels), [1, 2, 3])
