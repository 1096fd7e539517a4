"""
Tests für die Mix-Konfiguration.
"""

import pytest

from mixdown.core.config import MixConfig, ResamplerConfig, pcm_subtype


class TestMixConfig:
    """Tests für MixConfig."""

    def test_default_config(self):
        """Standardformat: 44.1 kHz, 24 Bit, Stereo, Summe."""
        config = MixConfig()

        assert config.target_sample_rate == 44100
        assert config.target_bit_depth == 24
        assert config.target_channel_count == 2
        assert config.normalization == "sum"
        assert config.clip_ceiling == pytest.approx(0.999992)
        assert config.subtype == "PCM_24"

    def test_full_scale(self):
        assert MixConfig(target_bit_depth=16).full_scale == 32767
        assert MixConfig(target_bit_depth=24).full_scale == 8388607

    def test_safe_limits_16bit(self):
        """Sicherer Grenzwert liegt strikt unter der Clipgrenze."""
        config = MixConfig(target_bit_depth=16)

        assert config.ceiling_limit == pytest.approx(32767.74, abs=0.01)
        assert config.safe_ceiling == 32767
        assert config.safe_floor == 32767

    def test_safe_limits_integer_level(self):
        """Ganzzahlige Clipgrenze: Ersatzwert eins darunter."""
        config = MixConfig(target_bit_depth=16, clip_ceiling=1.0, clip_floor=0.5)

        assert config.safe_ceiling == 32767
        assert config.safe_floor == 16383

    def test_immutable(self):
        config = MixConfig()

        with pytest.raises(AttributeError):
            config.target_sample_rate = 48000

    @pytest.mark.parametrize("kwargs", [
        {"target_sample_rate": 0},
        {"target_bit_depth": 12},
        {"target_channel_count": 3},
        {"clip_ceiling": 0.0},
        {"clip_floor": 1.5},
        {"normalization": "median"},
        {"max_workers": 0},
    ])
    def test_invalid_values(self, kwargs):
        """Ungültige Werte werden abgelehnt."""
        with pytest.raises(ValueError):
            MixConfig(**kwargs)


class TestResamplerConfig:
    """Tests für ResamplerConfig."""

    def test_defaults(self):
        config = ResamplerConfig()

        assert config.method == "sinc"
        assert config.half_width == 256
        assert config.cutoff == 0.95
        assert config.window == "blackmanharris"

    @pytest.mark.parametrize("kwargs", [
        {"method": "linear"},
        {"half_width": 0},
        {"cutoff": 0.0},
        {"cutoff": 1.2},
        {"window": "hann"},
        {"block_size": 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ResamplerConfig(**kwargs)


def test_pcm_subtype():
    assert pcm_subtype(8) == "PCM_U8"
    assert pcm_subtype(32) == "PCM_32"
    with pytest.raises(ValueError):
        pcm_subtype(20)
