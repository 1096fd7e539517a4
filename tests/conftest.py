"""
Gemeinsame Fixtures für die Tests.
"""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf


@pytest.fixture
def write_wav(tmp_path):
    """
    Schreibt Integer-Samples als PCM-WAV.

    samples: Shape (frames,) für Mono oder (frames, channels)
    Werte liegen im Bereich der angegebenen Bittiefe.
    """
    def _write(name, samples, sample_rate=44100, bit_depth=16):
        path = Path(tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        data = np.asarray(samples)
        if bit_depth == 16:
            data = data.astype(np.int16)
        else:
            data = data.astype(np.int32) << (32 - bit_depth)
        subtype = {8: "PCM_U8", 16: "PCM_16", 24: "PCM_24", 32: "PCM_32"}[bit_depth]
        sf.write(path, data, sample_rate, subtype=subtype)
        return path

    return _write
