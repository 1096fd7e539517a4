"""
Formatierungsfunktionen für Log-Ausgaben.

Konvertiert numerische Werte in lesbare Strings.
"""

import math


def format_time(seconds: float, show_ms: bool = True) -> str:
    """
    Formatiere Zeit in lesbares Format.

    Args:
        seconds: Zeit in Sekunden
        show_ms: Zeige Millisekunden

    Returns:
        Formatierter String (z.B. "1:23.456" oder "1:23")
    """
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)

    minutes = int(seconds // 60)
    secs = seconds % 60

    if show_ms:
        return f"{sign}{minutes}:{secs:06.3f}"
    return f"{sign}{minutes}:{int(secs):02d}"


def format_db(db: float, precision: int = 1) -> str:
    """
    Formatiere dB-Wert.

    Returns:
        Formatierter String (z.B. "-12.3 dB")
    """
    if db == float('-inf'):
        return "-∞ dB"
    return f"{db:.{precision}f} dB"


def format_peak(peak: float, precision: int = 1) -> str:
    """
    Formatiere linearen Spitzenwert als dBFS.

    Args:
        peak: Spitzenwert (1.0 = Vollaussteuerung)
        precision: Nachkommastellen

    Returns:
        Formatierter String (z.B. "-6.0 dBFS")
    """
    db = 20 * math.log10(peak) if peak > 0 else float('-inf')
    return format_db(db, precision) + "FS"


def samples_to_time_str(
    samples: int,
    sample_rate: int,
    show_samples: bool = True,
) -> str:
    """
    Konvertiere Samples zu Zeit-String mit optionaler Sample-Anzeige.

    Returns:
        Formatierter String (z.B. "1:23.456 (65,432 samples)")
    """
    time_str = format_time(samples / sample_rate)

    if show_samples:
        return f"{time_str} ({samples:,} samples)"
    return time_str


def format_sample_rate(sr: int) -> str:
    """
    Formatiere Samplerate.

    Returns:
        Formatierter String (z.B. "44.1 kHz" oder "48 kHz")
    """
    if sr % 1000 == 0:
        return f"{sr // 1000} kHz"
    return f"{sr / 1000:.1f} kHz"


def format_channels(num_channels: int) -> str:
    """
    Formatiere Kanalanzahl.

    Returns:
        "Mono" oder "Stereo" oder "X channels"
    """
    if num_channels == 1:
        return "Mono"
    elif num_channels == 2:
        return "Stereo"
    return f"{num_channels} channels"


def format_format(sample_rate: int, bit_depth: int, channels: int) -> str:
    """Kurzbeschreibung eines PCM-Formats, z.B. "44.1 kHz / 24 bit / Stereo"."""
    return f"{format_sample_rate(sample_rate)} / {bit_depth} bit / {format_channels(channels)}"
