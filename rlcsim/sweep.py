"""
Frequency-domain sampling for Bode, Nyquist and spectrum views.

All sweeps are log-spaced and vectorized with numpy. Degenerate input
(f0 ≤ 0, non-finite values) yields empty sequences rather than NaN.
"""

from typing import Dict

import numpy as np

from rlcsim.parameters import EffectiveParameters, SignalType, coerce_signal_type
from rlcsim.resonance import bode_phase, gain_db, transfer_magnitude

ZOOM_MIN = 0.25
ZOOM_MAX = 16.0
ZOOM_STEP = 1.5

# Decades shown by the Bode view at zoom 1
BASE_DECADES = 4.0

NYQUIST_F_START = 10.0
NYQUIST_F_END = 1e5


def clamp_zoom(zoom: float) -> float:
    """Bound a zoom factor to [0.25, 16]; non-finite values reset to 1."""
    if not np.isfinite(zoom) or zoom <= 0:
        return 1.0
    return float(min(max(zoom, ZOOM_MIN), ZOOM_MAX))


def zoom_in(zoom: float) -> float:
    return clamp_zoom(clamp_zoom(zoom) * ZOOM_STEP)


def zoom_out(zoom: float) -> float:
    return clamp_zoom(clamp_zoom(zoom) / ZOOM_STEP)


def decades_for_zoom(zoom: float) -> float:
    """Width of the Bode window; higher zoom shows fewer decades."""
    return BASE_DECADES / clamp_zoom(zoom)


def _empty_sweep() -> Dict:
    return {
        'frequencies': [],
        'magnitude_db': [],
        'phase_deg': [],
        'num_points': 0,
    }


def frequency_sweep(
    f0: float,
    q: float,
    preset,
    decades: float = BASE_DECADES,
    num_points: int = 301,
) -> Dict:
    """
    Sample the preset transfer function around f0.

    Frequencies run from f0·10^(−decades/2) to f0·10^(decades/2).

    Args:
        f0: Resonance frequency in Hz.
        q: Quality factor.
        preset: FilterPreset (or its string value) selecting the gain shape.
        decades: Window width in decades.
        num_points: Number of samples (endpoints included).

    Returns:
        Dict with frequencies, magnitude_db, phase_deg lists and num_points.
    """
    if not (np.isfinite(f0) and f0 > 0 and np.isfinite(q) and q > 0):
        return _empty_sweep()
    if not np.isfinite(decades) or decades <= 0 or num_points < 2:
        return _empty_sweep()

    log_start = np.log10(f0) - decades / 2
    frequencies = np.logspace(log_start, log_start + decades, num_points)
    u = frequencies / f0

    return {
        'frequencies': frequencies.tolist(),
        'magnitude_db': np.asarray(gain_db(u, q, preset)).tolist(),
        'phase_deg': np.asarray(bode_phase(u, q)).tolist(),
        'num_points': num_points,
    }


def nyquist_sweep(
    effective: EffectiveParameters,
    num_points: int = 301,
    f_start: float = NYQUIST_F_START,
    f_end: float = NYQUIST_F_END,
) -> Dict:
    """
    Series impedance locus Z = R + j(ωL − 1/(ωC)) over a fixed band.

    The real part is R at every frequency, so the locus is a vertical
    line. max_magnitude is the largest finite |Z| seen and is what the
    caller scales the plot by (see nyquist_scale).
    """
    R = effective.resistance
    L = effective.inductance
    C = effective.capacitance

    frequencies = np.logspace(np.log10(f_start), np.log10(f_end), num_points)
    omega = 2 * np.pi * frequencies
    imag = omega * L - 1.0 / (omega * C)
    real = np.full_like(frequencies, R)

    magnitude = np.hypot(real, imag)
    finite = magnitude[np.isfinite(magnitude)]
    max_magnitude = float(finite.max()) if finite.size else 0.0

    omega0 = 1.0 / np.sqrt(L * C)
    resonance_imag = omega0 * L - 1.0 / (omega0 * C)

    return {
        'frequencies': frequencies.tolist(),
        'real': real.tolist(),
        'imag': imag.tolist(),
        'max_magnitude': max_magnitude,
        'resonance_point': (float(R), float(resonance_imag)),
    }


def nyquist_scale(max_magnitude: float, half_extent: float, zoom: float = 1.0) -> float:
    """Pixels per Ohm so the largest |Z| reaches half_extent at zoom 1."""
    if not np.isfinite(max_magnitude) or max_magnitude <= 0:
        return 0.0
    return half_extent / max_magnitude * clamp_zoom(zoom)


def _line_shape(signal_type: SignalType, bin_freqs: np.ndarray, frequency: float) -> np.ndarray:
    if signal_type == SignalType.SINE:
        width = frequency * 0.05
        detune = np.abs(bin_freqs - frequency)
        return np.where(detune < width, 1 - detune / width, 0.0)

    if signal_type == SignalType.SQUARE:
        mag = np.zeros_like(bin_freqs)
        for h in range(1, 10, 2):
            mag += np.where(np.abs(bin_freqs - h * frequency) < frequency * 0.02, 1.0 / h, 0.0)
        return mag

    # Step and impulse: broadband, decaying away from the source frequency
    return np.exp(-np.abs(bin_freqs - frequency) / (frequency * 0.5))


def spectrum(
    signal_type,
    frequency: float,
    f0: float,
    q: float,
    preset,
    zoom: float = 1.0,
    bins: int = 256,
) -> Dict:
    """
    Illustrative output spectrum for the FFT view.

    The excitation's line shape is multiplied by the preset transfer
    magnitude. The visible band is [0, fs/2] with fs = 10·f/zoom.
    """
    if not (np.isfinite(f0) and f0 > 0 and np.isfinite(frequency) and frequency > 0) or bins < 1:
        return {'frequencies': [], 'magnitude': [], 'sample_rate': 0.0}

    sample_rate = (10 * frequency) / clamp_zoom(zoom)
    bin_freqs = np.arange(bins) / bins * (sample_rate / 2)

    mag = _line_shape(coerce_signal_type(signal_type), bin_freqs, frequency)
    u = np.maximum(bin_freqs, 1.0) / f0
    mag = mag * np.asarray(transfer_magnitude(u, q, preset))

    return {
        'frequencies': bin_freqs.tolist(),
        'magnitude': mag.tolist(),
        'sample_rate': float(sample_rate),
    }
