"""
Closed-form time-domain responses of the series RLC loop.

Sine and square excitations use the resistor voltage divider

    H(jω) = R / (R + j(ωL − 1/(ωC)))

so the output is the voltage across R, whatever topology or preset is
selected elsewhere. Square waves are the first five odd harmonics.

Step and impulse responses use ω0 = 1/√(LC), α = R/(2L), ζ = α/ω0:

    ζ < 0.9999   underdamped   1 − e^(−αt)(cos ωd·t + (α/ωd) sin ωd·t)
    ζ > 1.0001   overdamped    1 − (s2·e^(s1·t) − s1·e^(s2·t)) / (s2 − s1)
    otherwise    critical      1 − e^(−αt)(1 + αt)

The critical form is the limit the other two reach at ζ = 1, where both
of them divide by zero.

Every waveform function accepts a float (returns a float) or a numpy array
(returns an array).
"""

from collections import namedtuple
from typing import Callable, Dict

import numpy as np

from rlcsim.parameters import EffectiveParameters, SignalType, coerce_signal_type
from rlcsim.resonance import damping
from rlcsim.sweep import clamp_zoom

Waveform = namedtuple('Waveform', ['input', 'output'])

# Time-domain views never run below 1 Hz
MIN_SIGNAL_FREQUENCY = 1.0

SQUARE_HARMONICS = (1, 3, 5, 7, 9)

# Half-width of the critical-damping band around ζ = 1
CRITICAL_DAMPING_TOLERANCE = 1e-4

# Periods shown at zoom 1
BASE_PERIODS = 3.0


def _evaluate(t, fn: Callable, include_zero: bool = True):
    """Apply fn for t ≥ 0 (or t > 0), zero elsewhere."""
    t_arr = np.asarray(t, dtype=float)
    active = t_arr >= 0 if include_zero else t_arr > 0
    # fn only ever sees non-negative times so exp() cannot overflow
    values = np.where(active, fn(np.where(active, t_arr, 0.0)), 0.0)
    return _scalar_or_array(values)


def _scalar_or_array(values):
    return float(values) if np.ndim(values) == 0 else values


def _divider(effective: EffectiveParameters, omega: float):
    """Gain R/|Z| and phase φ of the series loop at omega."""
    R = effective.resistance
    X = omega * effective.inductance - 1.0 / (omega * effective.capacitance)
    Z = np.hypot(R, X)
    return R / Z, np.arctan2(X, R)


def sine_waveform(
    effective: EffectiveParameters,
    amplitude: float,
    frequency: float,
) -> Waveform:
    """Sine input and the voltage across R in steady state."""
    omega = 2 * np.pi * max(frequency, MIN_SIGNAL_FREQUENCY)
    gain, phi = _divider(effective, omega)

    def input_fn(t):
        return _scalar_or_array(amplitude * np.sin(omega * np.asarray(t, dtype=float)))

    def output_fn(t):
        return _scalar_or_array(amplitude * gain * np.sin(omega * np.asarray(t, dtype=float) - phi))

    return Waveform(input_fn, output_fn)


def square_waveform(
    effective: EffectiveParameters,
    amplitude: float,
    frequency: float,
) -> Waveform:
    """
    Five-harmonic square wave and its filtered version.

    Both sums are divided by 4/π so the fundamental has amplitude A.
    """
    omega = 2 * np.pi * max(frequency, MIN_SIGNAL_FREQUENCY)
    norm = 4 / np.pi
    terms = []
    for n in SQUARE_HARMONICS:
        gain, phi = _divider(effective, n * omega)
        terms.append((n, 4 / (n * np.pi), gain, phi))

    def input_fn(t):
        t = np.asarray(t, dtype=float)
        v = sum(coeff * np.sin(n * omega * t) for n, coeff, _, _ in terms)
        return _scalar_or_array(amplitude * v / norm)

    def output_fn(t):
        t = np.asarray(t, dtype=float)
        v = sum(gain * coeff * np.sin(n * omega * t - phi) for n, coeff, gain, phi in terms)
        return _scalar_or_array(amplitude * v / norm)

    return Waveform(input_fn, output_fn)


def step_response(effective: EffectiveParameters, amplitude: float) -> Waveform:
    """Capacitor voltage for a step of height A applied at t = 0."""
    omega0, alpha, zeta = damping(effective)

    if zeta < 1 - CRITICAL_DAMPING_TOLERANCE:
        omega_d = omega0 * np.sqrt(1 - zeta ** 2)

        def response(t):
            return 1 - np.exp(-alpha * t) * (np.cos(omega_d * t) + (alpha / omega_d) * np.sin(omega_d * t))

    elif zeta > 1 + CRITICAL_DAMPING_TOLERANCE:
        # α·(1 + √(1 − 1/ζ²)) equals α + √(α² − ω0²) without squaring α
        s2 = -alpha * (1 + np.sqrt(1 - (1.0 / zeta) ** 2))
        # s1·s2 = ω0²; avoids cancellation in −α + √(α² − ω0²) when α ≫ ω0
        s1 = omega0 * (omega0 / s2)

        def response(t):
            return 1 - (s2 * np.exp(s1 * t) - s1 * np.exp(s2 * t)) / (s2 - s1)

    else:
        def response(t):
            return 1 - np.exp(-alpha * t) * (1 + alpha * t)

    def input_fn(t):
        return _evaluate(t, lambda t: np.full_like(t, amplitude, dtype=float))

    def output_fn(t):
        return _evaluate(t, lambda t: amplitude * response(t))

    return Waveform(input_fn, output_fn)


def impulse_response(effective: EffectiveParameters, amplitude: float) -> Waveform:
    """
    Underdamped impulse response; zero when α ≥ ω0.

    The input is drawn as zero (the impulse itself is not plotted).
    """
    omega0, alpha, _ = damping(effective)
    L = effective.inductance

    def input_fn(t):
        return _evaluate(t, np.zeros_like)

    omega_d = np.sqrt((omega0 - alpha) * (omega0 + alpha)) if alpha < omega0 else 0.0
    if omega_d > 0:
        scale = amplitude / (L * omega_d)

        def output_fn(t):
            return _evaluate(t, lambda t: scale * np.exp(-alpha * t) * np.sin(omega_d * t), include_zero=False)
    else:
        def output_fn(t):
            return _evaluate(t, np.zeros_like)

    return Waveform(input_fn, output_fn)


def waveform(
    effective: EffectiveParameters,
    signal_type,
    amplitude: float,
    frequency: float,
) -> Waveform:
    """
    Build the (input, output) pair for a signal type.

    Args:
        effective: Normalized component values.
        signal_type: SignalType or its string value; unknown types give a sine.
        amplitude: Source amplitude (V).
        frequency: Source frequency (Hz); ignored by step and impulse.
    """
    signal_type = coerce_signal_type(signal_type)
    if signal_type == SignalType.SQUARE:
        return square_waveform(effective, amplitude, frequency)
    if signal_type == SignalType.STEP:
        return step_response(effective, amplitude)
    if signal_type == SignalType.IMPULSE:
        return impulse_response(effective, amplitude)
    return sine_waveform(effective, amplitude, frequency)


def sample_waveform(
    wave: Waveform,
    frequency: float,
    zoom: float = 1.0,
    num_points: int = 600,
) -> Dict:
    """
    Sample a waveform over the display window.

    The window covers 3/zoom periods of the source frequency. max_abs is
    the largest |value| on either curve (1.0 when both are flat), which
    the renderer uses to scale the y axis.

    Returns:
        Dict with time, input, output lists and max_abs.
    """
    freq = max(frequency, MIN_SIGNAL_FREQUENCY)
    t = np.linspace(0.0, (BASE_PERIODS / clamp_zoom(zoom)) / freq, num_points + 1)

    inputs = np.asarray(wave.input(t), dtype=float)
    outputs = np.asarray(wave.output(t), dtype=float)

    max_abs = float(max(np.max(np.abs(inputs)), np.max(np.abs(outputs))))
    if max_abs < 1e-12:
        max_abs = 1.0

    return {
        'time': t.tolist(),
        'input': inputs.tolist(),
        'output': outputs.tolist(),
        'max_abs': max_abs,
    }
