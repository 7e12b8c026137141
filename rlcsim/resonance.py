"""
Steady-state solver for the second-order RLC resonator.

    f0 = 1 / (2π·√(L·C))
    Q  = (1/R)·√(L/C)      series
    Q  = R·√(C/L)          parallel
    BW = f0 / Q

Gain is evaluated on the normalized frequency u = f/f0 with the shared
second-order denominator

    D(u) = √((1 − u²)² + (u/Q)²)

and a numerator chosen by the filter preset:

    low-pass   1
    high-pass  u²
    band-pass  u/Q
    notch      |1 − u²|

Functions taking u accept scalars or numpy arrays.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from rlcsim.parameters import (
    EffectiveParameters,
    FilterPreset,
    Topology,
    coerce_preset,
    coerce_topology,
)

# Impedance is evaluated no lower than this (Hz)
MIN_IMPEDANCE_FREQUENCY = 0.01

# |H| floor before taking the log → -200 dB
MIN_TRANSFER = 1e-10

# Keeps u/Q and 1/u finite
_MIN_Q = 1e-12
_MIN_U = 1e-12

# |f − f0| / f0 below this counts as resonant
RESONANCE_TOLERANCE = 0.05


@dataclass(frozen=True)
class ResonanceResult:
    f0: float
    q: float
    bandwidth: float


@dataclass(frozen=True)
class SteadyStateResult:
    frequency: float
    impedance_magnitude: float
    phase_degrees: float
    gain_db: float


class ResonanceStatus(str, Enum):
    RESONANT = "resonant"
    BELOW = "below"    # capacitive side
    ABOVE = "above"    # inductive side


def resonance(effective: EffectiveParameters, topology=Topology.SERIES) -> ResonanceResult:
    """Resonance frequency, topology-dependent Q and bandwidth."""
    R = effective.resistance
    L = effective.inductance
    C = effective.capacitance

    f0 = 1.0 / (2 * np.pi * np.sqrt(L * C))

    if coerce_topology(topology) == Topology.PARALLEL:
        q = R * np.sqrt(C / L)
    else:
        q = (1.0 / R) * np.sqrt(L / C)

    return ResonanceResult(f0=float(f0), q=float(q), bandwidth=float(f0 / q))


def damping(effective: EffectiveParameters) -> Tuple[float, float, float]:
    """
    Natural frequency, decay rate and damping ratio of the series loop.

    Returns (omega0, alpha, zeta) with omega0 = 1/√(LC), alpha = R/(2L)
    and zeta = alpha/omega0.
    """
    omega0 = 1.0 / np.sqrt(effective.inductance * effective.capacitance)
    alpha = effective.resistance / (2 * effective.inductance)
    return float(omega0), float(alpha), float(alpha / omega0)


def impedance_at(
    effective: EffectiveParameters,
    topology,
    frequency: float,
) -> Tuple[float, float]:
    """
    Impedance magnitude (Ohm) and phase (degrees) at one frequency.

    The parallel case works in admittances; its phase is the negated
    admittance angle.
    """
    R = effective.resistance
    omega = 2 * np.pi * max(frequency, MIN_IMPEDANCE_FREQUENCY)
    XL = omega * effective.inductance
    XC = 1.0 / (omega * effective.capacitance)

    if coerce_topology(topology) == Topology.PARALLEL:
        Y_R = 1.0 / R
        Y_L = 1.0 / XL
        Y_C = 1.0 / XC
        Y_mag = np.hypot(Y_R, Y_C - Y_L)
        magnitude = 1.0 / Y_mag
        phase = -np.degrees(np.arctan2(Y_C - Y_L, Y_R))
    else:
        # finite for R beyond 1e154, where R ** 2 overflows
        magnitude = np.hypot(R, XL - XC)
        phase = np.degrees(np.arctan2(XL - XC, R))

    return float(magnitude), float(phase)


def _as_output(value):
    return float(value) if np.ndim(value) == 0 else value


def transfer_magnitude(u, q: float, preset=FilterPreset.LOW_PASS):
    """|H(u)| for the selected preset shape (linear, unfloored)."""
    u = np.asarray(u, dtype=float)
    q = max(q, _MIN_Q)
    denom = np.sqrt((1 - u ** 2) ** 2 + (u / q) ** 2)

    preset = coerce_preset(preset)
    if preset == FilterPreset.HIGH_PASS:
        numerator = u ** 2
    elif preset == FilterPreset.BAND_PASS:
        numerator = u / q
    elif preset == FilterPreset.NOTCH:
        numerator = np.abs(1 - u ** 2)
    else:
        numerator = np.ones_like(u)

    # (1 − u²)² and (u/Q)² never vanish together, so denom > 0
    return _as_output(numerator / denom)


def gain_db(u, q: float, preset=FilterPreset.LOW_PASS):
    """Preset gain in dB, floored at 20·log10(1e-10) = -200 dB."""
    H = np.maximum(transfer_magnitude(u, q, preset), MIN_TRANSFER)
    return _as_output(20 * np.log10(H))


def bode_phase(u, q: float):
    """
    Phase in degrees: -atan2(Q·(u − 1/u), 1).

    Same curve for every preset; this is the band-pass phase.
    """
    u = np.maximum(np.asarray(u, dtype=float), _MIN_U)
    q = max(q, _MIN_Q)
    return _as_output(-np.degrees(np.arctan2(q * (u - 1.0 / u), 1.0)))


def steady_state(
    effective: EffectiveParameters,
    topology,
    result: ResonanceResult,
    frequency: float,
    preset=FilterPreset.LOW_PASS,
) -> SteadyStateResult:
    """Impedance, impedance phase and preset gain at the source frequency."""
    magnitude, phase = impedance_at(effective, topology, frequency)
    u = frequency / result.f0 if result.f0 > 0 else 0.0
    return SteadyStateResult(
        frequency=float(frequency),
        impedance_magnitude=magnitude,
        phase_degrees=phase,
        gain_db=gain_db(u, result.q, preset),
    )


def resonance_status(frequency: float, f0: float) -> ResonanceStatus:
    """Where the source frequency sits relative to f0."""
    if f0 <= 0:
        return ResonanceStatus.ABOVE
    if abs(frequency - f0) / f0 < RESONANCE_TOLERANCE:
        return ResonanceStatus.RESONANT
    if frequency < f0:
        return ResonanceStatus.BELOW
    return ResonanceStatus.ABOVE
