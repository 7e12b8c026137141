"""
Rotating phasors of the series RLC loop.

The caller advances t (seconds of animation time); this module only maps
a time to a set of phasors. With angular_rate = 2.4 rad/s the diagram
turns at the same speed as a 0.04 rad step per frame at 60 fps.
"""

from dataclasses import dataclass

import numpy as np

from rlcsim.parameters import EffectiveParameters
from rlcsim.waveforms import MIN_SIGNAL_FREQUENCY

DEFAULT_ANGULAR_RATE = 2.4  # rad/s


@dataclass(frozen=True)
class Phasor:
    magnitude: float
    angle: float  # radians

    @property
    def real(self) -> float:
        return self.magnitude * np.cos(self.angle)

    @property
    def imag(self) -> float:
        return self.magnitude * np.sin(self.angle)


@dataclass(frozen=True)
class PhasorState:
    source: Phasor
    current: Phasor
    resistor: Phasor
    inductor: Phasor
    capacitor: Phasor
    impedance_angle: float  # φ, radians


def phasor_state(
    t: float,
    effective: EffectiveParameters,
    frequency: float,
    amplitude: float,
    angular_rate: float = DEFAULT_ANGULAR_RATE,
) -> PhasorState:
    """
    Phasors for V, I, VR, VL and VC at animation time t.

    The current and VR lag the source by φ; VL leads the current by 90°
    and VC lags it by 90°.
    """
    R = effective.resistance
    omega = 2 * np.pi * max(frequency, MIN_SIGNAL_FREQUENCY)
    XL = omega * effective.inductance
    XC = 1.0 / (omega * effective.capacitance)
    Z = np.hypot(R, XL - XC)
    phi = float(np.arctan2(XL - XC, R))

    current = amplitude / Z
    angle = angular_rate * t
    lagged = angle - phi

    return PhasorState(
        source=Phasor(float(amplitude), float(angle)),
        current=Phasor(float(current), float(lagged)),
        resistor=Phasor(float(R * current), float(lagged)),
        inductor=Phasor(float(XL * current), float(lagged + np.pi / 2)),
        capacitor=Phasor(float(XC * current), float(lagged - np.pi / 2)),
        impedance_angle=phi,
    )
