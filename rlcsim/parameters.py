"""
Circuit parameter snapshots and normalization.

A CircuitParameters object is the immutable input to every engine call.
normalize() turns it into EffectiveParameters: component values clamped to
safe minimums, with the optional parasitic elements folded in.

    R_eff = max(R + ESR_C + ESR_L, 1e-6)
    L_eff = max(L + ESL_C, 1e-12)
    C_eff = C

Nothing here raises. Bad values degrade to the floors instead.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

# Floors (Ohm, H, F) applied before any division
MIN_RESISTANCE = 1e-6
MIN_INDUCTANCE = 1e-12
MIN_CAPACITANCE = 1e-12


class Topology(str, Enum):
    SERIES = "series"
    PARALLEL = "parallel"


class SignalType(str, Enum):
    SINE = "sine"
    SQUARE = "square"
    STEP = "step"
    IMPULSE = "impulse"


class FilterPreset(str, Enum):
    LOW_PASS = "lpf"
    HIGH_PASS = "hpf"
    BAND_PASS = "bpf"
    NOTCH = "notch"


_PRESET_ALIASES = {
    'lowpass': FilterPreset.LOW_PASS,
    'low_pass': FilterPreset.LOW_PASS,
    'highpass': FilterPreset.HIGH_PASS,
    'high_pass': FilterPreset.HIGH_PASS,
    'bandpass': FilterPreset.BAND_PASS,
    'band_pass': FilterPreset.BAND_PASS,
    'bandstop': FilterPreset.NOTCH,
    'band_stop': FilterPreset.NOTCH,
}


def _coerce(enum_cls, value, default, aliases=None):
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower() if value is not None else ''
    for member in enum_cls:
        if member.value == key or member.name.lower() == key:
            return member
    if aliases and key in aliases:
        return aliases[key]
    logger.debug("Unknown %s %r, falling back to %s", enum_cls.__name__, value, default.value)
    return default


def coerce_topology(value) -> Topology:
    """Resolve a topology name; anything unrecognized is series."""
    return _coerce(Topology, value, Topology.SERIES)


def coerce_signal_type(value) -> SignalType:
    """Resolve a signal type name; anything unrecognized is sine."""
    return _coerce(SignalType, value, SignalType.SINE)


def coerce_preset(value) -> FilterPreset:
    """Resolve a filter preset name; anything unrecognized is low-pass."""
    return _coerce(FilterPreset, value, FilterPreset.LOW_PASS, _PRESET_ALIASES)


def _clamp(value, floor: float) -> float:
    """Clamp to floor, treating NaN/inf and non-numbers as the floor."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return floor
    if not math.isfinite(value) or value < floor:
        return floor
    return value


def _non_negative(value) -> float:
    return _clamp(value, 0.0)


@dataclass(frozen=True)
class Parasitics:
    """Equivalent series elements of the real capacitor and inductor."""
    esr_capacitor: float = 0.1     # Ohm
    esl_capacitor: float = 10e-9   # H
    esr_inductor: float = 0.5      # Ohm


@dataclass(frozen=True)
class CircuitParameters:
    """
    Immutable snapshot of everything the engine needs for one evaluation.

    Values are SI (Ohm, H, F, Hz, V). Enum fields accept plain strings and
    fall back to their default member when the string is unrecognized.
    """
    resistance: float = 100.0
    inductance: float = 10e-3
    capacitance: float = 10e-6
    topology: Topology = Topology.SERIES
    source_frequency: float = 1000.0
    source_amplitude: float = 10.0
    signal_type: SignalType = SignalType.SINE
    active_preset: FilterPreset = FilterPreset.LOW_PASS
    use_parasitics: bool = False
    parasitics: Parasitics = field(default_factory=Parasitics)

    def __post_init__(self):
        object.__setattr__(self, 'topology', coerce_topology(self.topology))
        object.__setattr__(self, 'signal_type', coerce_signal_type(self.signal_type))
        object.__setattr__(self, 'active_preset', coerce_preset(self.active_preset))
        if isinstance(self.parasitics, dict):
            object.__setattr__(self, 'parasitics', Parasitics(**self.parasitics))
        elif self.parasitics is None:
            object.__setattr__(self, 'parasitics', Parasitics())


@dataclass(frozen=True)
class EffectiveParameters:
    """Clamped R, L, C actually used by the solvers."""
    resistance: float
    inductance: float
    capacitance: float


def normalize(params: CircuitParameters) -> EffectiveParameters:
    """
    Clamp component values and fold in parasitics when enabled.

    Args:
        params: The circuit snapshot.

    Returns:
        EffectiveParameters with every value at or above its floor.
    """
    R = _clamp(params.resistance, MIN_RESISTANCE)
    L = _clamp(params.inductance, MIN_INDUCTANCE)
    C = _clamp(params.capacitance, MIN_CAPACITANCE)

    if params.use_parasitics:
        p = params.parasitics
        R = _clamp(R + _non_negative(p.esr_capacitor) + _non_negative(p.esr_inductor), MIN_RESISTANCE)
        L = _clamp(L + _non_negative(p.esl_capacitor), MIN_INDUCTANCE)

    return EffectiveParameters(resistance=R, inductance=L, capacitance=C)
