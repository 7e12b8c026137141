"""
Starting component values for each filter preset.

Selecting a preset both switches the gain shape and loads a circuit that
shows it off. Values in SI units.
"""

from dataclasses import replace
from typing import Dict

from rlcsim.parameters import CircuitParameters, FilterPreset, Topology, coerce_preset

PRESET_VALUES = {
    FilterPreset.LOW_PASS: {'resistance': 100.0, 'inductance': 10e-3, 'capacitance': 10e-6, 'topology': Topology.SERIES},
    FilterPreset.HIGH_PASS: {'resistance': 100.0, 'inductance': 1e-3, 'capacitance': 10e-6, 'topology': Topology.SERIES},
    FilterPreset.BAND_PASS: {'resistance': 50.0, 'inductance': 10e-3, 'capacitance': 10e-6, 'topology': Topology.SERIES},
    FilterPreset.NOTCH: {'resistance': 100.0, 'inductance': 10e-3, 'capacitance': 10e-6, 'topology': Topology.PARALLEL},
}


def preset_values(preset) -> Dict:
    """Component values and topology for a preset (unknown → low-pass)."""
    return dict(PRESET_VALUES[coerce_preset(preset)])


def apply_preset(params: CircuitParameters, preset) -> CircuitParameters:
    """Return a copy of params with the preset's circuit loaded and selected."""
    preset = coerce_preset(preset)
    return replace(params, active_preset=preset, **PRESET_VALUES[preset])
