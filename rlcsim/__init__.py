"""
rlcsim Circuit Analysis Engine

Closed-form analysis of series and parallel RLC circuits: resonance,
quality factor, impedance, preset-shaped gain and phase, time-domain
responses and frequency sweeps.

All math is analytic and deterministic. No numerical integration.
"""

__version__ = "0.1.0"

from rlcsim.parameters import (
    CircuitParameters,
    EffectiveParameters,
    FilterPreset,
    Parasitics,
    SignalType,
    Topology,
    normalize,
)
from rlcsim.resonance import (
    ResonanceResult,
    ResonanceStatus,
    SteadyStateResult,
    bode_phase,
    damping,
    gain_db,
    impedance_at,
    resonance,
    resonance_status,
    steady_state,
    transfer_magnitude,
)
from rlcsim.waveforms import Waveform, waveform, sample_waveform
from rlcsim.sweep import frequency_sweep, nyquist_sweep, nyquist_scale, spectrum, decades_for_zoom
from rlcsim.phasor import PhasorState, phasor_state
from rlcsim.analysis import AnalysisResult, analyze
from rlcsim.presets import apply_preset, preset_values
from rlcsim.export import export_csv, export_json, load_json, export_netlist, export_report
