"""One evaluation pass: normalize → resonance → steady state."""

import logging
from dataclasses import dataclass

from rlcsim.parameters import CircuitParameters, EffectiveParameters, normalize
from rlcsim.resonance import (
    ResonanceResult,
    ResonanceStatus,
    SteadyStateResult,
    resonance,
    resonance_status,
    steady_state,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    parameters: CircuitParameters
    effective: EffectiveParameters
    resonance: ResonanceResult
    steady_state: SteadyStateResult
    status: ResonanceStatus


def analyze(params: CircuitParameters) -> AnalysisResult:
    """Run the readout pipeline for a snapshot. Never raises."""
    effective = normalize(params)
    res = resonance(effective, params.topology)
    ss = steady_state(
        effective,
        params.topology,
        res,
        params.source_frequency,
        params.active_preset,
    )
    status = resonance_status(params.source_frequency, res.f0)

    logger.debug(
        "analyze: topology=%s f0=%.6g Hz Q=%.6g BW=%.6g Hz |Z|=%.6g gain=%.3f dB",
        params.topology.value, res.f0, res.q, res.bandwidth,
        ss.impedance_magnitude, ss.gain_db,
    )

    return AnalysisResult(
        parameters=params,
        effective=effective,
        resonance=res,
        steady_state=ss,
        status=status,
    )
