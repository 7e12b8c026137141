"""Analysis routes — readouts, Bode, Nyquist, waveforms, spectrum, phasors."""

from dataclasses import asdict

from fastapi import APIRouter

from rlcsim_api.models import (
    AnalyzeResponse,
    BodeRequest,
    BodeResponse,
    CircuitRequest,
    EffectiveModel,
    NyquistRequest,
    NyquistResponse,
    PhasorModel,
    PhasorRequest,
    PhasorResponse,
    PresetModel,
    ResonanceModel,
    SpectrumRequest,
    SpectrumResponse,
    SteadyStateModel,
    WaveformRequest,
    WaveformResponse,
)
from rlcsim.analysis import analyze
from rlcsim.parameters import FilterPreset
from rlcsim.phasor import phasor_state
from rlcsim.presets import preset_values
from rlcsim.sweep import decades_for_zoom, frequency_sweep, nyquist_scale, nyquist_sweep, spectrum
from rlcsim.waveforms import sample_waveform, waveform

router = APIRouter()


@router.get("/presets", response_model=list[PresetModel])
async def list_presets():
    """Component values loaded by each filter preset."""
    presets = []
    for preset in FilterPreset:
        values = preset_values(preset)
        presets.append(PresetModel(
            name=preset.value,
            resistance=values['resistance'],
            inductance=values['inductance'],
            capacitance=values['capacitance'],
            topology=values['topology'].value,
        ))
    return presets


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_endpoint(request: CircuitRequest):
    """f0, Q, bandwidth, impedance, phase and gain for one circuit."""
    params = request.circuit.to_parameters()
    result = analyze(params)

    return AnalyzeResponse(
        effective=EffectiveModel(**asdict(result.effective)),
        resonance=ResonanceModel(**asdict(result.resonance)),
        steady_state=SteadyStateModel(**asdict(result.steady_state)),
        status=result.status.value,
        topology=params.topology.value,
        active_preset=params.active_preset.value,
    )


@router.post("/bode", response_model=BodeResponse)
async def bode_endpoint(request: BodeRequest):
    """Preset-shaped magnitude and phase around f0."""
    params = request.circuit.to_parameters()
    result = analyze(params)
    decades = decades_for_zoom(request.zoom)

    sweep = frequency_sweep(
        result.resonance.f0,
        result.resonance.q,
        params.active_preset,
        decades=decades,
        num_points=request.num_points,
    )
    return BodeResponse(**sweep, f0=result.resonance.f0, decades=decades)


@router.post("/nyquist", response_model=NyquistResponse)
async def nyquist_endpoint(request: NyquistRequest):
    """Series impedance locus from 10 Hz to 100 kHz with plot scale."""
    result = analyze(request.circuit.to_parameters())
    locus = nyquist_sweep(result.effective, num_points=request.num_points)
    scale = nyquist_scale(locus['max_magnitude'], request.half_extent, request.zoom)
    return NyquistResponse(**locus, scale=scale)


@router.post("/waveform", response_model=WaveformResponse)
async def waveform_endpoint(request: WaveformRequest):
    """Sampled input and output curves for the selected signal."""
    params = request.circuit.to_parameters()
    result = analyze(params)
    wave = waveform(
        result.effective,
        params.signal_type,
        params.source_amplitude,
        params.source_frequency,
    )
    samples = sample_waveform(wave, params.source_frequency, request.zoom, request.num_points)
    return WaveformResponse(**samples, signal_type=params.signal_type.value)


@router.post("/spectrum", response_model=SpectrumResponse)
async def spectrum_endpoint(request: SpectrumRequest):
    """Excitation spectrum shaped by the preset transfer function."""
    params = request.circuit.to_parameters()
    result = analyze(params)
    data = spectrum(
        params.signal_type,
        params.source_frequency,
        result.resonance.f0,
        result.resonance.q,
        params.active_preset,
        zoom=request.zoom,
        bins=request.bins,
    )
    return SpectrumResponse(**data)


@router.post("/phasor", response_model=PhasorResponse)
async def phasor_endpoint(request: PhasorRequest):
    """V, I, VR, VL and VC phasors at animation time t."""
    params = request.circuit.to_parameters()
    result = analyze(params)
    state = phasor_state(request.t, result.effective, params.source_frequency, params.source_amplitude)

    def _model(p):
        return PhasorModel(magnitude=p.magnitude, angle=p.angle)

    return PhasorResponse(
        source=_model(state.source),
        current=_model(state.current),
        resistor=_model(state.resistor),
        inductor=_model(state.inductor),
        capacitor=_model(state.capacitor),
        impedance_angle=state.impedance_angle,
    )
