"""Pydantic models for rlcsim API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rlcsim.parameters import CircuitParameters, Parasitics
from rlcsim.units import parse_quantity


# --- Circuit input ---

class ParasiticsModel(BaseModel):
    """Equivalent series elements of the real components."""
    model_config = ConfigDict(allow_inf_nan=False)

    esr_capacitor: float = Field(0.1, description="Capacitor ESR (Ohms)")
    esl_capacitor: float = Field(10e-9, description="Capacitor ESL (H)")
    esr_inductor: float = Field(0.5, description="Inductor winding resistance (Ohms)")


class CircuitModel(BaseModel):
    """
    Circuit snapshot in SI units.

    Topology, signal type and preset are plain strings; unrecognized
    values fall back to series / sine / lpf in the engine.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    resistance: float = Field(100.0, description="Resistance (Ohms)")
    inductance: float = Field(10e-3, description="Inductance (H)")
    capacitance: float = Field(10e-6, description="Capacitance (F)")
    topology: str = Field("series", description="series or parallel")
    source_frequency: float = Field(1000.0, description="Source frequency (Hz)")
    source_amplitude: float = Field(10.0, description="Source amplitude (V)")
    signal_type: str = Field("sine", description="sine, square, step or impulse")
    active_preset: str = Field("lpf", description="lpf, hpf, bpf or notch")
    use_parasitics: bool = False
    parasitics: ParasiticsModel = ParasiticsModel()

    @field_validator("resistance", "inductance", "capacitance", "source_frequency", "source_amplitude", mode="before")
    @classmethod
    def _parse_units(cls, value):
        """Accept "10 mH"-style strings as well as plain SI numbers."""
        if isinstance(value, str):
            return parse_quantity(value)
        return value

    def to_parameters(self) -> CircuitParameters:
        data = self.model_dump()
        data['parasitics'] = Parasitics(**data['parasitics'])
        return CircuitParameters(**data)


class CircuitRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    circuit: CircuitModel = CircuitModel()


class ViewRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    circuit: CircuitModel = CircuitModel()
    zoom: float = Field(1.0, gt=0, description="Zoom factor, clamped to [0.25, 16]")


class BodeRequest(ViewRequest):
    num_points: int = Field(301, ge=2, le=5000)


class NyquistRequest(CircuitRequest):
    num_points: int = Field(301, ge=2, le=5000)
    half_extent: float = Field(200.0, gt=0, description="Half-size of the plot area (px)")
    zoom: float = Field(1.0, gt=0)


class WaveformRequest(ViewRequest):
    num_points: int = Field(600, ge=2, le=10000)


class SpectrumRequest(ViewRequest):
    bins: int = Field(256, ge=1, le=8192)


class PhasorRequest(CircuitRequest):
    t: float = Field(0.0, description="Animation time (s)")


class ImportRequest(BaseModel):
    content: str = Field(..., min_length=2, max_length=100_000)


# --- Responses ---

class EffectiveModel(BaseModel):
    resistance: float
    inductance: float
    capacitance: float


class ResonanceModel(BaseModel):
    f0: float
    q: float
    bandwidth: float


class SteadyStateModel(BaseModel):
    frequency: float
    impedance_magnitude: float
    phase_degrees: float
    gain_db: float


class AnalyzeResponse(BaseModel):
    effective: EffectiveModel
    resonance: ResonanceModel
    steady_state: SteadyStateModel
    status: str
    topology: str
    active_preset: str


class BodeResponse(BaseModel):
    frequencies: list[float]
    magnitude_db: list[float]
    phase_deg: list[float]
    num_points: int
    f0: float
    decades: float


class NyquistResponse(BaseModel):
    frequencies: list[float]
    real: list[float]
    imag: list[float]
    max_magnitude: float
    resonance_point: tuple[float, float]
    scale: float


class WaveformResponse(BaseModel):
    time: list[float]
    input: list[float]
    output: list[float]
    max_abs: float
    signal_type: str


class SpectrumResponse(BaseModel):
    frequencies: list[float]
    magnitude: list[float]
    sample_rate: float


class PhasorModel(BaseModel):
    magnitude: float
    angle: float


class PhasorResponse(BaseModel):
    source: PhasorModel
    current: PhasorModel
    resistor: PhasorModel
    inductor: PhasorModel
    capacitor: PhasorModel
    impedance_angle: float


class PresetModel(BaseModel):
    name: str
    resistance: float
    inductance: float
    capacitance: float
    topology: str
