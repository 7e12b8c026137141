"""
Export of analysis results in tabular (CSV), structured (JSON),
netlist (SPICE) and plain-text report form.

The JSON snapshot is also an import format: load_json() rebuilds the
CircuitParameters it was written from, so re-running the engine on the
loaded snapshot gives bit-identical results.
"""

import csv
import io
import json
import math
from dataclasses import asdict
from datetime import date as date_cls, datetime, timezone
from typing import Dict, List, Optional

from rlcsim import __version__
from rlcsim.analysis import analyze
from rlcsim.parameters import CircuitParameters, Parasitics, Topology
from rlcsim.resonance import bode_phase, gain_db, impedance_at
from rlcsim.units import engineering_notation, format_frequency, format_impedance

SNAPSHOT_FORMAT = 'rlcsim-snapshot'

# Response table: f = 10^(1 + 0.04·i), i = 0..100 → 10 Hz … 100 kHz
_TABLE_POINTS = 101
_TABLE_LOG_START = 1.0
_TABLE_LOG_STEP = 0.04

_NUMERIC_FIELDS = ('resistance', 'inductance', 'capacitance', 'source_frequency', 'source_amplitude')


def response_table(params: CircuitParameters) -> List[Dict]:
    """
    Frequency, gain, phase and impedance over 10 Hz – 100 kHz.

    Gain and phase follow the active preset; the impedance column uses
    the circuit's own topology.
    """
    result = analyze(params)
    f0 = result.resonance.f0
    q = result.resonance.q

    rows = []
    for i in range(_TABLE_POINTS):
        f = 10 ** (_TABLE_LOG_START + i * _TABLE_LOG_STEP)
        u = f / f0
        z_mag, _ = impedance_at(result.effective, params.topology, f)
        rows.append({
            'frequency': f,
            'magnitude_db': gain_db(u, q, params.active_preset),
            'phase_deg': bode_phase(u, q),
            'impedance': z_mag,
        })
    return rows


def export_csv(params: CircuitParameters) -> str:
    """Export the response table as a CSV string."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')

    writer.writerow(['Frequency (Hz)', 'Magnitude (dB)', 'Phase (deg)', 'Impedance (Ohm)'])

    for row in response_table(params):
        writer.writerow([
            f"{row['frequency']:.2f}",
            f"{row['magnitude_db']:.4f}",
            f"{row['phase_deg']:.4f}",
            f"{row['impedance']:.4f}",
        ])

    return output.getvalue()


def snapshot(params: CircuitParameters) -> Dict:
    """Plain-dict form of a parameter snapshot (enums as their values)."""
    data = asdict(params)
    data['topology'] = params.topology.value
    data['signal_type'] = params.signal_type.value
    data['active_preset'] = params.active_preset.value
    return data


def export_json(params: CircuitParameters, timestamp: Optional[str] = None) -> str:
    """Export parameters, effective values and resonance results as JSON."""
    result = analyze(params)

    export_data = {
        'format': SNAPSHOT_FORMAT,
        'version': __version__,
        'timestamp': timestamp or datetime.now(timezone.utc).isoformat(),
        'parameters': snapshot(params),
        'effective': asdict(result.effective),
        'results': {
            'f0': result.resonance.f0,
            'q': result.resonance.q,
            'bandwidth': result.resonance.bandwidth,
            'impedance_magnitude': result.steady_state.impedance_magnitude,
            'phase_degrees': result.steady_state.phase_degrees,
            'gain_db': result.steady_state.gain_db,
        },
    }
    return json.dumps(export_data, indent=2)


def load_json(content: str) -> CircuitParameters:
    """
    Rebuild a CircuitParameters from an export_json() document.

    Unknown keys are ignored; missing keys take their defaults.

    Raises:
        ValueError: if the content is not JSON, has no parameters object,
            or a field has the wrong type.
    """
    try:
        data = json.loads(content)
    except (TypeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid snapshot JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('parameters'), dict):
        raise ValueError("Snapshot must contain a 'parameters' object")

    raw = data['parameters']
    fields = CircuitParameters.__dataclass_fields__
    kwargs = {k: v for k, v in raw.items() if k in fields and k != 'parasitics'}
    for key in _NUMERIC_FIELDS:
        if key in kwargs:
            kwargs[key] = _number(kwargs[key], key)
    if 'use_parasitics' in kwargs and not isinstance(kwargs['use_parasitics'], bool):
        raise ValueError(f"Snapshot field 'use_parasitics' must be true or false, got {kwargs['use_parasitics']!r}")

    parasitics = raw.get('parasitics')
    if isinstance(parasitics, dict):
        p_fields = Parasitics.__dataclass_fields__
        kwargs['parasitics'] = Parasitics(**{
            k: _number(v, f'parasitics.{k}') for k, v in parasitics.items() if k in p_fields
        })

    return CircuitParameters(**kwargs)


def _number(value, name: str) -> float:
    # bool is an int subclass but never a valid component value
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"Snapshot field '{name}' must be a finite number, got {value!r}")
    return value


def export_netlist(params: CircuitParameters, date: Optional[date_cls] = None) -> str:
    """SPICE netlist of the circuit with AC and transient analysis cards."""
    date = date or date_cls.today()
    amp = params.source_amplitude
    freq = params.source_frequency

    lines = [
        '* RLC circuit',
        f'* Generated by rlcsim {__version__} on {date.isoformat()}',
        '',
        f'V1 N001 0 AC {amp} SINE(0 {amp} {freq})',
    ]

    if params.topology == Topology.PARALLEL:
        lines += [
            f'L1 N001 0 {params.inductance}',
            f'C1 N001 0 {params.capacitance}',
            f'R1 N001 0 {params.resistance}',
        ]
    else:
        lines += [
            f'R1 N001 N002 {params.resistance}',
            f'L1 N002 N003 {params.inductance}',
            f'C1 N003 0 {params.capacitance}',
        ]

    lines += [
        '',
        '.ac dec 100 1 100k',
        '.tran 0 10m 0 1u',
        '.backanno',
        '.end',
    ]
    return '\n'.join(lines) + '\n'


def export_report(params: CircuitParameters) -> str:
    """Human-readable summary of parameters, results and equations."""
    result = analyze(params)
    res = result.resonance
    ss = result.steady_state
    eff = result.effective

    q_equation = 'Q = R*sqrt(C/L)' if params.topology == Topology.PARALLEL else 'Q = (1/R)*sqrt(L/C)'

    lines = [
        'RLC Circuit Analysis',
        '',
        'Parameters:',
        f'  Topology: {params.topology.value}',
        f'  R = {engineering_notation(params.resistance, "Ω")}  |  '
        f'L = {engineering_notation(params.inductance, "H")}  |  '
        f'C = {engineering_notation(params.capacitance, "F")}',
        f'  Source: {format_frequency(params.source_frequency)}, '
        f'{engineering_notation(params.source_amplitude, "V")}, {params.signal_type.value}',
        f'  Preset: {params.active_preset.value}',
    ]

    if params.use_parasitics:
        lines.append(
            f'  Effective: R = {engineering_notation(eff.resistance, "Ω")}  |  '
            f'L = {engineering_notation(eff.inductance, "H")}'
        )

    lines += [
        '',
        'Results:',
        f'  f0 = {format_frequency(res.f0)}  |  Q = {res.q:.3f}  |  BW = {format_frequency(res.bandwidth)}',
        f'  |Z| = {format_impedance(ss.impedance_magnitude)}  |  '
        f'phase = {ss.phase_degrees:.1f}°  |  gain = {ss.gain_db:.1f} dB',
        f'  Status: {result.status.value}',
        '',
        'Equations:',
        '  Z = R + j(wL - 1/wC)',
        '  f0 = 1/(2*pi*sqrt(L*C))',
        f'  {q_equation}',
        '  BW = f0/Q',
    ]
    return '\n'.join(lines) + '\n'
