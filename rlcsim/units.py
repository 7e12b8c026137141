"""
SI prefix handling for component values.

to_si() turns a value typed with a prefixed unit (e.g. 10 mH, 4.7 µF,
2.2 kΩ) into the base SI unit the engine works in. engineering_notation()
goes the other way for readouts and reports.
"""

import math
import re

# SI prefix table
_SI_PREFIXES = [
    (1e-15, 'f'),
    (1e-12, 'p'),
    (1e-9,  'n'),
    (1e-6,  'µ'),
    (1e-3,  'm'),
    (1e0,   ''),
    (1e3,   'k'),
    (1e6,   'M'),
    (1e9,   'G'),
]

_PREFIX_FACTORS = {prefix: scale for scale, prefix in _SI_PREFIXES}
_PREFIX_FACTORS['u'] = 1e-6
_PREFIX_FACTORS['μ'] = 1e-6  # Greek mu, distinct code point from micro sign

# Base units understood by to_si, with accepted spellings
_BASE_UNITS = {
    'Ω': 'Ω', 'ohm': 'Ω', 'Ohm': 'Ω', 'R': 'Ω',
    'H': 'H',
    'F': 'F',
    'Hz': 'Hz',
    'V': 'V',
    's': 's',
}


def to_si(value: float, unit: str) -> float:
    """
    Convert a prefixed value to SI.

    Examples:
        to_si(10, 'mH')   → 0.01
        to_si(4.7, 'uF')  → 4.7e-06
        to_si(2.2, 'kΩ')  → 2200.0
        to_si(100, 'Ω')   → 100.0

    Raises:
        ValueError: if the unit is not recognized.
    """
    unit = (unit or '').strip()
    if unit in _BASE_UNITS:
        return float(value)

    for base in sorted(_BASE_UNITS, key=len, reverse=True):
        if unit.endswith(base):
            prefix = unit[:-len(base)]
            if prefix in _PREFIX_FACTORS:
                return float(value) * _PREFIX_FACTORS[prefix]

    raise ValueError(f"Unknown unit '{unit}'")


_QUANTITY_RE = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(\S*)\s*$')


def parse_quantity(text: str) -> float:
    """
    Parse '10 mH', '4.7uF', '2.2kΩ' or a bare number into SI.

    Raises:
        ValueError: if the text is not a number with an optional unit.
    """
    match = _QUANTITY_RE.match(text or '')
    if not match:
        raise ValueError(f"Cannot parse quantity '{text}'")
    number, unit = match.groups()
    if not unit:
        return float(number)
    return to_si(float(number), unit)


def engineering_notation(value: float, unit: str = '', precision: int = 3) -> str:
    """
    Format a value in engineering notation with SI prefix.

    Examples:
        engineering_notation(1000, 'Ω')     → '1kΩ'
        engineering_notation(0.0001, 'F')    → '100µF'
        engineering_notation(0.01, 'H')      → '10mH'
        engineering_notation(503.29, 'Hz')   → '503Hz'
    """
    if value == 0:
        return f"0{unit}"
    if not math.isfinite(value):
        return f"{value}{unit}"

    abs_value = abs(value)
    sign = '-' if value < 0 else ''

    prefixes = list(reversed(_SI_PREFIXES))
    for i, (scale, prefix) in enumerate(prefixes):
        if abs_value >= scale:
            scaled = abs_value / scale
            # Round first so 999.9995 does not print as 1e+03
            rounded = float(f"{scaled:.{precision}g}")
            if rounded >= 1000 and i > 0:
                # Rounding carried into the next prefix: 999.9999 Hz → 1 kHz
                prefix = prefixes[i - 1][1]
                rounded = float(f"{rounded / 1000:.{precision}g}")
            if rounded == int(rounded):
                return f"{sign}{int(rounded)}{prefix}{unit}"
            return f"{sign}{rounded:.{precision}g}{prefix}{unit}"

    return f"{value:.{precision}g}{unit}"


def format_frequency(f: float) -> str:
    return engineering_notation(f, 'Hz', precision=4)


def format_impedance(z: float) -> str:
    return engineering_notation(z, 'Ω', precision=4)
