"""
Tests for the time-domain synthesizer.

Validates:
1. Step response in all three damping regimes, including continuity
   across ζ = 1 and the critical-damping closed form
2. Step boundary values: 0 at t = 0, amplitude as t → ∞
3. Impulse response (underdamped and the zero-output heavy-damping case)
4. Sine and square steady-state outputs
5. Sampling window and y-scale reference
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from rlcsim.parameters import EffectiveParameters, SignalType
from rlcsim.resonance import damping, resonance
from rlcsim.waveforms import (
    impulse_response,
    sample_waveform,
    sine_waveform,
    square_waveform,
    step_response,
    waveform,
)

L = 10e-3
C = 10e-6
AMP = 10.0

# R giving ζ = 1 for L = 10 mH, C = 10 µF
R_CRITICAL = 2 * np.sqrt(L / C)


def _circuit(R):
    return EffectiveParameters(resistance=R, inductance=L, capacitance=C)


def _with_zeta(zeta):
    return _circuit(zeta * R_CRITICAL)


class TestStepResponse:
    """Test the three damping regimes."""

    @pytest.mark.parametrize('R', [10.0, R_CRITICAL, 100.0])
    def test_starts_at_zero(self, R):
        wave = step_response(_circuit(R), AMP)
        assert wave.output(0.0) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize('R', [10.0, R_CRITICAL, 100.0])
    def test_settles_to_amplitude(self, R):
        wave = step_response(_circuit(R), AMP)
        assert wave.output(1.0) == pytest.approx(AMP, rel=1e-9)

    @pytest.mark.parametrize('R', [10.0, R_CRITICAL, 100.0])
    def test_zero_before_step(self, R):
        wave = step_response(_circuit(R), AMP)
        assert wave.input(-1e-3) == 0.0
        assert wave.output(-1e-3) == 0.0
        assert wave.input(0.0) == AMP

    def test_critical_closed_form(self):
        """At ζ = 1 the output is A·(1 − e^(−αt)(1 + αt)), not NaN."""
        eff = _with_zeta(1.0)
        _, alpha, zeta = damping(eff)
        assert zeta == pytest.approx(1.0, abs=1e-12)

        wave = step_response(eff, AMP)
        for t in (1e-5, 1e-4, 1e-3, 1e-2):
            expected = AMP * (1 - np.exp(-alpha * t) * (1 + alpha * t))
            value = wave.output(t)
            assert np.isfinite(value)
            assert value == pytest.approx(expected, rel=1e-12)

    def test_critical_band(self):
        """ζ within 1e-4 of 1 uses the critical form."""
        for zeta in (0.99995, 1.00005):
            eff = _with_zeta(zeta)
            _, alpha, _ = damping(eff)
            t = 1e-3
            expected = AMP * (1 - np.exp(-alpha * t) * (1 + alpha * t))
            assert step_response(eff, AMP).output(t) == pytest.approx(expected, rel=1e-12)

    def test_continuous_across_critical_damping(self):
        """Output varies continuously as ζ sweeps 0.999 → 1.000 → 1.001."""
        for t in (2e-4, 1e-3, 3e-3):
            under = step_response(_with_zeta(0.999), AMP).output(t)
            critical = step_response(_with_zeta(1.0), AMP).output(t)
            over = step_response(_with_zeta(1.001), AMP).output(t)
            assert abs(under - critical) < 1e-2 * AMP
            assert abs(over - critical) < 1e-2 * AMP

    def test_continuous_at_band_edges(self):
        """Just inside and just outside the critical band agree closely."""
        t = 1e-3
        inside_low = step_response(_with_zeta(0.99991), AMP).output(t)
        outside_low = step_response(_with_zeta(0.99989), AMP).output(t)
        inside_high = step_response(_with_zeta(1.00009), AMP).output(t)
        outside_high = step_response(_with_zeta(1.00011), AMP).output(t)
        assert inside_low == pytest.approx(outside_low, abs=1e-3 * AMP)
        assert inside_high == pytest.approx(outside_high, abs=1e-3 * AMP)

    def test_overdamped_scenario(self):
        """R = 100 Ω (ζ ≈ 1.581): monotonic rise strictly between 0 and A."""
        eff = _circuit(100.0)
        _, _, zeta = damping(eff)
        assert zeta == pytest.approx(1.5811, rel=1e-4)

        wave = step_response(eff, AMP)
        value = wave.output(0.001)
        assert 0.0 < value < AMP

        t = np.linspace(1e-5, 5e-3, 200)
        y = wave.output(t)
        assert np.all(np.diff(y) > 0)
        assert np.all((y > 0) & (y < AMP))

    def test_underdamped_overshoots(self):
        """ζ ≈ 0.16 rings above the final value."""
        wave = step_response(_circuit(10.0), AMP)
        t = np.linspace(0, 5e-3, 2000)
        assert np.max(wave.output(t)) > AMP

    def test_overdamped_large_alpha_stable(self):
        """α ≫ ω0 does not lose the slow pole to cancellation."""
        eff = EffectiveParameters(resistance=1e6, inductance=1e-3, capacitance=1e-6)
        wave = step_response(eff, AMP)
        slow_pole = -1.0 / (eff.resistance * eff.capacitance)
        for t in (0.1, 1.0, 3.0):
            expected = AMP * (1 - np.exp(slow_pole * t))
            assert wave.output(t) == pytest.approx(expected, rel=1e-6)

    def test_huge_resistance(self):
        """α past 1e154 (R = 1e160): the output stays finite and at 0."""
        eff = EffectiveParameters(resistance=1e160, inductance=1e-3, capacitance=1e-6)
        wave = step_response(eff, AMP)
        t = np.array([0.0, 1e-6, 1e-3, 1.0])
        y = wave.output(t)
        assert np.all(np.isfinite(y))
        assert np.allclose(y, 0.0, atol=1e-9)
        assert np.isfinite(wave.output(1e-3))

    def test_vectorized(self):
        wave = step_response(_circuit(10.0), AMP)
        t = np.array([-1.0, 0.0, 1e-3, 1.0])
        y = wave.output(t)
        assert isinstance(y, np.ndarray)
        assert y.shape == (4,)
        assert y[0] == 0.0
        for ti, yi in zip(t, y):
            assert wave.output(float(ti)) == pytest.approx(yi)
        assert isinstance(wave.output(1e-3), float)


class TestImpulseResponse:

    def test_heavily_damped_is_zero(self):
        """α ≥ ω0 gives an identically zero output."""
        wave = impulse_response(_circuit(100.0), AMP)
        t = np.linspace(-1e-3, 1e-1, 500)
        assert np.all(wave.output(t) == 0.0)
        assert wave.output(1e-3) == 0.0

    def test_underdamped(self):
        eff = _circuit(10.0)
        omega0, alpha, _ = damping(eff)
        omega_d = np.sqrt(omega0 ** 2 - alpha ** 2)
        wave = impulse_response(eff, AMP)

        assert wave.output(0.0) == 0.0
        assert wave.output(-1e-3) == 0.0
        t = 2e-4
        expected = AMP / (L * omega_d) * np.exp(-alpha * t) * np.sin(omega_d * t)
        assert wave.output(t) == pytest.approx(expected, rel=1e-12)

    def test_decays(self):
        wave = impulse_response(_circuit(10.0), AMP)
        t = np.linspace(0, 2e-3, 400)
        peak = np.max(np.abs(wave.output(t)))
        assert abs(wave.output(0.05)) < 1e-6 * peak

    def test_huge_resistance_is_zero(self):
        eff = EffectiveParameters(resistance=1e160, inductance=1e-3, capacitance=1e-6)
        assert impulse_response(eff, AMP).output(1e-3) == 0.0

    def test_huge_resistance_sine(self):
        eff = EffectiveParameters(resistance=1e160, inductance=1e-3, capacitance=1e-6)
        wave = sine_waveform(eff, AMP, 1000.0)
        assert wave.output(0.25e-3) == pytest.approx(AMP)

    def test_input_is_zero(self):
        wave = impulse_response(_circuit(10.0), AMP)
        assert wave.input(0.0) == 0.0
        assert wave.input(1e-3) == 0.0


class TestSineWaveform:

    def test_output_matches_input_at_resonance(self):
        """At f0 the resistor divider is 1 with no phase shift."""
        eff = _circuit(100.0)
        f0 = resonance(eff).f0
        wave = sine_waveform(eff, AMP, f0)
        for t in np.linspace(0, 2 / f0, 17):
            assert wave.output(t) == pytest.approx(wave.input(t), abs=1e-9)

    def test_divider_amplitude(self):
        """At 1 kHz the output amplitude is A·R/|Z|."""
        eff = _circuit(100.0)
        wave = sine_waveform(eff, AMP, 1000.0)
        t = np.linspace(0, 1e-3, 10001)
        assert np.max(wave.output(t)) == pytest.approx(AMP * 100.0 / 110.4588, rel=1e-4)
        assert np.max(wave.input(t)) == pytest.approx(AMP, rel=1e-6)

    def test_frequency_floor(self):
        eff = _circuit(100.0)
        assert sine_waveform(eff, AMP, 0.0).input(0.1) == sine_waveform(eff, AMP, 1.0).input(0.1)


class TestSquareWaveform:

    def test_input_quarter_period(self):
        """Five odd harmonics at T/4 sum to 1 − 1/3 + 1/5 − 1/7 + 1/9."""
        f = 1000.0
        wave = square_waveform(_circuit(100.0), AMP, f)
        expected = AMP * (1 - 1 / 3 + 1 / 5 - 1 / 7 + 1 / 9)
        assert wave.input(1 / (4 * f)) == pytest.approx(expected, rel=1e-9)

    def test_input_odd_symmetry(self):
        wave = square_waveform(_circuit(100.0), AMP, 1000.0)
        assert wave.input(0.0) == pytest.approx(0.0, abs=1e-12)
        assert wave.input(0.75e-3) == pytest.approx(-wave.input(0.25e-3))

    def test_output_bounded(self):
        wave = square_waveform(_circuit(100.0), AMP, 1000.0)
        t = np.linspace(0, 3e-3, 3001)
        y = wave.output(t)
        bound = AMP * (1 + 1 / 3 + 1 / 5 + 1 / 7 + 1 / 9)
        assert np.all(np.isfinite(y))
        assert np.max(np.abs(y)) <= bound

    def test_output_attenuated_off_resonance(self):
        """Far from f0 every harmonic is attenuated."""
        wave = square_waveform(_circuit(1.0), AMP, 50_000.0)
        t = np.linspace(0, 6e-5, 2001)
        assert np.max(np.abs(wave.output(t))) < 0.01 * AMP


class TestDispatch:

    def test_signal_types(self):
        eff = _circuit(10.0)
        assert waveform(eff, SignalType.STEP, AMP, 1000.0).input(1.0) == AMP
        assert waveform(eff, 'impulse', AMP, 1000.0).input(1.0) == 0.0
        sq = waveform(eff, 'square', AMP, 1000.0)
        assert sq.input(0.25e-3) == square_waveform(eff, AMP, 1000.0).input(0.25e-3)

    def test_unknown_signal_is_sine(self):
        eff = _circuit(10.0)
        wave = waveform(eff, 'triangle', AMP, 1000.0)
        assert wave.input(0.25e-3) == pytest.approx(AMP)

    def test_finite_for_clamped_extremes(self):
        """No NaN for t ≥ 0 across a grid of clamped component values."""
        t = np.array([0.0, 1e-9, 1e-6, 1e-3, 1.0, 100.0])
        for R in (1e-6, 1.0, 100.0, 1e6, 1e160):
            for Lx in (1e-12, 1e-6, 1e-3, 1.0):
                for Cx in (1e-12, 1e-9, 1e-6, 1e-3):
                    eff = EffectiveParameters(resistance=R, inductance=Lx, capacitance=Cx)
                    for signal in SignalType:
                        wave = waveform(eff, signal, AMP, 1000.0)
                        assert np.all(np.isfinite(wave.input(t)))
                        assert np.all(np.isfinite(wave.output(t)))


class TestSampleWaveform:

    def test_window(self):
        wave = sine_waveform(_circuit(100.0), AMP, 1000.0)
        samples = sample_waveform(wave, 1000.0, zoom=1.0, num_points=600)
        assert len(samples['time']) == 601
        assert len(samples['input']) == 601
        assert len(samples['output']) == 601
        assert samples['time'][0] == 0.0
        assert samples['time'][-1] == pytest.approx(3e-3)

    def test_zoom_narrows_window(self):
        wave = sine_waveform(_circuit(100.0), AMP, 1000.0)
        samples = sample_waveform(wave, 1000.0, zoom=2.0)
        assert samples['time'][-1] == pytest.approx(1.5e-3)

    def test_max_abs(self):
        wave = step_response(_circuit(10.0), AMP)
        samples = sample_waveform(wave, 1000.0)
        assert samples['max_abs'] == pytest.approx(max(np.max(np.abs(samples['input'])), np.max(np.abs(samples['output']))))

    def test_flat_waveform_scale_defaults_to_one(self):
        wave = impulse_response(_circuit(100.0), AMP)
        assert sample_waveform(wave, 1000.0)['max_abs'] == 1.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
