from hhnet.kinetics import *
from pytest import approx
import math
import numpy as np
import pytest

def test_poles():
    assert alpha_n(10) == 0.1
    assert alpha_n(10.0) == 0.1
    assert alpha_n(np.float64(10)) == 0.1
    assert alpha_m(25) == 1.0
    assert alpha_m(25.0) == 1.0
    # Continuous through the poles.
    assert alpha_n(10 + 1e-6) == approx(0.1, rel=1e-6)
    assert alpha_n(10 - 1e-6) == approx(0.1, rel=1e-6)
    assert alpha_m(25 + 1e-6) == approx(1.0, rel=1e-6)
    assert alpha_m(25 - 1e-6) == approx(1.0, rel=1e-6)

@pytest.mark.parametrize('v', [-80.0, -12.0, 0.0, 3.3, 20.0, 60.0, 115.0])
def test_rate_equations(v):
    assert alpha_n(v) == approx(0.01 * (10 - v) / (math.exp((10 - v) / 10) - 1))
    assert beta_n(v)  == approx(0.125 * math.exp(-v / 80))
    assert alpha_m(v) == approx(0.1 * (25 - v) / (math.exp((25 - v) / 10) - 1))
    assert beta_m(v)  == approx(4 * math.exp(-v / 18))
    assert alpha_h(v) == approx(0.07 * math.exp(-v / 20))
    assert beta_h(v)  == approx(1 / (math.exp((30 - v) / 10) + 1))
    assert n_infinity(v) == approx(alpha_n(v) / (alpha_n(v) + beta_n(v)))
    assert m_infinity(v) == approx(alpha_m(v) / (alpha_m(v) + beta_m(v)))
    assert h_infinity(v) == approx(alpha_h(v) / (alpha_h(v) + beta_h(v)))

def test_steady_state_range():
    for v in np.linspace(-100, 150, 251):
        for f in (m_infinity, n_infinity, h_infinity):
            x = f(v)
            assert 0.0 < x < 1.0, (f, v, x)

def test_resting_state():
    assert m_infinity(0) == approx(0.0529, abs=1e-4)
    assert n_infinity(0) == approx(0.3177, abs=1e-4)
    assert h_infinity(0) == approx(0.5961, abs=1e-4)
