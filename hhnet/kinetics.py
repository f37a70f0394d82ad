""" Hodgkin-Huxley gating kinetics.

Voltage dependent rate constants for the sodium activation (m), sodium
inactivation (h) and potassium activation (n) gates. All voltages are in
millivolts relative to the resting potential, so rest is zero.

These are pure scalar functions, compiled with numba.
"""

import math
import numba

__all__ = (
    'alpha_n', 'beta_n', 'n_infinity',
    'alpha_m', 'beta_m', 'm_infinity',
    'alpha_h', 'beta_h', 'h_infinity',
)

@numba.njit
def alpha_n(v):
    if v == 10:
        return 0.1 # Limit of the expression at its pole.
    return 0.01 * (10 - v) / (math.exp((10 - v) / 10) - 1)

@numba.njit
def beta_n(v):
    return 0.125 * math.exp(-v / 80)

@numba.njit
def n_infinity(v):
    """ Steady state potassium activation. """
    a = alpha_n(v)
    return a / (a + beta_n(v))

@numba.njit
def alpha_m(v):
    if v == 25:
        return 1.0 # Limit of the expression at its pole.
    return 0.1 * (25 - v) / (math.exp((25 - v) / 10) - 1)

@numba.njit
def beta_m(v):
    return 4 * math.exp(-v / 18)

@numba.njit
def m_infinity(v):
    """ Steady state sodium activation. """
    a = alpha_m(v)
    return a / (a + beta_m(v))

@numba.njit
def alpha_h(v):
    return 0.07 * math.exp(-v / 20)

@numba.njit
def beta_h(v):
    return 1 / (math.exp((30 - v) / 10) + 1)

@numba.njit
def h_infinity(v):
    """ Steady state sodium inactivation. """
    a = alpha_h(v)
    return a / (a + beta_h(v))
