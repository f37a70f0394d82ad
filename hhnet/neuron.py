""" Single compartment Hodgkin-Huxley neuron. """

from hhnet.errors import InvalidTimeStep, OutOfRange, UninitializedState
from hhnet.kinetics import (alpha_m, beta_m, m_infinity,
                            alpha_h, beta_h, h_infinity,
                            alpha_n, beta_n, n_infinity)
from hhnet.parameters import NeuronParameters
import logging
import numpy as np

__all__ = ('Neuron',)

logger = logging.getLogger(__name__)

class Neuron:
    """ State and history of one neuron.

    The neuron owns its voltage and stimulus trajectories, which are indexed
    by time step. Index zero holds the initial condition and the step cursor
    starts at one.
    """
    def __init__(self, time_step, index=None):
        """
        Argument time_step is the integration time step, in milliseconds.

        Argument index is this neuron's position in the network, used only
                for error messages and logging. Optional.
        """
        self.time_step  = float(time_step)
        self.index      = index
        if not self.time_step > 0:
            raise InvalidTimeStep(f"{self}: time step must be positive, got {time_step}")
        self.parameters = None
        self.voltage    = None
        self.stimulus   = None
        self.m = self.n = self.h = None
        self.sodium_conductance     = 0.0
        self.potassium_conductance  = 0.0
        self.current_step           = 0
        self._range_warned          = False

    def __repr__(self):
        if self.index is None:
            return "<Neuron>"
        return f"<Neuron {self.index}>"

    def is_initialized(self) -> bool:
        return self.voltage is not None

    def initialize(self, parameters: NeuronParameters, axis_length: int) -> 'self':
        """ Allocate the trajectories and put the gates at their resting state.

        Argument axis_length is the number of points on the time axis.
        """
        if parameters is None:
            parameters = NeuronParameters.defaults()
        assert isinstance(parameters, NeuronParameters)
        axis_length = int(axis_length)
        if axis_length < 1:
            raise OutOfRange(f"{self}: trajectories need at least one time point, got {axis_length}")
        self.parameters = parameters
        self.voltage    = np.zeros(axis_length)
        self.stimulus   = np.zeros(axis_length)
        self.voltage[0] = parameters.rest_voltage
        v = self.voltage[0]
        self.m = m_infinity(v)
        self.n = n_infinity(v)
        self.h = h_infinity(v)
        self.sodium_conductance     = 0.0
        self.potassium_conductance  = 0.0
        self.current_step           = 1
        self._range_warned          = False
        return self

    def previous_voltage(self) -> float:
        self._check_cursor()
        return self.voltage[self.current_step - 1]

    def advance(self, previous_voltage, injected_stimulus):
        """ Integrate this neuron forward by one time step.

        Both the gates and the membrane potential take a single explicit
        Euler step. Every rate constant is evaluated at previous_voltage, so
        the three gates are updated simultaneously.
        """
        self._check_cursor()
        p  = self.parameters
        dt = self.time_step
        v  = float(previous_voltage)
        # Conductances use the gates from the start of this step.
        self.sodium_conductance    = p.sodium_conductance * self.h * self.m ** 3
        self.potassium_conductance = p.potassium_conductance * self.n ** 4
        m, n, h = self.m, self.n, self.h
        self.m = m + dt * (alpha_m(v) * (1 - m) - beta_m(v) * m)
        self.n = n + dt * (alpha_n(v) * (1 - n) - beta_n(v) * n)
        self.h = h + dt * (alpha_h(v) * (1 - h) - beta_h(v) * h)
        current = (injected_stimulus
                - self.sodium_conductance    * (v - p.sodium_reversal)
                - self.potassium_conductance * (v - p.potassium_reversal)
                - p.leak_conductance         * (v - p.leak_reversal))
        self.voltage[self.current_step] = v + dt * current / p.capacitance
        self._check_gates()
        self.current_step += 1

    def _check_cursor(self):
        if not self.is_initialized():
            raise UninitializedState(f"{self} was advanced before it was initialized")
        if self.current_step >= len(self.voltage):
            raise OutOfRange(f"{self}: step {self.current_step} is past the end "
                             f"of its {len(self.voltage)} point trajectory")

    def _check_gates(self):
        """ Gates are not clamped, but leaving [0, 1] means dt is too large. """
        if self._range_warned:
            return
        if all(0.0 <= x <= 1.0 for x in (self.m, self.n, self.h)):
            return
        self._range_warned = True
        logger.warning("%r: gating variables left [0, 1] at step %d (m=%g, n=%g, h=%g), "
                "the time step %g ms is probably too large.",
                self, self.current_step, self.m, self.n, self.h, self.time_step)
