""" Hodgkin-Huxley neurons and small networks of them.

Simulates the membrane potential of conductance based neurons, optionally
coupled through weighted synaptic connections, using first order explicit
time steps. Potentials are in millivolts relative to rest, times are in
milliseconds.
"""

from hhnet.clock import SimulationClock
from hhnet.errors import (SimulationError, InvalidTimeStep, UninitializedState,
                          OutOfRange, UnknownNeuron)
from hhnet.model import Model
from hhnet.neuron import Neuron
from hhnet.parameters import Parameters, NeuronParameters
from hhnet.results import Results
from hhnet.stimulus import RectangularPulse
from hhnet.synapses import SynapticCoupling

__all__ = (
    'Model', 'Neuron', 'NeuronParameters', 'Parameters', 'RectangularPulse',
    'Results', 'SimulationClock', 'SynapticCoupling',
    'SimulationError', 'InvalidTimeStep', 'UninitializedState', 'OutOfRange',
    'UnknownNeuron',
)
