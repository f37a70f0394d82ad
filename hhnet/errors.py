""" Exceptions raised by the simulator.

All of these are configuration or programming errors. None of them are
transient, so they should never be retried.
"""

__all__ = (
    'SimulationError',
    'InvalidTimeStep',
    'UninitializedState',
    'OutOfRange',
    'UnknownNeuron',
)

class SimulationError(Exception):
    """ Base class for all errors raised by hhnet. """

class InvalidTimeStep(SimulationError, ValueError):
    """ The time step or the total simulation time is not positive. """

class UninitializedState(SimulationError, RuntimeError):
    """ A neuron was used before its trajectories were allocated. """

class OutOfRange(SimulationError, IndexError):
    """ A step cursor moved past the end of a trajectory. """

class UnknownNeuron(SimulationError, LookupError):
    """ A neuron index which is not in the registry. """
