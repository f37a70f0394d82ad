""" The simulation's time axis and main loop. """

from collections.abc import Callable
from hhnet.errors import InvalidTimeStep, OutOfRange, UninitializedState
import logging
import numpy as np

__all__ = ('CallbackHook', 'SimulationClock')

logger = logging.getLogger(__name__)

class CallbackHook:
    """ This class aggregates and manages callbacks. """
    def __init__(self):
        self._callbacks = []

    def __len__(self):
        return len(self._callbacks)

    def register(self, function: 'f() -> bool'):
        """ Append a callback to this hook.

        Callbacks are removed if they return True. They are guaranteed to always
        be called in the same relative order that they were registered in.
        """
        assert isinstance(function, Callable)
        self._callbacks.append(function)

    def __call__(self):
        """ Call all registered callbacks and remove any that return true. """
        any_removed = False
        for idx, callback in enumerate(self._callbacks):
            remove = callback()
            if remove:
                self._callbacks[idx] = None
                any_removed = True
        if any_removed:
            self._callbacks = [x for x in self._callbacks if x is not None]

class SimulationClock:
    """ Discretized time axis, and the loop which steps the network along it. """
    def __init__(self, total_time:float, time_step:float, units:str="ms"):
        """
        Argument total_time is the duration of the simulation.

        Argument time_step is the duration of each tick.

        Argument units is the physical units of time. Optional.
        """
        self.units = str(units)
        self._callbacks = CallbackHook()
        self.build(total_time, time_step)

    def build(self, total_time:float, time_step:float) -> 'self':
        """ Construct the time axis: 0, dt, 2*dt, ... while t < total_time + dt.

        The time values are accumulated by repeated addition, so the axis can
        hold one more point than the closed interval [0, total_time] would,
        when rounding leaves the last value just below total_time + dt.
        """
        total_time = float(total_time)
        time_step  = float(time_step)
        if not time_step > 0:
            raise InvalidTimeStep(f"SimulationClock: time step must be positive, got {time_step}")
        if not total_time > 0:
            raise InvalidTimeStep(f"SimulationClock: total time must be positive, got {total_time}")
        if not np.isfinite(time_step):
            raise InvalidTimeStep(f"SimulationClock: time step must be finite, got {time_step}")
        if not np.isfinite(total_time):
            raise InvalidTimeStep(f"SimulationClock: total time must be finite, got {total_time}")
        self.total_time = total_time
        self.dt = self.time_step = time_step
        time_axis = []
        stop = total_time + time_step
        t = 0.0
        while t < stop:
            time_axis.append(t)
            t += time_step
        self.time_axis = np.array(time_axis)
        self.ticks = 0
        logger.info("Time axis: %d points from 0 to %g %s, step %g %s",
                len(self.time_axis), self.time_axis[-1], self.units, self.dt, self.units)
        return self

    def __len__(self):
        """ Returns the number of points on the time axis. """
        return len(self.time_axis)

    def get_time(self) -> float:
        """ Returns the current time. """
        return self.time_axis[self.ticks]

    def get_ticks(self) -> int:
        """ Returns the number of completed steps. """
        return self.ticks

    def __call__(self) -> float:
        """ Returns the current time. """
        return self.get_time()

    def get_units(self) -> str:
        """ Returns the physical units of time used by this clock. """
        return self.units

    def register_callback(self, function: 'f() -> bool'):
        """
        Argument function will be called immediately after every completed step.

        Callbacks are removed if they return True. They are guaranteed to always
        be called in the same relative order that they were registered in.
        """
        self._callbacks.register(function)

    def run(self, neurons, coupling=None):
        """ Advance every neuron from the first step to the end of the time axis.

        At each step the synaptic coupling is applied first, and then every
        neuron is advanced using its own voltage from the previous step.

        All of the neurons, including those registered with the coupling, are
        checked before anything is modified.
        """
        neurons = list(neurons)
        num_points = len(self.time_axis)
        if self.ticks + 1 >= num_points:
            raise OutOfRange(f"SimulationClock: already at the end of the time axis, "
                             f"step {self.ticks} of {num_points - 1}")
        checked = list(neurons)
        if coupling is not None:
            checked.extend(coupling.neurons)
        for neuron in checked:
            if not neuron.is_initialized():
                raise UninitializedState(f"SimulationClock: {neuron!r} is not initialized")
            if len(neuron.voltage) != num_points:
                raise OutOfRange(f"SimulationClock: {neuron!r} has {len(neuron.voltage)} "
                                 f"time points but the time axis has {num_points}")
            if neuron.current_step != self.ticks + 1:
                raise OutOfRange(f"SimulationClock: {neuron!r} is at step {neuron.current_step}, "
                                 f"expected step {self.ticks + 1}")
        logger.info("Simulating %d neurons for %d steps", len(neurons), num_points - 1 - self.ticks)
        for step in range(self.ticks + 1, num_points):
            if coupling is not None:
                coupling.propagate(step)
            for neuron in neurons:
                neuron.advance(neuron.voltage[step - 1], neuron.stimulus[step])
            self.ticks = step
            self._callbacks()
        logger.info("Simulation finished at %g %s", self.get_time(), self.units)
