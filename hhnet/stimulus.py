""" Current injection protocols. """

from hhnet.errors import OutOfRange
import numpy as np

__all__ = ('RectangularPulse',)

class RectangularPulse:
    """ Constant current injected between a start and a stop time, inclusive. """
    def __init__(self, amplitude:float, start:float, stop:float):
        self.amplitude = float(amplitude)
        self.start     = float(start)
        self.stop      = float(stop)
        if self.stop < self.start:
            raise ValueError(f"Pulse stops ({self.stop}) before it starts ({self.start})")

    @classmethod
    def reference(cls) -> 'RectangularPulse':
        """ Amplitude 10 from 5 ms to 30 ms. """
        return cls(10.0, 5.0, 30.0)

    def __repr__(self):
        return f"RectangularPulse({self.amplitude:g}, {self.start:g}, {self.stop:g})"

    def mask(self, time_axis) -> np.ndarray:
        time_axis = np.asarray(time_axis)
        return (time_axis >= self.start) & (time_axis <= self.stop)

    def apply(self, time_axis, stimulus) -> 'self':
        """ Add this pulse into a stimulus trajectory, in-place. """
        if len(time_axis) != len(stimulus):
            raise OutOfRange(f"{self!r}: the time axis has {len(time_axis)} points "
                             f"but the stimulus has {len(stimulus)}")
        stimulus[self.mask(time_axis)] += self.amplitude
        return self
