""" Membrane potential recordings from a finished simulation. """

from hhnet.errors import OutOfRange
import csv
import io
import numpy as np

__all__ = ('Results',)

class Results:
    """ Time axis and the voltage trajectory of every neuron. """
    def __init__(self, time_axis, neurons, units:str="ms"):
        """
        Argument neurons is a sequence of neurons which have finished running.
                Their order determines the order of the columns.
        """
        self.time_axis = np.array(time_axis, dtype=float)
        self.units     = str(units)
        neurons = list(neurons)
        for neuron in neurons:
            if len(neuron.voltage) != len(self.time_axis):
                raise OutOfRange(f"Results: {neuron!r} has {len(neuron.voltage)} time points "
                                 f"but the time axis has {len(self.time_axis)}")
        if neurons:
            self.voltages = np.column_stack([neuron.voltage for neuron in neurons])
        else:
            self.voltages = np.empty((len(self.time_axis), 0))

    def __len__(self):
        """ Returns the number of time points. """
        return len(self.time_axis)

    def get_neuron_count(self) -> int:
        return self.voltages.shape[1]

    def get_voltage(self, neuron:int) -> np.ndarray:
        """ Returns the voltage trajectory of the given neuron. """
        return self.voltages[:, neuron]

    def write_csv(self, file, header:bool=False):
        """ Write one row per time point: the time followed by each neuron's voltage.

        Argument file is a writable text file object.
        """
        writer = csv.writer(file, lineterminator='\n')
        if header:
            writer.writerow(['time'] + [f'neuron_{i}' for i in range(self.get_neuron_count())])
        for t, row in zip(self.time_axis, self.voltages):
            writer.writerow([repr(float(t))] + [repr(float(v)) for v in row])

    def to_csv(self, header:bool=False) -> str:
        buffer = io.StringIO()
        self.write_csv(buffer, header=header)
        return buffer.getvalue()

    def spike_times(self, threshold:float=20.0) -> [np.ndarray]:
        """ Detect action potentials.

        Returns a list with an array for each neuron, containing the times at
        which its voltage rose to or above the threshold.
        """
        over = self.voltages >= float(threshold)
        was_over = np.zeros_like(over)
        was_over[1:] = over[:-1]
        onsets = over & ~was_over
        return [self.time_axis[onsets[:, i]] for i in range(self.get_neuron_count())]
