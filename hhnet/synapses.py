""" Weighted synaptic coupling between neurons. """

from hhnet.errors import OutOfRange, UninitializedState, UnknownNeuron
from hhnet.neuron import Neuron
import logging
import numpy as np
import scipy.sparse

__all__ = ('SynapticCoupling',)

logger = logging.getLogger(__name__)

class SynapticCoupling:
    """ Directed weighted graph over the neurons of a network.

    At every time step each source neuron's voltage from the previous step,
    multiplied by the connection weight, is added to the stimulus of its
    destination neurons. Self connections are ignored.
    """
    def __init__(self, neurons):
        """
        Argument neurons is the registry of neurons, a list which is indexed
                by neuron number. It is shared with its owner, not copied.
        """
        self.neurons  = neurons
        self._weights = {}
        self._matrix  = None

    def __len__(self):
        """ Returns the number of connections which affect the simulation. """
        return self.get_matrix().nnz

    def index_of(self, neuron) -> int:
        """ Resolve a neuron or a neuron number into an index into the registry. """
        if isinstance(neuron, Neuron):
            for index, x in enumerate(self.neurons):
                if x is neuron:
                    return index
            raise UnknownNeuron(f"SynapticCoupling: {neuron!r} is not registered")
        if isinstance(neuron, (int, np.integer)) and not isinstance(neuron, bool):
            if 0 <= neuron < len(self.neurons):
                return int(neuron)
        raise UnknownNeuron(f"SynapticCoupling: no neuron {neuron!r} "
                            f"among the {len(self.neurons)} registered")

    def set_weight(self, source, destination, weight):
        """ Record the weight of the connection from source to destination.

        This overwrites any prior weight for the same ordered pair. A weight of
        zero disconnects the pair.
        """
        src    = self.index_of(source)
        dst    = self.index_of(destination)
        weight = float(weight)
        self._weights[(src, dst)] = weight
        self._matrix = None
        if src == dst:
            logger.debug("Ignoring self connection on neuron %d", src)
        else:
            logger.debug("Synapse %d -> %d, weight %g", src, dst, weight)

    def get_weight(self, source, destination) -> float:
        src = self.index_of(source)
        dst = self.index_of(destination)
        return self._weights.get((src, dst), 0.0)

    def connections(self) -> [(int, int, float)]:
        """ Returns all recorded (source, destination, weight) triples. """
        return [(src, dst, w) for (src, dst), w in self._weights.items()]

    def get_matrix(self) -> scipy.sparse.csr_matrix:
        """ Returns the weights as a sparse matrix, indexed by [source, destination].

        Self connections and zero weights are omitted.
        """
        num = len(self.neurons)
        if self._matrix is None or self._matrix.shape != (num, num):
            src = []; dst = []; coef = []
            for (s, d), w in self._weights.items():
                if s == d or w == 0.0:
                    continue
                if s >= num or d >= num:
                    raise UnknownNeuron(f"SynapticCoupling: connection {s} -> {d} "
                                        f"refers to a neuron which is no longer registered")
                src.append(s)
                dst.append(d)
                coef.append(w)
            self._matrix = scipy.sparse.csr_matrix(
                    (np.array(coef, dtype=float), (np.array(src, dtype=int), np.array(dst, dtype=int))),
                    shape=(num, num))
        return self._matrix

    def propagate(self, step):
        """ Inject synaptic input for the given step into the destination neurons.

        This reads the sources' voltages at step - 1 and must be called before
        any neuron is advanced to the given step.
        """
        matrix = self.get_matrix()
        if matrix.nnz == 0:
            return
        step = int(step)
        previous = np.empty(len(self.neurons))
        for index, neuron in enumerate(self.neurons):
            if not neuron.is_initialized():
                raise UninitializedState(f"SynapticCoupling: {neuron!r} is not initialized")
            if not 1 <= step < len(neuron.stimulus):
                raise OutOfRange(f"SynapticCoupling: step {step} is outside of "
                                 f"{neuron!r}'s {len(neuron.stimulus)} point trajectory")
            previous[index] = neuron.voltage[step - 1]
        incoming = matrix.T.dot(previous)
        for dst in np.unique(matrix.indices):
            self.neurons[dst].stimulus[step] += incoming[dst]
