from collections.abc import Mapping, Sequence
from hhnet.clock import SimulationClock
from hhnet.errors import UnknownNeuron
from hhnet.neuron import Neuron
from hhnet.parameters import Parameters, NeuronParameters, DEFAULT_PARAMETERS
from hhnet.results import Results
from hhnet.stimulus import RectangularPulse
from hhnet.synapses import SynapticCoupling
from numbers import Number
import json
import logging

__all__ = ('Model', 'read_parameters')

logger = logging.getLogger(__name__)

class Model:
    """ A network of Hodgkin-Huxley neurons, ready to simulate. """
    def __init__(self, simulation={}, *, neurons={}, stimuli=(), synapses=()):
        """
        Argument simulation is a dictionary with the keys "total_time" and
                "time_step", both in milliseconds.

        Argument neurons is a dictionary with the keys:
                "count" the number of neurons,
                "parameters" the membrane parameters shared by all neurons,
                "overrides" maps neuron numbers to parameters for that neuron.

        Argument stimuli is a list of rectangular current pulses. Each is a
                dictionary with the keys "neuron", "amplitude", "start" and
                "stop". Missing values are taken from the reference pulse.

        Argument synapses is a list of (source, destination, weight) triples.

        Missing values are filled in from hhnet.parameters.DEFAULT_PARAMETERS.
        """
        self.parameters = Parameters({
                'simulation':   simulation,
                'neurons':      neurons,
                'stimuli':      stimuli,
                'synapses':     synapses,
        }).update_with_defaults(DEFAULT_PARAMETERS)
        simulation = self.parameters['simulation']
        _check_keys('simulation', simulation, DEFAULT_PARAMETERS['simulation'])
        self.clock    = SimulationClock(
                _check_number('simulation', 'total_time', simulation['total_time']),
                _check_number('simulation', 'time_step',  simulation['time_step']))
        self.neurons  = []
        self.synapses = SynapticCoupling(self.neurons)
        self._make_neurons(self.parameters['neurons'])
        for pulse in _check_list('stimuli', self.parameters['stimuli']):
            self._add_stimulus(pulse)
        for synapse in _check_list('synapses', self.parameters['synapses']):
            self._add_synapse(synapse)

    @classmethod
    def load(cls, filename) -> 'Model':
        """ Make a model from a JSON file, see Model.__init__ for its contents. """
        return cls(**read_parameters(filename))

    def _make_neurons(self, parameters):
        _check_keys('neurons', parameters, DEFAULT_PARAMETERS['neurons'])
        count = parameters['count']
        if not isinstance(count, int) or count < 0:
            raise ValueError(f"Neuron count must be a non-negative integer, got {count!r}")
        shared = NeuronParameters.from_dict(parameters['parameters'])
        overrides = {}
        for index, changes in parameters['overrides'].items():
            try:
                index = int(index)
            except ValueError:
                raise UnknownNeuron(f"Model: bad neuron number {index!r} in overrides") from None
            if not 0 <= index < count:
                raise UnknownNeuron(f"Model: overrides refer to neuron {index}, "
                                    f"but there are only {count} neurons")
            if not isinstance(changes, Mapping):
                raise ValueError(f"Expected the overrides for neuron {index} to be a dictionary, "
                                 f"got {changes!r}")
            overrides[index] = shared.replace(**changes)
        for index in range(count):
            neuron = Neuron(self.clock.time_step, index=index)
            neuron.initialize(overrides.get(index, shared), len(self.clock))
            self.neurons.append(neuron)

    def _add_stimulus(self, pulse):
        if not isinstance(pulse, Mapping):
            raise ValueError(f"Expected each stimulus to be a dictionary, got {pulse!r}")
        reference = RectangularPulse.reference()
        _check_keys('stimulus', pulse, ('neuron', 'amplitude', 'start', 'stop'))
        if 'neuron' not in pulse:
            raise ValueError(f"Stimulus is missing its target neuron: {pulse!r}")
        neuron = self.get_neuron(pulse['neuron'])
        pulse = RectangularPulse(
                _check_number('stimulus', 'amplitude', pulse.get('amplitude', reference.amplitude)),
                _check_number('stimulus', 'start',     pulse.get('start',     reference.start)),
                _check_number('stimulus', 'stop',      pulse.get('stop',      reference.stop)))
        pulse.apply(self.clock.time_axis, neuron.stimulus)
        logger.info("Stimulus %r on %r", pulse, neuron)

    def _add_synapse(self, synapse):
        if not isinstance(synapse, Sequence) or isinstance(synapse, str) or len(synapse) != 3:
            raise ValueError(f"Expected a synapse (source, destination, weight), got {synapse!r}")
        source, destination, weight = synapse
        self.synapses.set_weight(source, destination, _check_number('synapse', 'weight', weight))

    def __len__(self):
        """ Returns the number of neurons in the Model. """
        return len(self.neurons)

    def get_parameters(self) -> Parameters:
        return self.parameters

    def get_clock(self) -> SimulationClock:
        return self.clock

    def get_synapses(self) -> SynapticCoupling:
        return self.synapses

    def get_neuron(self, index) -> Neuron:
        return self.neurons[self.synapses.index_of(index)]

    def run(self) -> Results:
        """ Run the whole simulation and return the recorded voltages. """
        self.clock.run(self.neurons, self.synapses)
        return Results(self.clock.time_axis, self.neurons, units=self.clock.get_units())

def _check_keys(section, parameters, allowed):
    if not isinstance(parameters, Mapping):
        raise ValueError(f"Expected the {section} parameters to be a dictionary, got {parameters!r}")
    unknown = set(parameters) - set(allowed)
    if unknown:
        raise ValueError(f"Unrecognized {section} parameters: {', '.join(sorted(unknown))}")

def _check_list(section, parameters) -> list:
    if not isinstance(parameters, list):
        raise ValueError(f"Expected {section} to be a list, got {parameters!r}")
    return parameters

def _check_number(section, name, value):
    if not isinstance(value, Number):
        raise ValueError(f"Expected {section} parameter {name} to be a number, got {value!r}")
    return value

def read_parameters(filename) -> dict:
    """ Read a model's parameters from a JSON file. """
    with open(filename, 'rt') as f:
        parameters = json.load(f)
    if not isinstance(parameters, dict):
        raise ValueError(f"Expected a JSON object in '{filename}'")
    _check_keys('model', parameters, DEFAULT_PARAMETERS)
    return parameters
