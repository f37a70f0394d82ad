from collections import namedtuple
from collections.abc import Iterable, Mapping
from numbers import Number
from pprint import pformat

__all__ = ('Parameters', 'NeuronParameters', 'DEFAULT_PARAMETERS')

class Parameters(dict):
    """
    Parameter dictionaries may contain strings, numbers, lists, and dicts.
    """
    def __init__(self, parameters):
        for name, value in parameters.items():
            name = str(name)
            self[name] = Parameters._clean(value)

    @staticmethod
    def _clean(value) -> 'value':
        if   isinstance(value, str):      return value
        elif isinstance(value, Number):   return value
        elif isinstance(value, Mapping):  return Parameters(value)
        elif isinstance(value, Iterable): return list(map(Parameters._clean, value))
        else: raise ValueError(f"Bad parameter value: '{value}'")

    def __repr__(self):
        return pformat(dict(self))

    def update_with_defaults(self, default_parameters):
        """
        Merge the given default_parameters into this dictionary, without
        overwritting any existing entries.
        """
        for name, default_value in default_parameters.items():
            if name not in self:
                self[name] = Parameters._clean(default_value)
            else:
                parameter_value = self[name]
                if isinstance(default_value, Mapping) and not isinstance(parameter_value, Mapping):
                    raise ValueError(f'Expected parameter {name} to be a dictionary!')
                if isinstance(parameter_value, Parameters):
                    if not isinstance(default_value, Mapping):
                        raise ValueError(f'Expected parameter {name} to be a value, not a dictionary!')
                    parameter_value.update_with_defaults(default_value)
        return self

_NeuronParameters = namedtuple('_NeuronParameters', [
        'rest_voltage',             # mV
        'capacitance',              # uF/cm^2
        'sodium_conductance',       # Maximum, mS/cm^2
        'potassium_conductance',    # Maximum, mS/cm^2
        'leak_conductance',         # mS/cm^2
        'sodium_reversal',          # mV
        'potassium_reversal',       # mV
        'leak_reversal',            # mV
])

class NeuronParameters(_NeuronParameters):
    """ Immutable membrane parameters of a single neuron.

    Potentials are relative to rest. The defaults are the classic squid axon
    values from Hodgkin & Huxley, 1952.
    """
    __slots__ = ()
    def __new__(cls,
                rest_voltage            = 0.0,
                capacitance             = 1.0,
                sodium_conductance      = 120.0,
                potassium_conductance   = 36.0,
                leak_conductance        = 0.3,
                sodium_reversal         = 115.0,
                potassium_reversal      = -12.0,
                leak_reversal           = 10.613,):
        self = super().__new__(cls,
                float(rest_voltage),
                float(capacitance),
                float(sodium_conductance),
                float(potassium_conductance),
                float(leak_conductance),
                float(sodium_reversal),
                float(potassium_reversal),
                float(leak_reversal),)
        if not self.capacitance > 0:
            raise ValueError(f"Membrane capacitance must be positive, got {self.capacitance}")
        for name in ('sodium_conductance', 'potassium_conductance', 'leak_conductance'):
            value = getattr(self, name)
            if not value >= 0:
                raise ValueError(f"Parameter {name} must not be negative, got {value}")
        return self

    @classmethod
    def defaults(cls) -> 'NeuronParameters':
        return cls()

    @classmethod
    def from_dict(cls, parameters) -> 'NeuronParameters':
        if not isinstance(parameters, Mapping):
            raise ValueError(f"Expected the neuron parameters to be a dictionary, got {parameters!r}")
        unknown = set(parameters) - set(cls._fields)
        if unknown:
            raise ValueError(f"Unrecognized neuron parameters: {', '.join(sorted(unknown))}")
        for name, value in parameters.items():
            if not isinstance(value, Number):
                raise ValueError(f"Expected neuron parameter {name} to be a number, got {value!r}")
        return cls(**parameters)

    def replace(self, **changes) -> 'NeuronParameters':
        """ Returns a copy with the given fields changed, re-validated. """
        return self.from_dict({**self._asdict(), **changes})

DEFAULT_PARAMETERS = {
    'simulation': {
        'total_time': 220.0, # ms
        'time_step':  0.025, # ms
    },
    'neurons': {
        'count':        1,
        'parameters':   NeuronParameters.defaults()._asdict(),
        'overrides':    {},
    },
    'stimuli':  [],
    'synapses': [],
}
