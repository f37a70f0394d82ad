from hhnet.clock import SimulationClock, CallbackHook
from hhnet.errors import InvalidTimeStep, OutOfRange, UninitializedState
from hhnet.neuron import Neuron
from hhnet.synapses import SynapticCoupling
from pytest import approx
import numpy as np
import pytest

def test_time_axis():
    c = SimulationClock(55, 0.025)
    assert len(c) == len(c.time_axis) == 2202
    assert c.time_axis[0] == 0
    assert c.time_axis[-1] == approx(55.025)
    assert c.time_axis[-2] == approx(55)
    assert np.all(np.diff(c.time_axis) > 0)
    assert c.get_units() == 'ms'
    # Deterministic.
    assert np.array_equal(c.time_axis, SimulationClock(55, 0.025).time_axis)
    assert np.array_equal(c.time_axis, c.build(55, 0.025).time_axis)

def test_time_axis_exact_steps():
    c = SimulationClock(10, 0.5)
    assert len(c) == 21
    assert list(c.time_axis) == [0.5 * i for i in range(21)]
    c.build(1, 0.25)
    assert list(c.time_axis) == [0, 0.25, 0.5, 0.75, 1.0]

@pytest.mark.parametrize('total_time, time_step', [
    (55, 0),
    (55, -0.025),
    (0, 0.025),
    (-1, 0.025),
    (float('inf'), 0.025),
    (float('nan'), 0.025),
    (55, float('nan')),
    (55, float('inf')),
])
def test_invalid_time_step(total_time, time_step):
    with pytest.raises(InvalidTimeStep):
        SimulationClock(total_time, time_step)
    with pytest.raises(ValueError):
        SimulationClock(1, 1).build(total_time, time_step)

def make_neurons(clock, num):
    return [Neuron(clock.dt, index=i).initialize(None, len(clock)) for i in range(num)]

def test_run():
    c = SimulationClock(1, 0.025)
    neurons = make_neurons(c, 2)
    neurons[0].stimulus[:] = 10
    c.run(neurons)
    assert c.get_ticks() == len(c) - 1
    assert c() == c.time_axis[-1]
    for n in neurons:
        assert n.current_step == len(c)
    assert neurons[0].voltage[-1] > 1
    assert abs(neurons[1].voltage[-1]) < .05
    # Can not run past the end of the time axis.
    with pytest.raises(OutOfRange):
        c.run(neurons)

def test_run_checks_neurons():
    c = SimulationClock(1, 0.025)
    with pytest.raises(UninitializedState):
        c.run([Neuron(c.dt)])
    short = Neuron(c.dt).initialize(None, len(c) - 1)
    with pytest.raises(OutOfRange):
        c.run(make_neurons(c, 1) + [short])
    # Nothing was advanced.
    assert c.get_ticks() == 0

def test_run_checks_coupled_neurons():
    c = SimulationClock(1, 0.025)
    a = Neuron(c.dt, index=0).initialize(None, len(c))
    b = Neuron(c.dt, index=1).initialize(None, len(c) - 5)
    synapses = SynapticCoupling([a, b])
    synapses.set_weight(1, 0, 1.0)
    with pytest.raises(OutOfRange, match="Neuron 1"):
        c.run([a], synapses)
    # Nothing was advanced.
    assert c.get_ticks() == 0
    assert a.current_step == 1
    assert not a.stimulus.any()
    assert not a.voltage[1:].any()
    # Uninitialized neurons in the coupling are also caught up front.
    synapses = SynapticCoupling([a, Neuron(c.dt)])
    synapses.set_weight(1, 0, 1.0)
    with pytest.raises(UninitializedState):
        c.run([a], synapses)
    assert a.current_step == 1

class SpyCoupling:
    """ Checks that propagation happens before any neuron advances. """
    def __init__(self, neurons):
        self.neurons = neurons
        self.steps = []

    def propagate(self, step):
        for n in self.neurons:
            assert n.current_step == step
        self.steps.append(step)

def test_coupling_before_advance():
    c = SimulationClock(0.5, 0.025)
    neurons = make_neurons(c, 3)
    spy = SpyCoupling(neurons)
    c.run(neurons, spy)
    assert spy.steps == list(range(1, len(c)))

def test_neuron_order_does_not_matter():
    c1 = SimulationClock(20, 0.025)
    c2 = SimulationClock(20, 0.025)
    n1 = make_neurons(c1, 3)
    n2 = make_neurons(c2, 3)
    for neurons in (n1, n2):
        neurons[0].stimulus[200:] = 10
    s1 = SynapticCoupling(n1)
    s2 = SynapticCoupling(n2)
    for s in (s1, s2):
        s.set_weight(0, 1, 0.8)
        s.set_weight(1, 2, 0.9)
        s.set_weight(2, 0, 0.1)
    c1.run(n1, s1)
    c2.run(reversed(n2), s2)
    for a, b in zip(n1, n2):
        assert np.array_equal(a.voltage, b.voltage)

def test_callbacks():
    c = SimulationClock(1, 0.25)
    ticks = []
    once = []
    c.register_callback(lambda: ticks.append(c.get_ticks()))
    c.register_callback(lambda: once.append(c()) or True)
    c.run(make_neurons(c, 1))
    assert ticks == [1, 2, 3, 4]
    assert once == [0.25]

def test_callback_hook():
    hook = CallbackHook()
    calls = []
    hook.register(lambda: calls.append('a'))
    hook.register(lambda: calls.append('b') or True)
    hook.register(lambda: calls.append('c'))
    hook()
    hook()
    assert calls == ['a', 'b', 'c', 'a', 'c']
    assert len(hook) == 2
