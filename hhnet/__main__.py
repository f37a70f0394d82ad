""" Simulate a network of Hodgkin-Huxley neurons and print the voltages as CSV.

Run from the command line as:
$ python -m hhnet [parameters.json]

Without a parameters file this runs a network of three neurons, where
neuron 0 receives a 10 uA/cm^2 pulse from 5 ms to 30 ms.
"""

from hhnet.errors import SimulationError
from hhnet.model import Model, read_parameters
import argparse
import copy
import logging
import sys

EXAMPLE_NETWORK = {
    'simulation': {
        'total_time': 220.0,
        'time_step':  0.025,
    },
    'neurons': {'count': 3},
    'stimuli': [
        {'neuron': 0, 'amplitude': 10.0, 'start': 5.0, 'stop': 30.0},
    ],
    'synapses': [
        (0, 1, 0.8),
        (1, 2, 0.9),
        (2, 1, 0.1),
        (2, 0, 0.1),
    ],
}

def main(argv=None):
    parser = argparse.ArgumentParser(prog="python -m hhnet",
            description="Simulate a network of Hodgkin-Huxley neurons.")
    parser.add_argument('parameters_file', type=str, nargs='?',
            help="JSON file with the keys: simulation, neurons, stimuli, synapses")
    parser.add_argument('-t', '--time', type=float,
            help="total simulation time, in milliseconds")
    parser.add_argument('--dt', type=float,
            help="time step, in milliseconds")
    parser.add_argument('-n', '--neurons', type=int,
            help="number of neurons")
    parser.add_argument('-o', '--output', type=str,
            help="write the CSV to this file instead of stdout")
    parser.add_argument('--header', action='store_true',
            help="start the CSV with a row of column names")
    parser.add_argument('-v', '--verbose', action='count', default=0)
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s: %(message)s")

    try:
        if args.parameters_file is not None:
            parameters = read_parameters(args.parameters_file)
        else:
            parameters = copy.deepcopy(EXAMPLE_NETWORK)
        simulation = parameters.setdefault('simulation', {})
        if args.time is not None:
            simulation['total_time'] = args.time
        if args.dt is not None:
            simulation['time_step'] = args.dt
        if args.neurons is not None:
            parameters.setdefault('neurons', {})['count'] = args.neurons
        results = Model(**parameters).run()
    except (SimulationError, ValueError, OSError) as error:
        parser.error(str(error))

    if args.output is not None:
        with open(args.output, 'wt', newline='') as f:
            results.write_csv(f, header=args.header)
    else:
        results.write_csv(sys.stdout, header=args.header)
    return results

if __name__ == '__main__':
    main()
