"""Entry point for inverting a stress tensor from a data file."""

import argparse
import datetime
import json

import numpy as np

from stressinversion.analysis import FullParameterSpace, GridDomain
from stressinversion.config import GridSearchConfig, MonteCarloConfig
from stressinversion.data import DataDescription, DataFactory
from stressinversion.logging_config import get_logger, setup_global_logging
from stressinversion.search import InverseMethod, MonteCarlo
from stressinversion.tensor_math import unit_vector_to_trend_plunge

logger = get_logger(__name__)


def run_inversion(data_file: str, config_file: str = None):
    """Run a Monte Carlo inversion of the data file and log the best solution."""
    start_time = datetime.datetime.now()
    data = DataDescription(DataFactory.default()).read_file(data_file)

    if config_file is not None:
        with open(config_file, "r") as f:
            config = MonteCarloConfig.from_dict(json.load(f))
    else:
        config = MonteCarloConfig()

    inversion = InverseMethod(MonteCarlo(config))
    inversion.add_data(data)
    solution = inversion.run()

    for label, row in zip(("sigma1", "sigma3", "sigma2"), solution.rotation_matrix_w):
        trend, plunge = unit_vector_to_trend_plunge(row)
        logger.info("%s: trend %.1f, plunge %.1f", label, trend, plunge)
    logger.info("Stress ratio: %.3f", solution.stress_ratio)
    logger.info("Mean misfit: %.4f rad", solution.misfit)
    logger.info("Elapsed time: %s", datetime.datetime.now() - start_time)
    return solution


def run_grid(data_file: str, grid_file: str) -> np.ndarray:
    """Scan the parameter space on a regular grid and log the best node."""
    data = DataDescription(DataFactory.default()).read_file(data_file)
    with open(grid_file, "r") as f:
        config = GridSearchConfig.from_dict(json.load(f))

    domain = GridDomain(FullParameterSpace(data), [a.to_axis() for a in config.axes])
    costs = domain.run()
    best = np.unravel_index(int(np.argmin(costs)), domain.shape)
    for axis, i in zip(domain.axes, best):
        logger.info("%s = %g", axis.name, axis.values()[i])
    logger.info("Minimum mean misfit: %.4f rad", costs.min())
    return costs


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("-d", "--data_file", help="Provide the data file", required=True)
    parser.add_argument(
        "-c", "--config_file", help="Monte Carlo configuration (JSON)", default=None
    )
    parser.add_argument(
        "-g", "--grid_file", help="Scan a grid described in a JSON file instead", default=None
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_global_logging(args.verbose)

    if args.grid_file is not None:
        run_grid(args.data_file, args.grid_file)
    else:
        run_inversion(args.data_file, args.config_file)
