"""Test suite for search configurations and the Monte Carlo inversion."""

import json

import numpy as np
import pydantic
import pytest

from main import run_grid, run_inversion
from stressinversion.analysis import Axis
from stressinversion.config import AxisConfig, GridSearchConfig, MonteCarloConfig
from stressinversion.geomeca import tensor_parameters_from_rotation
from stressinversion.search import InverseMethod, MisfitSolution, MonteCarlo
from stressinversion.types import ValidationError


@pytest.fixture
def fracture_data(description, make_line):
    """Extension fractures striking North, opened along East-West."""
    return description.parse(
        [
            make_line(1, "Extension Fracture", strike=0, dip=90),
            make_line(2, "Extension Fracture", strike=2, dip=88, dipDirection="E"),
            make_line(3, "Extension Fracture", strike=358, dip=89, dipDirection="W"),
        ]
    )


@pytest.fixture
def data_file(tmp_path, make_line):
    """Data file with comments and two extension fractures."""
    path = tmp_path / "data.csv"
    lines = [
        "# Extension fractures",
        make_line(1, "Extension Fracture", strike=0, dip=90),
        make_line(2, "Extension Fracture", strike=180, dip=90),
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


def test_monte_carlo_config_defaults():
    """Test default Monte Carlo configuration values."""
    config = MonteCarloConfig()
    assert config.stress_ratio == 0.5
    assert config.rot_angle_half_interval == 180.0
    assert config.nb_random_trials == 1000
    assert MonteCarloConfig.from_dict(config.to_dict()) == config


def test_monte_carlo_config_validation():
    """Test validation of Monte Carlo configuration values."""
    with pytest.raises(pydantic.ValidationError):
        MonteCarloConfig(stress_ratio=1.5)
    with pytest.raises(pydantic.ValidationError):
        MonteCarloConfig(nb_random_trials=0)
    with pytest.raises(pydantic.ValidationError):
        MonteCarloConfig(rot_angle_half_interval=270.0)


def test_create_random_config():
    """Test that random configurations are valid."""
    config = MonteCarloConfig.create_random()
    assert 0.0 <= config.stress_ratio <= 1.0


def test_axis_config():
    """Test axis configurations and their conversion."""
    axis = AxisConfig(name="R", min=0.0, max=1.0, n=11).to_axis()
    assert isinstance(axis, Axis)
    assert axis.bounds == (0.0, 1.0)
    assert len(axis.values()) == 11

    with pytest.raises(pydantic.ValidationError):
        AxisConfig(name="R", min=1.0, max=0.0)


def test_grid_search_config_from_dict():
    """Test creating a grid configuration from a dictionary."""
    config = GridSearchConfig.from_dict(
        {"axes": [{"name": "psi", "min": 0, "max": 90, "n": 4}, {"name": "R", "min": 0, "max": 1}]}
    )
    assert [a.name for a in config.axes] == ["psi", "R"]
    assert config.axes[1].n == 2
    with pytest.raises(pydantic.ValidationError):
        GridSearchConfig.from_dict({"axes": []})


def test_inverse_method_without_data():
    """Test that an inversion needs data."""
    inversion = InverseMethod()
    with pytest.raises(ValidationError):
        inversion.run()
    with pytest.raises(ValidationError):
        inversion.cost(tensor_parameters_from_rotation(np.eye(3), 0.5))


def test_monte_carlo_finds_sigma3(fracture_data):
    """Test that the best solution has sigma3 close to East-West."""
    inversion = InverseMethod(MonteCarlo(MonteCarloConfig(nb_random_trials=200)))
    inversion.add_data(fracture_data)
    solution = inversion.run()

    assert isinstance(solution, MisfitSolution)
    assert np.isfinite(solution.misfit)
    assert 0.0 <= solution.misfit < 0.2
    assert np.linalg.det(solution.rotation_matrix_w) == pytest.approx(1.0)
    assert 0.25 <= solution.stress_ratio <= 0.75
    assert abs(solution.rotation_matrix_w[1][0]) > np.cos(0.2 * np.pi)

    stress = tensor_parameters_from_rotation(
        solution.rotation_matrix_w, solution.stress_ratio
    )
    assert inversion.cost(stress) == pytest.approx(solution.misfit)
    assert np.allclose(solution.stress_tensor, stress.S)


def test_monte_carlo_continues_from_solution(fracture_data):
    """Test that a run without reset never worsens the solution."""
    inversion = InverseMethod(MonteCarlo(MonteCarloConfig(nb_random_trials=50)))
    inversion.add_data(fracture_data[0])
    inversion.add_data(fracture_data[1:])
    assert len(inversion.data) == 3

    first = inversion.run().misfit
    second = inversion.run(reset=False).misfit
    assert second <= first


def test_monte_carlo_around_reference(fracture_data):
    """Test that small rotations stay close to the reference solution."""
    reference = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]])
    search = MonteCarlo(
        MonteCarloConfig(rot_angle_half_interval=5.0, nb_random_trials=20), rrot=reference
    )
    solution = search.run(fracture_data, MisfitSolution())
    assert np.allclose(
        solution.rotation_matrix_w, solution.rotation_matrix_d @ reference
    )
    angle = np.arccos(np.clip((np.trace(solution.rotation_matrix_d) - 1) / 2, -1, 1))
    assert angle <= np.radians(5.0) + 1e-9


def test_run_inversion_from_files(data_file, tmp_path):
    """Test the command line inversion on a data file."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"nb_random_trials": 100, "stress_ratio": 0.3}))
    solution = run_inversion(str(data_file), str(config_file))
    assert 0.05 <= solution.stress_ratio <= 0.55
    assert solution.misfit < 0.25


def test_run_grid_from_files(data_file, tmp_path):
    """Test the command line grid scan on a data file."""
    grid_file = tmp_path / "grid.json"
    grid_file.write_text(
        json.dumps(
            {
                "axes": [
                    {"name": "psi", "min": 0, "max": 90, "n": 4},
                    {"name": "R", "min": 0, "max": 1, "n": 3},
                ]
            }
        )
    )
    costs = run_grid(str(data_file), str(grid_file))
    assert costs.shape == (12,)
    assert np.all(costs >= 0.0)


def test_inactive_data_are_skipped(fracture_data, description, make_line):
    """Test that inactive data do not contribute to the misfit."""
    (outlier,) = description.parse([make_line(4, "Extension Fracture", strike=90, dip=0)])
    inversion = InverseMethod(MonteCarlo(MonteCarloConfig(nb_random_trials=10)))
    inversion.add_data(fracture_data)
    inversion.add_data(outlier)

    aligned = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]])
    stress = tensor_parameters_from_rotation(aligned, 0.5)
    with_outlier = inversion.cost(stress)
    outlier.active = False
    expected = np.mean([d.cost(stress=stress) for d in fracture_data])
    assert inversion.cost(stress) == pytest.approx(expected)
    assert inversion.cost(stress) < with_outlier


def test_all_data_inactive(fracture_data):
    """Test that a search without active data is rejected."""
    for datum in fracture_data:
        datum.active = False
    inversion = InverseMethod(MonteCarlo(MonteCarloConfig(nb_random_trials=10)))
    inversion.add_data(fracture_data)
    with pytest.raises(ValidationError):
        inversion.cost(tensor_parameters_from_rotation(np.eye(3), 0.5))
    with pytest.raises(ValidationError):
        inversion.run()
