import numpy as np
import pytest

from tsp_cs.problems import CitySelectionTSP, ConfigurationError, Encoding, GraphConfig, SubsequenceResult


def test_default_problem(toy_problem):
    assert toy_problem.n_cities == 3
    assert toy_problem.encoding is Encoding.RANDOMKEYS
    assert toy_problem.dimension == 3
    assert toy_problem.integer_dimension == 0
    assert toy_problem.constraint_dimensions == (0, 0)
    assert toy_problem.max_path_length == 1.0
    assert toy_problem.config == GraphConfig.default()


def test_default_fitness(toy_problem):
    # Keys decode to tour [0, 1, 2]: value 2, no budget left.
    assert toy_problem.evaluate_fitness([0.1, 0.2, 0.3]) == -2.0
    assert toy_problem.objectives([0.1, 0.2, 0.3]) == (-2.0,)
    assert toy_problem.evaluate_constraints([0.1, 0.2, 0.3]).size == 0


def test_fitness_accounts_for_min_value_and_residual_budget():
    weights = np.ones((3, 3)) - np.eye(3)
    problem = CitySelectionTSP(weights, [2.0, 3.0, 4.0], 1.5, "cities")
    assert problem.find_city_subsequence([0, 1, 2]) == SubsequenceResult(7.0, 0.5, 1, 2)
    assert problem.evaluate_fitness([0, 1, 2]) == pytest.approx(-(7.0 - 3.0 + 0.5 / 1.5))


def test_zero_budget_fitness_is_finite():
    weights = np.ones((3, 3)) - np.eye(3)
    problem = CitySelectionTSP(weights, [1.0, 2.0, 3.0], 0.0, "cities")
    assert problem.find_city_subsequence([0, 1, 2]) == SubsequenceResult(1.0, 0.0, 0, 0)
    assert problem.evaluate_fitness([0, 1, 2]) == -1.0


def test_full_encoding_problem(toy_problem):
    problem = CitySelectionTSP(toy_problem.weights, toy_problem.values, 1.0, Encoding.FULL)
    x = problem.encode([0, 1, 2])
    assert problem.decode(x) == [0, 1, 2]
    assert problem.evaluate_fitness(x) == -2.0
    assert problem.constraint_dimensions == (8, 2)
    assert problem.feasibility(x)
    assert not problem.feasibility(np.ones(6))


def test_cities_feasibility(square4):
    weights, values = square4
    problem = CitySelectionTSP(weights, values, 2.5, "cities")
    assert problem.feasibility([3, 1, 0, 2])
    assert not problem.feasibility([3, 1, 1, 2])
    assert problem.feasibility([3, 1, 1, 2], tolerance=1.0)


def test_cities_tour_length_is_checked(square4):
    weights, values = square4
    problem = CitySelectionTSP(weights, values, 2.5, "cities")
    with pytest.raises(ConfigurationError, match="tour dimension must equal city count"):
        problem.evaluate_fitness([0, 1, 2])


def test_weights_without_values_is_an_error():
    with pytest.raises(ConfigurationError):
        CitySelectionTSP(weights=np.ones((2, 2)) - np.eye(2))


def test_invalid_configuration_is_rejected():
    with pytest.raises(ConfigurationError):
        CitySelectionTSP([[0, 1], [0, 0]], [1, 1], 1.0)


def test_distance_and_tour_length(square4):
    weights, values = square4
    problem = CitySelectionTSP(weights, values, 2.5)
    assert problem.distance(0, 2) == 2.0
    assert problem.distance(3, 0) == 1.0
    assert problem.tour_length([0, 1, 2, 3]) == 4.0
    assert problem.tour_length([0, 2, 1, 3]) == 6.0


@pytest.mark.parametrize("encoding", list(Encoding))
def test_evaluation_is_pure(make_instance, encoding):
    config = make_instance(6, 2, budget=3.0)
    problem = CitySelectionTSP(config=config, encoding=encoding)
    x = problem.encode([4, 2, 0, 5, 1, 3])
    first = (problem.evaluate_fitness(x), problem.evaluate_constraints(x))
    second = (problem.evaluate_fitness(x), problem.evaluate_constraints(x))
    assert first[0] == second[0]
    assert np.array_equal(first[1], second[1])


def test_state_round_trip(square4):
    weights, values = square4
    problem = CitySelectionTSP(weights, values, 2.5, "full")
    state = problem.to_state()
    assert state["version"] == 1
    assert state["encoding"] == "full"
    assert CitySelectionTSP.from_state(state) == problem


def test_unknown_state_version_is_rejected(toy_problem):
    state = toy_problem.to_state()
    state["version"] = 99
    with pytest.raises(ConfigurationError, match="unsupported state version"):
        CitySelectionTSP.from_state(state)


def test_configuration_and_encoding_are_read_only(toy_problem):
    with pytest.raises(AttributeError):
        toy_problem.encoding = Encoding.FULL
    with pytest.raises(AttributeError):
        toy_problem.config = GraphConfig.default()
    assert toy_problem.decode([0.3, 0.1, 0.2]) == [1, 2, 0]


def test_copy_is_equal_but_distinct(toy_problem):
    clone = toy_problem.copy()
    assert clone == toy_problem
    assert clone is not toy_problem
    assert clone != CitySelectionTSP(toy_problem.weights, toy_problem.values, 1.0, "cities")


def test_human_readable(toy_problem):
    text = str(toy_problem)
    assert "City-selection Travelling Salesman Problem" in text
    assert "Number of cities: 3" in text
    assert "Encoding: RANDOMKEYS" in text
    assert "Max path length: 1.0" in text
    assert "..." not in text


def test_human_readable_truncates_large_matrices():
    n = 10
    problem = CitySelectionTSP(np.ones((n, n)) - np.eye(n), np.ones(n), 3.0, "cities")
    text = problem.human_readable_extra()
    assert text.count("\t\t[") == 7
    assert "\t\t..." in text
