from __future__ import annotations

import numpy as np
import pytest

from statlearn.engines.cross_validate_engine import CrossValidateEngine
from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.utils.errors import ParameterError


# -----------------------------------------------------------------------------
# 1. folds
# -----------------------------------------------------------------------------
def test_folds_partition_all_indices():
    folds = CrossValidateEngine.make_folds(23, 5, seed=4)

    joined = np.concatenate(folds)
    assert sorted(joined.tolist()) == list(range(23))
    sizes = [len(f) for f in folds]
    assert max(sizes) - min(sizes) <= 1
    assert all(s > 0 for s in sizes)


def test_folds_are_deterministic_per_seed():
    a = CrossValidateEngine.make_folds(30, 4, seed=1)
    b = CrossValidateEngine.make_folds(30, 4, seed=1)
    c = CrossValidateEngine.make_folds(30, 4, seed=2)

    assert all(np.array_equal(x, y) for x, y in zip(a, b))
    assert not all(np.array_equal(x, y) for x, y in zip(a, c))


@pytest.mark.parametrize("n_folds", [0, 1, 7])
def test_invalid_fold_count(n_folds):
    with pytest.raises(ParameterError):
        CrossValidateEngine.make_folds(6, n_folds, seed=0)


def test_more_folds_than_rows_fails_in_cross_validate(scenario_X, scenario_y, scenario_grid):
    with pytest.raises(ParameterError, match="exceeds"):
        CrossValidateEngine().cross_validate(
            scenario_X, scenario_y, scenario_grid, n_folds=10
        )


# -----------------------------------------------------------------------------
# 2. selection
# -----------------------------------------------------------------------------
def test_two_fold_cv_picks_a_penalty_below_100(scenario_X, scenario_y, scenario_grid):
    cv = CrossValidateEngine().cross_validate(
        scenario_X, scenario_y, scenario_grid, n_folds=2, seed=0
    )

    assert cv.lambda_min < 100.0
    assert cv.lambda_min in scenario_grid
    assert cv.fold_errors.shape == (2, 4)
    assert cv.fold_sizes == [3, 3]


def test_selected_lambdas_are_grid_members(regression_data):
    X, y = regression_data
    grid = LassoPathEngine.lambda_grid(X, y, n_lambdas=25)

    cv = CrossValidateEngine().cross_validate(X, y, grid, n_folds=5, seed=11)

    assert cv.lambda_min in grid
    assert cv.lambda_1se in grid
    assert cv.lambda_1se >= cv.lambda_min
    assert cv.cv_mean[cv.index_min] == pytest.approx(cv.cv_mean.min())
    assert np.all(cv.cv_se >= 0)


def test_ties_resolve_toward_larger_lambda():
    # constant response: every penalty predicts the same intercept
    X = np.arange(20, dtype=float).reshape(10, 2)
    X[:, 1] = X[:, 1] ** 2
    y = np.full(10, 2.5)

    cv = CrossValidateEngine().cross_validate(X, y, [5.0, 1.0, 0.1], n_folds=5, seed=0)

    assert cv.index_min == 0
    assert cv.lambda_min == 5.0


def test_refit_attaches_full_data_path(regression_data):
    X, y = regression_data
    grid = [1.0, 0.1]

    cv = CrossValidateEngine().cross_validate(X, y, grid, n_folds=4, seed=0)
    full = LassoPathEngine().fit_path(X, y, grid)

    assert cv.path is not None
    assert np.allclose(cv.path.coefs, full.coefs)

    no_refit = CrossValidateEngine().cross_validate(X, y, grid, n_folds=4, seed=0, refit=False)
    assert no_refit.path is None


def test_chart_table_has_mean_and_bands(scenario_X, scenario_y, scenario_grid):
    cv = CrossValidateEngine().cross_validate(
        scenario_X, scenario_y, scenario_grid, n_folds=3, seed=0
    )
    table = cv.to_chart_table()

    assert list(table.columns) == ["x", "y", "group"]
    assert set(table["group"]) == {"cv_mean", "cv_upper", "cv_lower"}
    assert len(table) == 3 * len(scenario_grid)


# -----------------------------------------------------------------------------
# 3. parallel == sequential
# -----------------------------------------------------------------------------
def test_parallel_folds_match_sequential(regression_data):
    X, y = regression_data
    grid = LassoPathEngine.lambda_grid(X, y, n_lambdas=10)

    seq = CrossValidateEngine(n_jobs=1).cross_validate(X, y, grid, n_folds=4, seed=5)
    par = CrossValidateEngine(n_jobs=2).cross_validate(X, y, grid, n_folds=4, seed=5)

    assert np.array_equal(seq.fold_errors, par.fold_errors)
    assert seq.lambda_min == par.lambda_min
