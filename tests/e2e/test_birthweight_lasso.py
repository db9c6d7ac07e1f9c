# tests/e2e/test_birthweight_lasso.py
import json

import joblib
import numpy as np
import pandas as pd
import pytest

from statlearn.observability.instrumentation import Instrumentation
from statlearn.utils.errors import DataValidationError
from statlearn.workflows.birthweight_lasso import build_birthweight_lasso


def test_birthweight_pipeline_end_to_end(make_config):
    cfg = make_config()
    inst = Instrumentation()

    ctx = build_birthweight_lasso(cfg, inst=inst).run(run_id="bw-test")

    # design
    assert len(ctx.table) == 100
    assert "low" not in ctx.table.columns
    assert list(ctx.X.columns) == [
        "age", "lwt", "race_black", "race_other", "smoke", "ptl", "ht", "ui", "ftv",
    ]
    assert ctx.levels == {"race": ["white", "black", "other"]}

    # path + cv
    assert len(ctx.lambdas) == 20
    assert ctx.path.coefs.shape == (9, 20)
    assert np.allclose(ctx.path.coefs[:, 0], 0.0, atol=1e-8)
    assert ctx.cv.lambda_min in ctx.lambdas
    assert ctx.cv.fold_sizes == [20] * 5
    assert ctx.metrics["lambda_min"] == ctx.cv.lambda_min

    # lwt carries the strongest signal in the fixture
    assert ctx.path.coef_at(ctx.cv.lambda_min)["lwt"] > 0

    # timeline only holds leaf timers
    assert "LassoPath_fit" in inst.timeline
    assert "LassoPathStep" not in inst.timeline


def test_birthweight_artifacts(make_config, tmp_path):
    cfg = make_config()
    ctx = build_birthweight_lasso(cfg).run(run_id="bw-artifacts")

    run_dir = tmp_path / "output" / "bw-artifacts"
    assert ctx.run_dir == run_dir

    coef_path = pd.read_parquet(run_dir / "coef_path.parquet")
    assert list(coef_path.columns) == ["x", "y", "group"]
    assert set(coef_path["group"]) == set(ctx.X.columns)

    cv_curve = pd.read_parquet(run_dir / "cv_curve.parquet")
    assert set(cv_curve["group"]) == {"cv_mean", "cv_upper", "cv_lower"}

    summary = pd.read_parquet(run_dir / "path_summary.parquet")
    assert len(summary) == 20

    path = joblib.load(run_dir / "lasso_path.joblib")
    assert np.array_equal(path.coefs, ctx.path.coefs)

    meta = json.loads((run_dir / "run.json").read_text(encoding="utf-8"))
    assert meta["run_id"] == "bw-artifacts"
    assert meta["metrics"]["lambda_min"] == pytest.approx(ctx.cv.lambda_min)
    assert meta["levels"]["race"][0] == "white"
    assert "LassoPath_fit" in meta["instrumentation"]["timeline"]
    assert (run_dir / "config.yml").is_file()


def test_explicit_grid_and_no_persist(make_config, tmp_path):
    cfg = make_config(
        lasso={"lambdas": [200.0, 50.0, 10.0, 1.0], "n_folds": 4},
        output={"dir": str(tmp_path / "output"), "persist_models": False},
    )
    ctx = build_birthweight_lasso(cfg).run(run_id="bw-grid")

    assert ctx.lambdas.tolist() == [200.0, 50.0, 10.0, 1.0]
    assert ctx.cv.lambda_min in ctx.lambdas
    assert not (ctx.run_dir / "run.json").exists()
    assert (ctx.run_dir / "coef_path.parquet").exists()


def test_same_seeds_same_selection(make_config):
    cfg = make_config()

    a = build_birthweight_lasso(cfg).run(run_id="bw-a")
    b = build_birthweight_lasso(cfg).run(run_id="bw-b")

    assert a.cv.lambda_min == b.cv.lambda_min
    assert np.array_equal(a.cv.fold_errors, b.cv.fold_errors)


def test_unlabeled_code_fails(make_config):
    birthweight = make_config().data.birthweight.model_dump()
    birthweight["labels"] = {"race": {"1": "white", "2": "black"}}

    cfg = make_config(data={"birthweight": birthweight})
    with pytest.raises(DataValidationError, match="race"):
        build_birthweight_lasso(cfg).run(run_id="bw-bad")
