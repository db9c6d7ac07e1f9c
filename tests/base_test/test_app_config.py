#!filepath: tests/base_test/test_app_config.py
import pytest
import yaml
from pydantic import ValidationError

from statlearn.config.app_config import AppConfig, default_config_path
from statlearn.config.data_config import DataConfig
from statlearn.config.kmeans_config import KMeansConfig
from statlearn.config.lasso_config import LassoConfig
from statlearn.config.log_config import LogConfig


@pytest.fixture
def sample_config_file(tmp_path):
    data = {
        "log": {"dir": "logs", "rotation": "1 day", "retention": "7 days", "level": "DEBUG"},
        "data": {
            "birthweight": {"path": "bw.csv", "sample_size": 50, "sample_seed": 1},
            "pokemon": {"path": "pk.csv"},
        },
        "lasso": {"lambdas": [10.0, 1.0, 0.1], "n_folds": 5},
        "kmeans": {"k": 4, "init": "random"},
    }
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    """YAML sections are parsed into their schemas"""
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.data, DataConfig)
    assert isinstance(cfg.lasso, LassoConfig)
    assert isinstance(cfg.kmeans, KMeansConfig)

    assert cfg.log.level == "DEBUG"
    assert cfg.data.birthweight.sample_size == 50
    assert cfg.lasso.lambdas == [10.0, 1.0, 0.1]
    assert cfg.kmeans.k == 4
    assert cfg.kmeans.init == "random"


def test_missing_sections_use_defaults(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.output.dir is None
    assert cfg.output.persist_models is True
    assert cfg.data.birthweight.response == "bwt"


def test_packaged_base_config_loads():
    cfg = AppConfig.load()

    assert default_config_path().name == "base.yml"
    assert cfg.data.birthweight.reference_levels == {"race": "white"}
    assert cfg.data.birthweight.labels["race"]["1"] == "white"
    assert cfg.kmeans.feature_columns == ["Attack", "Defense"]
    assert cfg.lasso.lambdas is None


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "missing.yml"))


def test_empty_config_file_gives_defaults(tmp_path):
    f = tmp_path / "empty.yml"
    f.write_text("")
    assert AppConfig.load(path=str(f)) == AppConfig()


@pytest.mark.parametrize("lambdas", [[], [1.0, 10.0], [1.0, 1.0], [1.0, -1.0]])
def test_bad_lambda_grid_rejected(lambdas):
    with pytest.raises(ValidationError):
        LassoConfig(lambdas=lambdas)


def test_bad_fold_count_rejected():
    with pytest.raises(ValidationError):
        LassoConfig(n_folds=1)


def test_unknown_init_rejected():
    with pytest.raises(ValidationError):
        KMeansConfig(init="spectral")


def test_config_path_from_env(sample_config_file, monkeypatch):
    monkeypatch.setenv("STATLEARN_CONFIG", str(sample_config_file))
    assert AppConfig.load().kmeans.k == 4


def test_dump_round_trips(tmp_path, sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    out = cfg.dump(tmp_path / "effective.yml")

    assert AppConfig.load(path=out) == cfg
