#!filepath: tests/base_test/test_path.py
import pytest

from statlearn import path


@pytest.fixture(autouse=True)
def reset_root(monkeypatch):
    monkeypatch.delenv("STATLEARN_DATA_DIR", raising=False)
    monkeypatch.delenv("STATLEARN_OUTPUT_DIR", raising=False)
    yield
    path.set_root(None)


def test_root_detected():
    """root is the directory holding the statlearn package"""
    root = path.root()
    assert (root / "statlearn").is_dir()


def test_set_root(tmp_path):
    path.set_root(tmp_path)

    assert path.root() == tmp_path.resolve()
    assert path.data_dir() == tmp_path.resolve() / "data"
    assert path.run_dir("run_1") == tmp_path.resolve() / "output" / "run_1"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("STATLEARN_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.setenv("STATLEARN_OUTPUT_DIR", str(tmp_path / "o"))

    assert path.data_file("pokemon.csv") == tmp_path / "d" / "pokemon.csv"
    assert path.output_dir() == tmp_path / "o"


def test_absolute_data_file_passes_through(tmp_path):
    f = tmp_path / "x.csv"
    assert path.data_file(f) == f
    assert path.data_file(str(f)) == f


def test_config_dir_holds_base_yml():
    assert (path.config_dir() / "base.yml").is_file()


def test_ensure_dir(tmp_path):
    target = tmp_path / "a" / "b"
    assert path.ensure_dir(target) == target
    assert target.is_dir()
