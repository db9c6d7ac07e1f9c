#!filepath: statlearn/utils/path.py
import os
from pathlib import Path
from typing import Optional

from statlearn import logs


class PathManager:
    """
    Project layout:

    <root>/
     ├── statlearn/...
     ├── data/
     │     ├── birthweight.csv
     │     └── pokemon.csv
     └── output/
           └── <run_id>/

    root is detected from this file; data / output dirs can be moved with
    STATLEARN_DATA_DIR / STATLEARN_OUTPUT_DIR.
    """

    _root: Optional[Path] = None

    # ---------------------------------------------------------
    # root detection
    # ---------------------------------------------------------
    @classmethod
    def detect_root(cls) -> Path:
        """
        statlearn/utils/path.py -> parents[2] = <root>
        """
        current = Path(__file__).resolve()

        try:
            root = current.parents[2]
            logs.debug(f"[PathManager] detect_root = {root}")
            return root
        except IndexError:
            logs.warning("[PathManager] detect_root failed, using cwd()")
            return Path.cwd()

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = cls.detect_root()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    # ---------------------------------------------------------
    # Top-level dirs
    # ---------------------------------------------------------
    @classmethod
    def data_dir(cls) -> Path:
        env = os.getenv("STATLEARN_DATA_DIR")
        if env:
            return Path(env)
        return cls.root() / "data"

    @classmethod
    def output_dir(cls) -> Path:
        env = os.getenv("STATLEARN_OUTPUT_DIR")
        if env:
            return Path(env)
        return cls.root() / "output"

    @classmethod
    def config_dir(cls) -> Path:
        return Path(__file__).resolve().parents[1] / "config"

    # ---------------------------------------------------------
    # data/
    # ---------------------------------------------------------
    @classmethod
    def data_file(cls, name: str | Path) -> Path:
        """
        Absolute paths pass through; relative names resolve under data_dir.
        """
        p = Path(name)
        if p.is_absolute():
            return p
        return cls.data_dir() / p

    # ---------------------------------------------------------
    # output/
    # ---------------------------------------------------------
    @classmethod
    def run_dir(cls, run_id: str) -> Path:
        return cls.output_dir() / run_id

    @classmethod
    def ensure_dir(cls, path: str | Path) -> Path:
        p = Path(path)
        if not p.exists():
            p.mkdir(parents=True, exist_ok=True)
            logs.debug(f"[PathManager] created dir: {p}")
        return p
