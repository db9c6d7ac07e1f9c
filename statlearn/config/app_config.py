#!filepath: statlearn/config/app_config.py
from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .data_config import DataConfig
from .kmeans_config import KMeansConfig
from .lasso_config import LassoConfig
from .log_config import LogConfig
from .output_config import OutputConfig
from statlearn import logs

CONFIG_ENV = "STATLEARN_CONFIG"


def project_root() -> Path:
    """
    statlearn/config/app_config.py -> parents[2] = project root (.env lives here)
    """
    return Path(__file__).resolve().parents[2]


def default_config_path() -> Path:
    return Path(__file__).resolve().parent / "base.yml"


class AppConfig(BaseModel):
    """
    Every section has defaults; a YAML file only needs the keys it changes.
    """

    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    lasso: LassoConfig = Field(default_factory=LassoConfig)
    kmeans: KMeansConfig = Field(default_factory=KMeansConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AppConfig":
        """
        Resolution order for the YAML file:
          explicit path > $STATLEARN_CONFIG > statlearn/config/base.yml

        .env at the project root is loaded first, so it may set
        STATLEARN_CONFIG / STATLEARN_DATA_DIR / STATLEARN_OUTPUT_DIR.
        """
        load_dotenv(project_root() / ".env")

        if path is None:
            path = os.getenv(CONFIG_ENV) or default_config_path()
        path = Path(path)

        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        logs.debug(f"[AppConfig] loaded {path}")
        return cls(**raw)

    def dump(self, path: str | Path) -> Path:
        """
        Write the effective config as YAML (stored next to run artifacts).
        """
        path = Path(path)
        path.write_text(
            yaml.safe_dump(self.model_dump(), sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
        return path
