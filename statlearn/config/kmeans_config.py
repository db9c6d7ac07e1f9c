# statlearn/config/kmeans_config.py
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class KMeansConfig(BaseModel):
    feature_columns: List[str] = Field(
        default_factory=lambda: ["Attack", "Defense"]
    )
    k: int = Field(default=3, ge=1)
    init: Literal["k-means++", "random"] = "k-means++"
    n_init: int = Field(default=10, ge=1)
    max_iter: int = Field(default=100, ge=1)
    seed: int = 0
    n_jobs: int = 1
