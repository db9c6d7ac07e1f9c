#!filepath: statlearn/config/data_config.py
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class BirthweightDataConfig(BaseModel):
    path: str = "birthweight.csv"
    response: str = "bwt"
    drop_columns: List[str] = Field(default_factory=lambda: ["low"])
    categorical_columns: List[str] = Field(default_factory=lambda: ["race"])
    # categorical column -> level dropped as reference (default: first sorted)
    reference_levels: Dict[str, str] = Field(default_factory=dict)
    # coded factor value -> label, e.g. race: {1: white, 2: black, 3: other}
    labels: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    sample_size: Optional[int] = None
    sample_seed: int = 0


class PokemonDataConfig(BaseModel):
    path: str = "pokemon.csv"


class DataConfig(BaseModel):
    birthweight: BirthweightDataConfig = Field(default_factory=BirthweightDataConfig)
    pokemon: PokemonDataConfig = Field(default_factory=PokemonDataConfig)
