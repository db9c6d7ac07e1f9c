#!filepath: statlearn/config/output_config.py
from typing import Optional

from pydantic import BaseModel


class OutputConfig(BaseModel):
    # None -> PathManager.output_dir()
    dir: Optional[str] = None
    persist_models: bool = True
