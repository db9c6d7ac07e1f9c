#!filepath: statlearn/config/log_config.py
from typing import Literal

from pydantic import BaseModel

Level = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LogConfig(BaseModel):
    # file sink; relative dirs resolve against the working directory
    dir: str = "logs"
    rotation: str = "1 day"
    retention: str = "30 days"
    level: Level = "INFO"
    # stderr sink
    console_level: Level = "WARNING"
