#!filepath: statlearn/utils/logger.py
import json
import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {message}"


class Logging:
    """
    statlearn logger (loguru)
    ---------------------------------------
    - no log_dir : stderr only (import-time default, creates nothing on disk)
    - log_dir    : one file per day  <log_dir>/statlearn_YYYY-MM-DD.log
                   + stderr for console_level and above
    - catch()    : log-and-reraise decorator for entry points
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console_level: str = "WARNING",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console_level = console_level

        self._configure()

    def _configure(self) -> None:
        logger.remove()
        logger.add(sys.stderr, level=self.console_level, format=_FORMAT)

        if self.log_dir is None:
            return

        os.makedirs(self.log_dir, exist_ok=True)
        logger.add(
            sink=os.path.join(self.log_dir, "statlearn_{time:YYYY-MM-DD}.log"),
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format=_FORMAT,
            enqueue=True,  # cv folds / k-means restarts may run in worker processes
            backtrace=True,
            diagnose=True,
        )
        logger.info(f"[Logging] file sink -> {self.log_dir} level={self.level}")

    # ----------- log methods -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "failed",
        log_inputs: bool = False,
        log_time: bool = True,
    ) -> Callable:
        """
        Wrap an entry point: optional call logging, wall time, and a
        logged traceback on failure. The exception is always re-raised.
        """

        def decorator(func: Callable):
            name = func.__qualname__

            @wraps(func)
            def wrapper(*args, **kwargs):
                if log_inputs:
                    logger.debug(
                        f"[CALL] {name} "
                        f"kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {name}: {msg}")
                    raise

                if log_time:
                    logger.debug(f"[TIME] {name} took {perf_counter() - start:.4f}s")
                return result

            return wrapper

        return decorator


def init_logging(cfg) -> Logging:
    """
    Point the global sinks at a LogConfig (dir / rotation / retention / level).
    """
    global logs
    logs = Logging(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
        console_level=cfg.console_level,
    )
    return logs


# default global logs (stderr only until init_logging)
logs = Logging()
