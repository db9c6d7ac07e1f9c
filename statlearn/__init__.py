# !filepath: statlearn/__init__.py

from .utils.logger import Logging, logs
from .utils.path import PathManager
from .config.app_config import AppConfig

# alias
path = PathManager

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging",
    "path",
    "AppConfig",
    "__version__",
]
