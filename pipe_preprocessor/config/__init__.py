from .loader import load_config
from .models import (
    FilesConfig,
    PipesConfig,
)

__all__ = [
    "FilesConfig",
    "PipesConfig",
    "load_config",
]
