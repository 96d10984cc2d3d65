from .logger import (
    init_logger,
)
from .version import (
    get_version,
)

__all__ = [
    "init_logger",
    "get_version",
]
