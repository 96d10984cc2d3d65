from .config import BuildConfig
from .core import (
    AggregateResult,
    CompileBookError,
    SkippedFile,
    aggregate,
    discover_files,
    get_renderer,
    title_transform,
)
from .pipeline import BuildResult, build_book

__all__ = [
    "BuildConfig",
    "AggregateResult",
    "CompileBookError",
    "SkippedFile",
    "aggregate",
    "discover_files",
    "get_renderer",
    "title_transform",
    "BuildResult",
    "build_book",
]
