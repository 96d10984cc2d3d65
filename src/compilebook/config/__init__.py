from .build import BuildConfig

__all__ = [
    "BuildConfig",
]
