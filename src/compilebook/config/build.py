# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

import codecs
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from compilebook.core.render import (
    DEFAULT_RENDER_COMMAND,
    DEFAULT_RENDER_TIMEOUT,
    RendererName,
)
from compilebook.core.transforms import TransformName

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - older runtimes
    import tomli as tomllib  # type: ignore[no-redef]

logger = logging.getLogger("compilebook.config")

CONFIG_ENV_VAR = "COMPILEBOOK_CONFIG_PATH"
CONFIG_FILE_NAME = "compilebook.toml"


def _resolve_config_path() -> Path | None:
    """
    Determine the best candidate path for `compilebook.toml`.
    """
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate
        logger.warning(f"{CONFIG_ENV_VAR} set to {candidate} but file missing")

    cwd_candidate = Path.cwd() / CONFIG_FILE_NAME
    if cwd_candidate.is_file():
        return cwd_candidate

    return None


def _builtin_defaults() -> dict[str, Any]:
    return {
        "input_dir": "chapters",
        "output_file": "output/book.html",
        "renderer": "markdown",
        "transform": "title",
        "extensions": None,
        "sort": True,
        "strict": False,
        "encoding": "utf-8",
        "render_timeout": DEFAULT_RENDER_TIMEOUT,
        "render_command": list(DEFAULT_RENDER_COMMAND),
        "markdown_extensions": [],
    }


@lru_cache(maxsize=1)
def _load_defaults_from_toml() -> dict[str, Any]:
    """
    Read default build fields from the `[build]` table of `compilebook.toml` if available.
    """
    defaults = _builtin_defaults()

    config_path = _resolve_config_path()
    if config_path is None:
        logger.debug(f"{CONFIG_FILE_NAME} not found; using built-in defaults")
        return defaults

    try:
        with config_path.open("rb") as config_file:
            raw_config = tomllib.load(config_file)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"failed to load {config_path}: {e}")
        return defaults

    build_section = raw_config.get("build")
    if isinstance(build_section, dict):
        unknown = sorted(set(build_section) - set(defaults))
        if unknown:
            logger.warning(f"ignoring unknown keys in {config_path}: {unknown}")
        defaults.update(
            {key: value for key, value in build_section.items() if key in defaults}
        )

    logger.debug(f"build defaults resolved to {defaults} from {config_path}")
    return defaults


def _build_defaults() -> dict[str, Any]:
    # copy so that mutable defaults are never shared between configs
    return dict(_load_defaults_from_toml())


class BuildConfig(BaseModel):
    model_config = ConfigDict(validate_default=True)

    input_dir: Path = Field(default_factory=lambda: _build_defaults()["input_dir"])
    output_file: Path = Field(default_factory=lambda: _build_defaults()["output_file"])
    renderer: RendererName = Field(
        default_factory=lambda: _build_defaults()["renderer"]
    )
    transform: TransformName = Field(
        default_factory=lambda: _build_defaults()["transform"]
    )
    extensions: list[str] | None = Field(
        default_factory=lambda: _build_defaults()["extensions"]
    )
    sort: bool = Field(default_factory=lambda: _build_defaults()["sort"])
    strict: bool = Field(default_factory=lambda: _build_defaults()["strict"])
    encoding: str = Field(default_factory=lambda: _build_defaults()["encoding"])
    render_timeout: float = Field(
        default_factory=lambda: _build_defaults()["render_timeout"]
    )
    render_command: list[str] = Field(
        default_factory=lambda: list(_build_defaults()["render_command"])
    )
    markdown_extensions: list[str] = Field(
        default_factory=lambda: list(_build_defaults()["markdown_extensions"])
    )

    @field_validator("render_timeout")
    @classmethod
    def _timeout_is_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("render_timeout must be positive")
        return value

    @field_validator("render_command")
    @classmethod
    def _command_is_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("render_command must not be empty")
        return value

    @field_validator("encoding")
    @classmethod
    def _encoding_is_known(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as err:
            raise ValueError(f"unknown encoding '{value}'") from err
        return value
