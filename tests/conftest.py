# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from compilebook.config.build import CONFIG_ENV_VAR, _load_defaults_from_toml


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """
    Run every test from an empty working directory with no config file in reach.
    """
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    _load_defaults_from_toml.cache_clear()
    yield
    _load_defaults_from_toml.cache_clear()


@pytest.fixture(autouse=True)
def reset_logger():
    """
    Undo `init_logger` so that later tests can still capture records with `caplog`.
    """
    yield
    app_logger = logging.getLogger("compilebook")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def make_chapters(tmp_path: Path) -> Callable[..., Path]:
    """
    Create a chapters directory from a mapping of file name to content.
    `bytes` values are written as-is, `str` values as UTF-8.
    """

    def _make(files: dict[str, str | bytes], name: str = "chapters") -> Path:
        directory = tmp_path / name
        directory.mkdir(exist_ok=True)
        for filename, content in files.items():
            path = directory / filename
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return directory

    return _make
