# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Literal

TransformFunction = Callable[[Path, str], str]
TransformName = Literal["title", "none"]

TITLE_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")


def derive_title(path: Path) -> str:
    """
    Derive a chapter title from a file name by dropping a known extension.
    Names without a known extension are returned unchanged.
    """
    name = path.name
    if path.suffix.lower() in TITLE_EXTENSIONS:
        return name[: -len(path.suffix)]
    return name


def title_transform(path: Path, content: str) -> str:
    """
    Prefix the chapter with a level-one heading named after the file.
    """
    return f"# {derive_title(path)}\n{content}\n"


def identity_transform(path: Path, content: str) -> str:  # noqa: ARG001
    return content


TRANSFORMS: dict[str, TransformFunction | None] = {
    "title": title_transform,
    "none": None,
}


def get_transform(name: str) -> TransformFunction | None:
    """
    Look up a transform by name. `"none"` maps to no transform at all.
    """
    try:
        return TRANSFORMS[name]
    except KeyError as err:
        raise ValueError(
            f"unknown transform '{name}', expected one of {sorted(TRANSFORMS)}"
        ) from err
