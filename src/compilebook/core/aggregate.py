# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field

from .errors import FileReadError
from .files import read_file
from .transforms import TransformFunction, identity_transform

logger = logging.getLogger("compilebook.aggregate")


class SkippedFile(BaseModel):
    path: Path
    reason: str


class AggregateResult(BaseModel):
    """
    The combined markdown document, plus which files made it in and which did not.
    """

    content: str = ""
    included: list[Path] = Field(default_factory=list)
    skipped: list[SkippedFile] = Field(default_factory=list)


def aggregate(
    paths: Iterable[Path],
    transform: TransformFunction | None = None,
    encoding: str = "utf-8",
    strict: bool = False,
) -> AggregateResult:
    """
    Concatenate the files at `paths`, in order, into a single document.

    Each file is read and passed through `transform` (identity when `None`)
    before being appended; no separator is inserted between files.
    A file that cannot be read is skipped with a warning and recorded in
    `AggregateResult.skipped`, unless `strict` is set, in which case the
    `FileReadError` propagates and aggregation stops.
    """
    apply = transform or identity_transform
    parts: list[str] = []
    result = AggregateResult()

    for path in paths:
        path = Path(path)
        try:
            raw = read_file(path, encoding=encoding)
        except FileReadError as err:
            if strict:
                raise
            logger.warning(f"skipping '{path}': {err.reason}")
            result.skipped.append(SkippedFile(path=path, reason=err.reason))
            continue

        parts.append(apply(path, raw))
        result.included.append(path)
        logger.debug(f"appended '{path}' ({len(raw)} chars)")

    result.content = "".join(parts)
    return result
