# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from compilebook.config import BuildConfig
from compilebook.core import (
    SkippedFile,
    aggregate,
    discover_files,
    get_renderer,
    get_transform,
    write_output,
)

logger = logging.getLogger("compilebook.pipeline")


class BuildResult(BaseModel):
    output_file: Path
    renderer: str
    included: list[Path] = Field(default_factory=list)
    skipped: list[SkippedFile] = Field(default_factory=list)
    bytes_written: int = 0


def build_book(config: BuildConfig | None = None) -> BuildResult:
    """
    Compile every chapter in `config.input_dir` into one HTML file.

    Runs discover, aggregate, render and write in that order.
    Discovery, render and write errors propagate as `CompileBookError`s and
    nothing is written; unreadable chapters are skipped and listed in
    `BuildResult.skipped` unless `config.strict` is set.
    """
    if config is None:
        config = BuildConfig()

    # build the renderer first so that an unknown backend fails before any I/O
    renderer = get_renderer(config.renderer, config)
    transform = get_transform(config.transform)

    logger.info(f"discovering chapters in '{config.input_dir}'")
    paths = discover_files(
        config.input_dir, sort=config.sort, extensions=config.extensions
    )
    if not paths:
        logger.warning(f"no chapter files found in '{config.input_dir}'")

    document = aggregate(
        paths, transform=transform, encoding=config.encoding, strict=config.strict
    )
    logger.info(
        f"aggregated {len(document.included)} file(s) into {len(document.content)} chars"
    )

    logger.info(f"rendering with '{renderer.name}'")
    html = renderer.render(document.content)

    bytes_written = write_output(config.output_file, html)

    return BuildResult(
        output_file=config.output_file,
        renderer=renderer.name,
        included=document.included,
        skipped=document.skipped,
        bytes_written=bytes_written,
    )
