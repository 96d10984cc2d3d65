# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .errors import (
    DecodeError,
    DirectoryNotFoundError,
    DirectoryUnreadableError,
    FileReadError,
    WriteError,
)

logger = logging.getLogger("compilebook.files")


def discover_files(
    directory: str | os.PathLike[str],
    sort: bool = True,
    extensions: Iterable[str] | None = None,
) -> list[Path]:
    """
    List the chapter files inside `directory`.

    Hidden entries (names starting with `.`) and subdirectories are skipped.
    When `sort` is false the order is whatever the filesystem returns.
    When `extensions` is given, only files with one of those suffixes
    (case-insensitive, with or without the leading dot) are kept.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(root)

    wanted: set[str] | None = None
    if extensions is not None:
        wanted = {_normalize_extension(ext) for ext in extensions}

    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as err:
        raise DirectoryUnreadableError(root, err.strerror or str(err)) from err

    files: list[Path] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if not entry.is_file():
            logger.debug(f"ignoring non-file entry '{entry.path}'")
            continue
        path = Path(entry.path)
        if wanted is not None and path.suffix.lower() not in wanted:
            logger.debug(f"ignoring '{path}': extension not in {sorted(wanted)}")
            continue
        files.append(path)

    if sort:
        files.sort(key=lambda p: p.name)

    logger.info(f"discovered {len(files)} file(s) in '{root}'")
    return files


def read_file(path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
    """
    Read the full text of a chapter file.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as err:
        raise FileReadError(path, err.strerror or str(err)) from err

    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as err:
        raise DecodeError(path, f"not valid {encoding} text ({err.reason})") from err


def write_output(path: str | os.PathLike[str], content: str) -> int:
    """
    Write `content` to `path` as UTF-8, creating parent directories as needed.
    Returns the number of bytes written.
    """
    path = Path(path)
    data = content.encode("utf-8")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as err:
        raise WriteError(path, err.strerror or str(err)) from err

    logger.info(f"wrote {len(data)} bytes to '{path}'")
    return len(data)


def _normalize_extension(extension: str) -> str:
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"
