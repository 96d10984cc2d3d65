# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

from pathlib import Path


class CompileBookError(Exception):
    """
    Base class for every error raised while compiling a book.
    """


class DirectoryNotFoundError(CompileBookError):
    """
    The chapters directory does not exist or is not a directory.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"chapters directory '{path}' does not exist")


class DirectoryUnreadableError(CompileBookError):
    """
    The chapters directory exists but could not be listed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not list chapters directory '{path}': {reason}")


class FileReadError(CompileBookError):
    """
    A single chapter file could not be read.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not read '{path}': {reason}")


class DecodeError(FileReadError):
    """
    A chapter file was read but its bytes are not valid text in the configured encoding.
    """


class RenderError(CompileBookError):
    """
    The markdown renderer is unavailable or failed to produce HTML.
    """

    def __init__(self, renderer: str, reason: str) -> None:
        self.renderer = renderer
        self.reason = reason
        super().__init__(f"renderer '{renderer}' failed: {reason}")


class WriteError(CompileBookError):
    """
    The rendered HTML could not be written to the output file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not write '{path}': {reason}")
