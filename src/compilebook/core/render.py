# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, Literal, Protocol

import markdown

from .errors import RenderError

if TYPE_CHECKING:
    from compilebook.config import BuildConfig

logger = logging.getLogger("compilebook.render")

RendererName = Literal["markdown", "subprocess"]

DEFAULT_RENDER_COMMAND: list[str] = [sys.executable, "-m", "markdown"]
DEFAULT_RENDER_TIMEOUT = 30.0


class Renderer(Protocol):
    name: str

    def render(self, text: str) -> str: ...


class MarkdownRenderer:
    """
    Render markdown in-process with the Python-Markdown library.
    """

    name = "markdown"

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        self.extensions = list(extensions or [])

    def render(self, text: str) -> str:
        logger.debug(
            f"rendering {len(text)} chars with Python-Markdown (extensions={self.extensions})"
        )
        try:
            return markdown.markdown(text, extensions=self.extensions)
        except (ImportError, AttributeError) as err:
            # raised by Python-Markdown when an extension name cannot be loaded
            raise RenderError(self.name, f"could not load extension: {err}") from err


class SubprocessRenderer:
    """
    Render markdown by piping it through an external command.

    The command receives UTF-8 markdown on stdin and must print UTF-8 HTML on stdout.
    Any non-zero exit status, a missing executable, a timeout, or output that
    is not valid UTF-8 is reported as a `RenderError` carrying the command's stderr.
    """

    name = "subprocess"

    def __init__(
        self,
        command: Sequence[str] | None = None,
        timeout: float = DEFAULT_RENDER_TIMEOUT,
    ) -> None:
        self.command = list(command if command is not None else DEFAULT_RENDER_COMMAND)
        if not self.command:
            raise ValueError("render command must not be empty")
        self.timeout = timeout

    def render(self, text: str) -> str:
        logger.debug(f"running {self.command} with timeout {self.timeout}s")
        try:
            completed = subprocess.run(
                self.command,
                input=text.encode("utf-8"),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
                # Python children otherwise decode stdin with their locale encoding
                env={**os.environ, "PYTHONIOENCODING": "utf-8"},
            )
        except FileNotFoundError as err:
            raise RenderError(
                self.name, f"command not found: '{self.command[0]}'"
            ) from err
        except subprocess.TimeoutExpired as err:
            raise RenderError(
                self.name, f"command timed out after {self.timeout}s"
            ) from err
        except OSError as err:
            raise RenderError(
                self.name, f"could not start '{self.command[0]}': {err}"
            ) from err

        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        if completed.returncode != 0:
            detail = f": {stderr}" if stderr else ""
            raise RenderError(
                self.name, f"command exited with status {completed.returncode}{detail}"
            )
        if stderr:
            logger.warning(f"renderer stderr: {stderr}")

        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError as err:
            raise RenderError(self.name, "command output is not valid UTF-8") from err


RENDERERS: dict[str, str] = {
    MarkdownRenderer.name: "in-process Python-Markdown library",
    SubprocessRenderer.name: "external command reading markdown on stdin (default: python -m markdown)",
}


def get_renderer(name: str, config: BuildConfig | None = None) -> Renderer:
    """
    Build the renderer called `name`, configured from `config` when given.
    """
    if name == MarkdownRenderer.name:
        extensions = config.markdown_extensions if config is not None else None
        return MarkdownRenderer(extensions=extensions)
    if name == SubprocessRenderer.name:
        if config is None:
            return SubprocessRenderer()
        return SubprocessRenderer(
            command=config.render_command, timeout=config.render_timeout
        )

    raise RenderError(
        name, f"unknown renderer, expected one of {sorted(RENDERERS)}"
    )
