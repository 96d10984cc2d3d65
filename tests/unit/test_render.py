# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

import sys

import pytest

from compilebook.config import BuildConfig
from compilebook.core.errors import RenderError
from compilebook.core.render import (
    DEFAULT_RENDER_COMMAND,
    MarkdownRenderer,
    SubprocessRenderer,
    get_renderer,
)


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def test_markdown_renderer_converts_heading() -> None:
    """
    Test that the in-process renderer turns a heading into `<h1>`.
    """
    html = MarkdownRenderer().render("# This is a title")
    assert html == "<h1>This is a title</h1>"


def test_markdown_renderer_renders_both_headings() -> None:
    html = MarkdownRenderer().render("# intro\n# Title\n")
    assert "<h1>intro</h1>" in html
    assert "<h1>Title</h1>" in html
    assert html.index("<h1>intro</h1>") < html.index("<h1>Title</h1>")


def test_markdown_renderer_empty_document() -> None:
    assert MarkdownRenderer().render("").strip() == ""


def test_markdown_renderer_uses_extensions() -> None:
    """
    Test that configured Python-Markdown extensions are applied.
    """
    text = "| a | b |\n|---|---|\n| 1 | 2 |\n"
    assert "<table>" not in MarkdownRenderer().render(text)
    assert "<table>" in MarkdownRenderer(extensions=["tables"]).render(text)


def test_markdown_renderer_unknown_extension() -> None:
    with pytest.raises(RenderError) as exc:
        MarkdownRenderer(extensions=["no_such_extension_xyz"]).render("# x")
    assert exc.value.renderer == "markdown"


def test_subprocess_renderer_default_command() -> None:
    """
    Test that the default command pipes markdown through `python -m markdown`.
    """
    renderer = SubprocessRenderer()
    assert renderer.command == DEFAULT_RENDER_COMMAND

    html = renderer.render("# intro\n# Title\n")

    assert "<h1>intro</h1>" in html
    assert "<h1>Title</h1>" in html


def test_subprocess_renderer_empty_document() -> None:
    assert SubprocessRenderer().render("").strip() == ""


def test_subprocess_renderer_passes_utf8_through() -> None:
    renderer = SubprocessRenderer(
        command=_python("import sys; sys.stdout.buffer.write(sys.stdin.buffer.read())")
    )
    assert renderer.render("héllo ü 漢字") == "héllo ü 漢字"


def test_subprocess_renderer_default_command_ignores_child_locale(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    Test that non-ASCII chapters survive the default command under a non-UTF-8 stdio encoding.
    """
    monkeypatch.setenv("PYTHONIOENCODING", "latin-1")

    html = SubprocessRenderer().render("# café")

    assert html.strip() == "<h1>café</h1>"


def test_subprocess_renderer_non_zero_exit() -> None:
    """
    Test that a failing command raises `RenderError` carrying its stderr.
    """
    renderer = SubprocessRenderer(
        command=_python("import sys; sys.stderr.write('boom'); sys.exit(3)")
    )

    with pytest.raises(RenderError) as exc:
        renderer.render("# x")
    assert "status 3" in exc.value.reason
    assert "boom" in exc.value.reason


def test_subprocess_renderer_missing_executable() -> None:
    renderer = SubprocessRenderer(command=["/nonexistent/compilebook-renderer"])

    with pytest.raises(RenderError) as exc:
        renderer.render("# x")
    assert "not found" in exc.value.reason


def test_subprocess_renderer_timeout() -> None:
    """
    Test that a hung command is stopped and reported.
    """
    renderer = SubprocessRenderer(
        command=_python("import time; time.sleep(10)"), timeout=0.5
    )

    with pytest.raises(RenderError) as exc:
        renderer.render("# x")
    assert "timed out" in exc.value.reason


def test_subprocess_renderer_undecodable_output() -> None:
    renderer = SubprocessRenderer(
        command=_python("import sys; sys.stdout.buffer.write(b'\\xff\\xfe')")
    )

    with pytest.raises(RenderError) as exc:
        renderer.render("# x")
    assert "UTF-8" in exc.value.reason


def test_subprocess_renderer_rejects_empty_command() -> None:
    with pytest.raises(ValueError):
        SubprocessRenderer(command=[])


def test_get_renderer_builds_from_config() -> None:
    """
    Test that `get_renderer` wires config values into each backend.
    """
    config = BuildConfig(
        render_command=_python("print('x')"),
        render_timeout=5.0,
        markdown_extensions=["tables"],
    )

    in_process = get_renderer("markdown", config)
    external = get_renderer("subprocess", config)

    assert isinstance(in_process, MarkdownRenderer)
    assert in_process.extensions == ["tables"]
    assert isinstance(external, SubprocessRenderer)
    assert external.command == _python("print('x')")
    assert external.timeout == 5.0


def test_get_renderer_unknown_name() -> None:
    with pytest.raises(RenderError) as exc:
        get_renderer("pandoc")
    assert "unknown renderer" in exc.value.reason
