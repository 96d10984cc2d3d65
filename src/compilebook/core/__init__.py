from .aggregate import (
    AggregateResult,
    SkippedFile,
    aggregate,
)
from .errors import (
    CompileBookError,
    DecodeError,
    DirectoryNotFoundError,
    DirectoryUnreadableError,
    FileReadError,
    RenderError,
    WriteError,
)
from .files import (
    discover_files,
    read_file,
    write_output,
)
from .render import (
    MarkdownRenderer,
    Renderer,
    SubprocessRenderer,
    get_renderer,
)
from .transforms import (
    TransformFunction,
    derive_title,
    get_transform,
    identity_transform,
    title_transform,
)

__all__ = [
    "AggregateResult",
    "SkippedFile",
    "aggregate",
    "CompileBookError",
    "DecodeError",
    "DirectoryNotFoundError",
    "DirectoryUnreadableError",
    "FileReadError",
    "RenderError",
    "WriteError",
    "discover_files",
    "read_file",
    "write_output",
    "MarkdownRenderer",
    "Renderer",
    "SubprocessRenderer",
    "get_renderer",
    "TransformFunction",
    "derive_title",
    "get_transform",
    "identity_transform",
    "title_transform",
]
