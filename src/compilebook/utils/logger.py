# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def init_logger(
    verbose: bool = False,
    log_file: str | os.PathLike[str] | None = None,
) -> logging.Logger:
    """
    Initialize the `compilebook` logger.

    Console output goes to stderr through rich so that stdout stays free for reports.
    When `log_file` is given, INFO and above are also appended to that file.
    """
    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_level=True,
        show_path=False,
    )
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    app_logger = logging.getLogger("compilebook")
    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = False  # Prevent double logging

    # Clear any existing handlers so repeated calls do not stack them
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    app_logger.addHandler(console_handler)

    if log_file is not None:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] - %(message)s")
        )
        app_logger.addHandler(file_handler)

    return app_logger
