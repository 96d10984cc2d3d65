# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """
    Get the installed version of compilebook.
    """
    try:
        return version("compilebook")
    except PackageNotFoundError:
        return "0.0.0+unknown"
