"""
Reader for the ``.env`` file holding scenario placeholder values.

The file is line oriented: ``KEY=VALUE`` pairs, blank lines and lines
starting with ``#`` ignored. Only the first ``=`` separates the key, so
values may contain ``=`` themselves. Keys and values are trimmed; no
quoting or variable expansion is applied.
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from uiscenario.runner.errors import EnvFileNotFoundError


def parse_env_lines(lines: Iterable[str]) -> Dict[str, str]:
    env_vars: Dict[str, str] = {}
    for line in lines:
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        key, _, value = trimmed.partition("=")
        key = key.strip()
        if key:
            env_vars[key] = value.strip()
    return env_vars


def load_env_file(path: str) -> Mapping[str, str]:
    """
    Load placeholder values from ``path``.

    The returned mapping is read-only so it can be shared between
    concurrently running scenarios.

    :raises EnvFileNotFoundError: If no file exists at ``path``
    """
    abs_path = os.path.abspath(path)
    if not os.path.isfile(abs_path):
        raise EnvFileNotFoundError(abs_path)
    with open(abs_path, "r", encoding="utf-8") as f:
        return MappingProxyType(parse_env_lines(f))
