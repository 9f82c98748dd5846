from __future__ import annotations

from enum import Enum


class DependencySource(str, Enum):
    """
    依赖名的来源。
    """

    PROJECT = "project"
    POETRY = "poetry"
    REQUIREMENTS = "requirements"


MANIFEST_LICENSE_SOURCE = "pyproject.toml"
REQUIREMENTS_FILE_NAME = "requirements.txt"
