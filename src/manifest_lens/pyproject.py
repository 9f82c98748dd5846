from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from manifest_lens.licenses import LicenseWeights, insert_licenses, parse_spdx_expression
from manifest_lens.log import get_logger
from manifest_lens.models import MANIFEST_LICENSE_SOURCE, DependencySource
from manifest_lens.names import get_python_dependency, normalize_poetry_key

log = get_logger(__name__)

_POETRY_PYTHON_KEY = "python"


@dataclass(slots=True)
class ProjectSection:
    """
    PEP 621 [project] 表中与审计相关的字段。
    """

    name: str | None = None
    license: str | None = None
    dependencies: list[str] | None = None


@dataclass(slots=True)
class PoetrySection:
    """
    [tool.poetry] 表中与审计相关的字段（依赖表的值不参与处理）。
    """

    name: str | None = None
    license: str | None = None
    dependencies: dict[str, Any] | None = None


def _optional_str(table: dict[str, Any], key: str, *, where: str) -> str | None:
    """
    读取字符串字段；类型不符时视为缺失。
    """
    value = table.get(key)
    if value is None or isinstance(value, str):
        return value
    log.debug("%s.%s 不是字符串，已忽略", where, key)
    return None


def _table(data: Any, key: str) -> dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _project_section(table: dict[str, Any]) -> ProjectSection:
    deps_raw = table.get("dependencies")
    dependencies: list[str] | None = None
    if isinstance(deps_raw, list):
        dependencies = [d for d in deps_raw if isinstance(d, str)]
    elif deps_raw is not None:
        log.warning("project.dependencies 不是数组，已忽略")
    return ProjectSection(
        name=_optional_str(table, "name", where="project"),
        license=_optional_str(table, "license", where="project"),
        dependencies=dependencies,
    )


def _poetry_section(table: dict[str, Any]) -> PoetrySection:
    deps_raw = table.get("dependencies")
    dependencies: dict[str, Any] | None = None
    if isinstance(deps_raw, dict):
        dependencies = dict(deps_raw)
    elif deps_raw is not None:
        log.warning("tool.poetry.dependencies 不是表，已忽略")
    return PoetrySection(
        name=_optional_str(table, "name", where="tool.poetry"),
        license=_optional_str(table, "license", where="tool.poetry"),
        dependencies=dependencies,
    )


@dataclass(slots=True)
class Pyproject:
    """
    pyproject.toml 的审计视图：名称、许可证与依赖分别按 [project] 优先、
    [tool.poetry] 兜底的顺序逐字段选择；名称与依赖只能取走一次。
    """

    project: ProjectSection = field(default_factory=ProjectSection)
    poetry: PoetrySection = field(default_factory=PoetrySection)

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> Pyproject:
        """
        从已解码的 TOML 字典构造；形状不符的字段视为缺失，不影响其余字段。
        """
        return cls(
            project=_project_section(_table(data, "project")),
            poetry=_poetry_section(_table(_table(data, "tool"), "poetry")),
        )

    @classmethod
    def from_path(cls, path: Path) -> Pyproject | None:
        """
        读取并解析 pyproject.toml；文件不可读或 TOML 非法时记录 warning 并返回 None。
        """
        try:
            content = path.read_bytes()
        except OSError as exc:
            log.warning("无法读取 %s：%s", path, exc)
            return None
        try:
            data = tomllib.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            log.warning("无法解析 %s：%s", path, exc)
            return None
        return cls.from_data(data)

    def take_name(self) -> str | None:
        """
        取走项目名称（[project] 优先）。
        """
        name = self.project.name if self.project.name is not None else self.poetry.name
        self.project.name = None
        self.poetry.name = None
        return name

    def load_license(self, licenses: LicenseWeights) -> None:
        """
        将声明的许可证写入权重表（[project] 优先），每个标识权重为 1.0。
        """
        text = self.project.license if self.project.license is not None else self.poetry.license
        if text is None:
            return
        insert_licenses(licenses, parse_spdx_expression(text, MANIFEST_LICENSE_SOURCE))

    def dependency_source(self) -> DependencySource | None:
        """
        返回 take_dependencies() 将使用的依赖来源。
        """
        if self.project.dependencies is not None:
            return DependencySource.PROJECT
        if self.poetry.dependencies is not None:
            return DependencySource.POETRY
        return None

    def take_dependencies(self) -> set[str] | None:
        """
        取走依赖名集合；[project] 有依赖列表时完全忽略 Poetry 依赖表。

        两处都没有依赖信息时返回 None，与“有依赖信息但为空”的 set() 区分。
        """
        project_deps = self.project.dependencies
        poetry_deps = self.poetry.dependencies
        self.project.dependencies = None
        self.poetry.dependencies = None

        if project_deps is not None:
            return {name for name in map(get_python_dependency, project_deps) if name is not None}
        if poetry_deps is not None:
            poetry_deps.pop(_POETRY_PYTHON_KEY, None)
            return {normalize_poetry_key(key) for key in poetry_deps}
        return None
