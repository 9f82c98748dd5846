from __future__ import annotations

from pathlib import Path

from manifest_lens.config import AppConfig
from manifest_lens.licenses import LicenseWeights
from manifest_lens.log import get_logger
from manifest_lens.models import DependencySource
from manifest_lens.names import get_python_dependency
from manifest_lens.pyproject import Pyproject
from manifest_lens.report import ScanReport
from manifest_lens.requirements import parse_requirements_txt

log = get_logger(__name__)

PYPROJECT_FILE_NAME = "pyproject.toml"


def _resolve_paths(path: Path) -> tuple[Path, Path]:
    """
    将输入路径拆分为 (pyproject.toml 路径, requirements.txt 所在目录)。
    """
    if path.is_dir():
        return path / PYPROJECT_FILE_NAME, path
    return path, path.parent


def _excluded_names(config: AppConfig) -> set[str]:
    return {name for name in map(get_python_dependency, config.exclude) if name is not None}


def scan_project(path: Path, *, config: AppConfig | None = None) -> ScanReport:
    """
    扫描项目清单与同目录下的 requirements.txt，合并依赖名与许可证。
    """
    config = config or AppConfig()
    pyproject_path, requirements_dir = _resolve_paths(path)

    name: str | None = None
    licenses: LicenseWeights = {}
    dependencies: set[str] = set()
    sources: list[DependencySource] = []

    manifest = Pyproject.from_path(pyproject_path) if pyproject_path.is_file() else None
    if manifest is not None:
        name = manifest.take_name()
        manifest.load_license(licenses)
        source = manifest.dependency_source()
        manifest_deps = manifest.take_dependencies()
        if manifest_deps is not None and source is not None:
            dependencies |= manifest_deps
            sources.append(source)
    else:
        log.info("%s 不存在或无法解析，仅使用 requirements.txt", pyproject_path)

    if config.include_requirements:
        requirements_deps = parse_requirements_txt(requirements_dir)
        if requirements_deps is not None:
            dependencies |= requirements_deps
            sources.append(DependencySource.REQUIREMENTS)

    dependencies -= _excluded_names(config)

    return ScanReport(
        path=str(path),
        name=name,
        dependencies=tuple(sorted(dependencies)),
        licenses=licenses,
        sources=tuple(sources),
    )
