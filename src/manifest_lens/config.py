from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    manifest-lens 的运行配置（可来自配置文件、环境变量与 CLI 参数合并）。
    """

    exclude: tuple[str, ...] = ()
    include_requirements: bool = True
    log_level: str = "WARNING"


_DEFAULT_CONFIG_FILES = (".manifest-lens.toml", ".manifest-lens.yaml")


def _read_settings(path: Path) -> dict[str, Any]:
    """
    读取配置文件（TOML 或 YAML）中的 manifest_lens 表；格式不符时返回空字典。
    """
    if path.suffix.lower() == ".toml":
        data: Any = tomllib.loads(path.read_text(encoding="utf-8"))
    elif path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        return {}
    settings = data.get("manifest_lens") if isinstance(data, dict) else None
    return settings if isinstance(settings, dict) else {}


def _settings_from(config_path: str | None) -> dict[str, Any]:
    if config_path:
        return _read_settings(Path(config_path))
    for name in _DEFAULT_CONFIG_FILES:
        path = Path.cwd() / name
        if path.is_file():
            return _read_settings(path)
    return {}


def _env_exclude() -> tuple[str, ...]:
    raw = os.environ.get("MANIFEST_LENS_EXCLUDE") or ""
    return tuple(n.strip() for n in raw.split(",") if n.strip())


def normalize_log_level(value: str | None) -> str:
    """
    规范化日志级别名称，非法值回退为 WARNING。
    """
    level = str(value or "").strip().upper()
    return level if level in _LOG_LEVELS else "WARNING"


def load_config(config_path: str | None) -> AppConfig:
    """
    从配置文件与环境变量加载 AppConfig（环境变量优先）。
    """
    settings = _settings_from(config_path)

    exclude = _env_exclude() or tuple(str(n) for n in settings.get("exclude") or [])
    include_requirements = bool(settings.get("include_requirements", True))
    log_level = normalize_log_level(
        os.environ.get("MANIFEST_LENS_LOG_LEVEL") or settings.get("log_level")
    )

    return AppConfig(
        exclude=exclude,
        include_requirements=include_requirements,
        log_level=log_level,
    )
