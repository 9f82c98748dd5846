from __future__ import annotations

from pathlib import Path

import pytest

from manifest_lens.config import load_config


def test_load_config_finds_default_toml_in_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    未显式指定 config_path 时，应在当前目录自动探测默认配置文件。
    """
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".manifest-lens.toml").write_text(
        """
[manifest_lens]
exclude = ["a", "b"]
include_requirements = false
log_level = "debug"
        """.strip()
        + "\n",
        encoding="utf-8",
    )

    cfg = load_config(None)
    assert cfg.exclude == ("a", "b")
    assert cfg.include_requirements is False
    assert cfg.log_level == "DEBUG"


def test_load_config_default_yaml_when_toml_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    TOML 不存在时，应能探测并读取默认 YAML 配置文件。
    """
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".manifest-lens.yaml").write_text(
        """
manifest_lens:
  exclude:
    - setuptools
  log_level: INFO
        """.strip()
        + "\n",
        encoding="utf-8",
    )

    cfg = load_config(None)
    assert cfg.exclude == ("setuptools",)
    assert cfg.include_requirements is True
    assert cfg.log_level == "INFO"


def test_load_config_yaml_non_dict_is_ignored(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    YAML 顶层非 dict 时应被忽略并回退到默认值。
    """
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".manifest-lens.yaml").write_text("- 1\n- 2\n", encoding="utf-8")
    cfg = load_config(None)
    assert cfg.exclude == ()
    assert cfg.log_level == "WARNING"


def test_load_config_env_overrides_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    环境变量的配置应覆盖配置文件中的同名字段。
    """
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        """
[manifest_lens]
exclude = ["from-file"]
log_level = "ERROR"
        """.strip()
        + "\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MANIFEST_LENS_EXCLUDE", "pip, setuptools")
    monkeypatch.setenv("MANIFEST_LENS_LOG_LEVEL", "info")

    cfg = load_config(str(config_path))
    assert cfg.exclude == ("pip", "setuptools")
    assert cfg.log_level == "INFO"


def test_load_config_invalid_log_level_falls_back(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    log_level 配置非法值时应回退为 WARNING。
    """
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".manifest-lens.toml").write_text(
        """
[manifest_lens]
log_level = "loud"
        """.strip()
        + "\n",
        encoding="utf-8",
    )
    cfg = load_config(None)
    assert cfg.log_level == "WARNING"


def test_load_config_only_dot_files_are_discovered(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """
    自动探测只识别 .manifest-lens.toml / .manifest-lens.yaml，其它文件需通过 config_path 指定。
    """
    monkeypatch.chdir(tmp_path)
    other = tmp_path / "manifest-lens.yml"
    other.write_text("manifest_lens:\n  exclude: [pip]\n", encoding="utf-8")
    assert load_config(None).exclude == ()
    assert load_config(str(other)).exclude == ("pip",)
