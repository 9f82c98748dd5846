from __future__ import annotations

import io
import json

from manifest_lens.formatters import print_table, render_json, render_markdown, report_to_json_obj
from manifest_lens.models import DependencySource
from manifest_lens.report import ScanReport


def _make_report(*, sources: tuple[DependencySource, ...] = (DependencySource.PROJECT,)) -> ScanReport:
    """
    构造一份用于 formatter 测试的最小报告。
    """
    return ScanReport(
        path="demo",
        name="demo",
        dependencies=("httpx", "rich") if sources else (),
        licenses={"MIT": 1.0, "Apache-2.0": 1.0},
        sources=sources,
    )


def test_report_to_json_obj_converts_enums_to_strings() -> None:
    """
    JSON 对象应可序列化：Enum 字段需转换为字符串，许可证按标识排序。
    """
    obj = report_to_json_obj(_make_report())
    assert obj["sources"] == ["project"]
    assert obj["dependencies"] == ["httpx", "rich"]
    assert list(obj["licenses"]) == ["Apache-2.0", "MIT"]
    assert json.loads(render_json(_make_report())) == obj


def test_report_to_json_obj_without_dependency_info_uses_null() -> None:
    """
    没有依赖信息时 dependencies 为 null，与空列表区分。
    """
    assert report_to_json_obj(_make_report(sources=()))["dependencies"] is None


def test_render_markdown_contains_summary_and_table_rows() -> None:
    """
    Markdown 渲染应包含基本信息与依赖表格。
    """
    md = render_markdown(_make_report())
    assert "manifest-lens 报告" in md
    assert "许可证：Apache-2.0, MIT" in md
    assert "依赖来源：project" in md
    assert "| 1 | httpx |" in md
    assert "| 2 | rich |" in md


def test_print_table_writes_to_file() -> None:
    """
    表格输出应写入指定的文件对象。
    """
    buf = io.StringIO()
    print_table(_make_report(sources=()), file=buf)
    text = buf.getvalue()
    assert "未找到依赖信息" in text
    assert "Apache-2.0, MIT" in text
