from __future__ import annotations

import json
from typing import Any, TextIO

from rich.console import Console
from rich.table import Table

from manifest_lens.report import ScanReport


def report_to_json_obj(report: ScanReport) -> dict[str, Any]:
    """
    将报告转换为可 JSON 序列化的字典结构。
    """
    return {
        "path": report.path,
        "name": report.name,
        "dependencies": list(report.dependencies) if report.has_dependency_info else None,
        "licenses": dict(sorted(report.licenses.items())),
        "sources": [s.value for s in report.sources],
    }


def render_json(report: ScanReport) -> str:
    """
    渲染 JSON 输出。
    """
    return json.dumps(report_to_json_obj(report), ensure_ascii=False, indent=2)


def _licenses_text(report: ScanReport) -> str:
    return ", ".join(sorted(report.licenses)) or "-"


def render_markdown(report: ScanReport) -> str:
    """
    渲染 Markdown 报告（基本信息 + 依赖表格）。
    """
    sources = ", ".join(s.value for s in report.sources) or "-"
    lines: list[str] = []
    lines.append(
        f"# manifest-lens 报告\n\n- 路径：`{report.path}`\n- 项目：{report.name or '-'}\n"
        f"- 许可证：{_licenses_text(report)}\n- 依赖来源：{sources}\n"
    )
    if not report.has_dependency_info:
        lines.append("未找到依赖信息。")
        return "\n".join(lines) + "\n"
    lines.append("| # | 依赖 |")
    lines.append("|---|---|")
    for i, name in enumerate(report.dependencies, start=1):
        lines.append(f"| {i} | {name} |")
    return "\n".join(lines) + "\n"


def print_table(report: ScanReport, *, file: TextIO | None = None) -> None:
    """
    以控制台表格形式输出报告。
    """
    console = Console(file=file)
    table = Table(title=f"manifest-lens：{report.name or report.path}")
    table.add_column("#", no_wrap=True, justify="right")
    table.add_column("依赖", no_wrap=True)
    for i, name in enumerate(report.dependencies, start=1):
        table.add_row(str(i), name)
    console.print(table)
    if not report.has_dependency_info:
        console.print("未找到依赖信息。")
    console.print(f"许可证：{_licenses_text(report)}")
