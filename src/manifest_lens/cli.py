from __future__ import annotations

import argparse
from pathlib import Path
import sys

from manifest_lens.config import AppConfig, load_config, normalize_log_level
from manifest_lens.log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """
    构建 manifest-lens 的命令行参数解析器。
    """
    parser = argparse.ArgumentParser(prog="manifest-lens")
    parser.add_argument(
        "--version",
        action="store_true",
        help="输出版本号并退出",
    )
    parser.add_argument("--config", help="配置文件路径（.toml 或 .yaml）")
    parser.add_argument("--log-level", help="日志级别（默认：WARNING）")
    parser.add_argument("--exclude", action="append", default=[], help="从结果中排除的包名（可重复）")
    parser.add_argument(
        "--no-requirements",
        action="store_true",
        help="不读取同目录下的 requirements.txt",
    )

    subparsers = parser.add_subparsers(dest="command")

    scan = subparsers.add_parser("scan", help="提取依赖名与许可证并输出报告")
    scan.add_argument("path", nargs="?", default=".", help="项目目录或 pyproject.toml 路径（默认：当前目录）")
    scan.add_argument("--format", choices=["table", "json", "md"], default="table", help="输出格式")
    scan.add_argument("--output", help="输出到文件（默认 stdout）")

    return parser


def _merge_cli_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    将 CLI 参数覆盖合并到 AppConfig。
    """
    exclude = tuple([*cfg.exclude, *(args.exclude or [])])
    include_requirements = cfg.include_requirements and not bool(args.no_requirements)
    log_level = cfg.log_level if args.log_level is None else normalize_log_level(args.log_level)
    return AppConfig(
        exclude=exclude,
        include_requirements=include_requirements,
        log_level=log_level,
    )


def main(argv: list[str] | None = None) -> int:
    """
    manifest-lens 命令行入口。
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from manifest_lens import __version__

        print(__version__)
        return 0

    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    cfg = _merge_cli_overrides(load_config(args.config), args)
    configure_logging(cfg.log_level)

    if args.command == "scan":
        from manifest_lens.app import scan_project
        from manifest_lens.formatters import print_table, render_json, render_markdown

        path = Path(args.path)
        if not path.exists():
            print(f"manifest-lens: 路径不存在：{path}", file=sys.stderr)
            return 2
        try:
            report = scan_project(path, config=cfg)
        except Exception as exc:
            print(f"manifest-lens: 扫描失败：{exc}", file=sys.stderr)
            return 1
        output_path = getattr(args, "output", None)
        if args.format == "table":
            if output_path:
                with open(output_path, "w", encoding="utf-8") as f:
                    print_table(report, file=f)
            else:
                print_table(report)
            return 0
        if args.format == "json":
            text = render_json(report)
        else:
            text = render_markdown(report)
        if output_path:
            Path(output_path).write_text(text, encoding="utf-8")
        else:
            print(text)
        return 0

    print(f"manifest-lens: 未知子命令 {args.command!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
