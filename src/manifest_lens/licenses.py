from __future__ import annotations

from collections.abc import Iterable

from license_expression import ExpressionError, LicenseWithExceptionSymbol, get_spdx_licensing

from manifest_lens.log import get_logger

log = get_logger(__name__)

LicenseWeights = dict[str, float]
"""
SPDX 许可证标识 -> 权重；重复插入时覆盖而非累加。
"""

_licensing = get_spdx_licensing()


def parse_spdx_expression(text: str, source: str) -> set[str]:
    """
    解析 SPDX 许可证表达式，返回其中出现的规范化标识集合。

    "/" 按旧式写法视为 OR；语法错误或未知标识只记录 warning，不抛出异常。
    """
    expression = text.replace("/", " OR ").strip()
    if not expression:
        return set()

    try:
        parsed = _licensing.parse(expression, validate=False)
    except ExpressionError as exc:
        log.warning("%s: 无法解析许可证表达式 %r：%s", source, text, exc)
        return set()
    if parsed is None:
        return set()

    unknown = set(_licensing.unknown_license_keys(parsed))
    if unknown:
        log.warning("%s: 未知的 SPDX 许可证标识 %s", source, ", ".join(sorted(unknown)))
    licenses: set[str] = set()
    for symbol in _licensing.license_symbols(parsed, decompose=False):
        # X WITH Y 只记录许可证 X，例外条款 Y 不是许可证
        if isinstance(symbol, LicenseWithExceptionSymbol):
            symbol = symbol.license_symbol
        if symbol.key not in unknown:
            licenses.add(symbol.key)
    return licenses


def insert_licenses(into: LicenseWeights, licenses: Iterable[str], *, weight: float = 1.0) -> None:
    """
    将许可证标识写入权重表（已存在的标识直接覆盖权重）。
    """
    for license_id in licenses:
        into[license_id] = weight
