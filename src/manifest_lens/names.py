from __future__ import annotations

_SEPARATORS = frozenset("-._")


def _lower_ascii(c: str) -> str:
    return c.lower() if c.isascii() else c


def get_python_dependency(raw: str) -> str | None:
    """
    从依赖声明字符串中提取规范化包名（小写、以单个 - 连接字母段）。

    版本约束、extras、环境标记、注释等都视为包名的终止符；
    首个非空白字符不是字母时（空行、注释、-r 等选项行）返回 None。
    包名中的数字同样终止扫描（例如 "py3dns" -> "py"）。

    “字母”以 str.isalpha() 为准（Unicode 类别 L*，不含 Nl 类的 "Ⅻ" 与组合元音符号），
    前导空白以 str.isspace() 为准（包含 \\x1c-\\x1f 分隔控制符）；只对 ASCII 字母做小写转换。
    """
    chars = iter(raw.lstrip())
    first = next(chars, None)
    if first is None or not first.isalpha():
        return None

    name = [_lower_ascii(first)]
    for c in chars:
        if c.isalpha():
            name.append(_lower_ascii(c))
        elif c in _SEPARATORS:
            follower = next(chars, None)
            if follower is None or not follower.isalpha():
                break
            name.append("-")
            name.append(_lower_ascii(follower))
        else:
            break
    return "".join(name)


def normalize_poetry_key(key: str) -> str:
    """
    规范化 Poetry 依赖表中的键（本身已是裸包名，不含版本约束）。
    """
    return key.lower().replace("_", "-").replace(".", "-")
