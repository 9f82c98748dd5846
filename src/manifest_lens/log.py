from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "manifest_lens"

# 未配置日志时，库内的 warning 不应打印到 stderr
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """
    返回 manifest_lens 命名空间下的 logger。
    """
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """
    为包 logger 安装输出到 stderr 的 rich 日志处理器（重复调用不会叠加处理器）。
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
