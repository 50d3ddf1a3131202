import logging
import sys
from asyncio import AbstractEventLoop

from loguru import logger


class LoguruHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # 跳过 logging 模块自身的栈帧，让 loguru 显示真正的调用位置
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def loop_exception_handler(loop: AbstractEventLoop, context: dict) -> None:
    exception = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    logger.opt(exception=exception).error(f"[Core.loop] {message}")


def patch(loop: AbstractEventLoop | None = None, level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, enqueue=True)
    logging.basicConfig(handlers=[LoguruHandler()], level=0, force=True)
    for name in ("aiohttp.access", "aiohttp.server", "asyncio"):
        logging.getLogger(name).setLevel(level)
    if loop is not None:
        loop.set_exception_handler(loop_exception_handler)
