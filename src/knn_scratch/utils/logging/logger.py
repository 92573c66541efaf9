"""Loguru logger configuration.

The library only ever logs through loguru at DEBUG level. Nothing is emitted
until an application calls `setup_logger`, which routes records through the
rich error console so they do not interleave with regular output.
"""

from loguru import logger

from knn_scratch.utils.logging.console import error_console

logger.disable("knn_scratch")


def setup_logger(level: str = "INFO"):
    """Enable package logging at the given level.

    Args:
        level: The minimum loguru level to emit.

    Returns:
        The configured loguru logger.
    """
    logger.remove()
    logger.add(
        lambda msg: error_console.print(msg, end="", markup=False, highlight=False),
        level=level,
        colorize=False,
        format="{time:HH:mm:ss} | {level: <7} | {name}:{function} - {message}",
    )
    logger.enable("knn_scratch")
    return logger
