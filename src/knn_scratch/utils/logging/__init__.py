"""Common logging utilities."""

from knn_scratch.utils.logging.console import console as console
from knn_scratch.utils.logging.console import error_console as error_console
from knn_scratch.utils.logging.logger import logger as logger
from knn_scratch.utils.logging.logger import setup_logger as setup_logger
