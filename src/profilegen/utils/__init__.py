"""Profilegen utility modules.

- logging: Standardized logging with human/verbose/JSON modes
"""

from profilegen.utils.logging import configure_from_cli, get_logger, setup_logging

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
]
