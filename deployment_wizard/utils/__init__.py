"""Utility functions for the deployment wizard."""

from deployment_wizard.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
