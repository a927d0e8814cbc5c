# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Slotwise."""
import logging

logger: logging.Logger = logging.getLogger("slotwise")
