"""
Boot Code VM: Runtime Configuration
=====================================

Defaults for logging and the bootvm command line. CLI flags override
these per invocation; nothing is read from the environment.
"""

import logging

# =============================================================================
#  LOGGING
# =============================================================================
LOG_NAME = "bootcode"
LOG_LEVEL = logging.DEBUG              # Logger level (handlers filter further)
CONSOLE_LEVEL = logging.WARNING        # Console shows warnings and up by default
VERBOSE_CONSOLE_LEVEL = logging.DEBUG  # --verbose
FILE_LEVEL = logging.DEBUG             # Log files capture everything

LOG_FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
LOG_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_STAMP = "%Y%m%d_%H%M%S"       # <log_dir>/<name>_<stamp>.log


# =============================================================================
#  PROGRAM FILES
# =============================================================================
PROGRAM_ENCODING = "utf-8"
COMMENT_PREFIX = "#"


# =============================================================================
#  EXIT CODES (bootvm)
# =============================================================================
EXIT_OK = 0          # Terminated, or repaired
EXIT_INPUT = 1       # File missing / unreadable / parse error
EXIT_INTERNAL = 2    # Unexpected exception
EXIT_LOOPED = 3
EXIT_FAULT = 4
EXIT_EXHAUSTED = 5
