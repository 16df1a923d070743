"""Logging setup.

Logs go to stderr: stdout carries the item list or status text read by
the launcher.
"""

import logging.config
import os


def debug_requested() -> bool:
    """True when the launcher's debugger is open."""
    return os.environ.get('alfred_debug') == '1'


def configure_logging(debug: bool = False):
    """Configure logging for the core, models and commands packages."""
    level = 'DEBUG' if debug or debug_requested() else 'WARNING'

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                'datefmt': '%H:%M:%S',
            },
        },
        'handlers': {
            'stderr': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'stream': 'ext://sys.stderr',
            },
        },
        'loggers': {
            name: {'level': level, 'handlers': ['stderr'], 'propagate': False}
            for name in ('core', 'models', 'commands', 'hue_launcher')
        },
    })
