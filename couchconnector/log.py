'''
Logging utilities.

Every module of couchconnector logs on its own named logger, children of
the ``couchconnector`` logger. The :func:`configured_logger` function
applies the :data:`LOGGING_CONFIG` template to one of them.
'''
import logging
from logging.config import dictConfig
from copy import deepcopy
from threading import Lock


LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': ('%(asctime)s [p=%(process)s, t=%(thread)s,'
                       ' %(levelname)s, %(name)s] %(message)s'),
            'datefmt': '%H:%M:%S'
        },
        'simple': {
            'format': '%(asctime)s %(levelname)s %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'level_message': {'format': '%(levelname)s - %(message)s'},
        'message': {'format': '%(message)s'}
    },
    'handlers': {
        'silent': {
            'class': 'couchconnector.log.Silence',
        },
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose'
        },
        'console_level_message': {
            'class': 'logging.StreamHandler',
            'formatter': 'level_message'
        }
    },
    'loggers': {
        'httpx': {
            'level': 'WARNING'
        }
    }
}

_lock = Lock()
_configured = set()


class Silence(logging.Handler):
    def emit(self, record):
        pass


def get_level(level):
    try:
        return int(level)
    except TypeError:
        return logging.NOTSET
    except ValueError:
        lv = str(level).upper()
        level = logging.getLevelName(lv)
        return level if isinstance(level, int) else logging.NOTSET


def configured_logger(name=None, level=None, handlers=None, config=None):
    '''Configured logger.

    The logger at ``name`` (``couchconnector`` by default) is configured
    only once per process. When no valid ``level`` is given the logger is
    attached to the ``silent`` handler.
    '''
    name = name or 'couchconnector'
    with _lock:
        if name in _configured:
            return logging.getLogger(name)
        level = get_level(level)
        if level == logging.NOTSET:
            handlers = ['silent']
        cfg = {'level': logging.getLevelName(level), 'propagate': False,
               'handlers': handlers or ['console']}
        logconfig = deepcopy(config or LOGGING_CONFIG)
        loggers = logconfig.pop('loggers', {})
        loggers[name] = cfg
        logconfig['loggers'] = loggers
        dictConfig(logconfig)
        _configured.add(name)
        return logging.getLogger(name)
