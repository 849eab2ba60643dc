# -*- coding: utf-8 -
"""Asynchronous CouchDB connector for object persistence frameworks"""

VERSION = (0, 3, 0, 'final', 0)


def get_version(version):
    assert len(version) == 5
    assert version[3] in ('alpha', 'beta', 'rc', 'final')
    main = '.'.join(map(str, version[:3]))
    if version[3] == 'final':
        return main
    symbol = {'alpha': 'a', 'beta': 'b'}
    return '%s%s%s' % (main, symbol.get(version[3], version[3]), version[4])


__version__ = version = get_version(VERSION)


from .exceptions import *                   # noqa
from .config import Config, Setting         # noqa
from .models import ModelDefinition, Models     # noqa
from .filters import keys_from_where        # noqa
from .transports import (Transport, register_transport,     # noqa
                         create_transport)
from .client import DocumentClient, Connection, StatusType  # noqa
from .connector import Connector, CouchDBConnector, initialize  # noqa
