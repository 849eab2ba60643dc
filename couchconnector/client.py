'''
The :class:`DocumentClient` owns the single :class:`Connection` of a
connector. The connection is established lazily, the first time it is
needed, and concurrent callers share the same initialisation::

    client = DocumentClient(Config(url='http://localhost:5984', db='books'))
    connection = await client.connect()
    document = await connection.get('some-id')
    await client.disconnect()
'''
import asyncio
import logging
from enum import Enum

from .exceptions import ConfigurationError
from .transports import create_transport
from .utils import url_resolve, quote_db


LOGGER = logging.getLogger('couchconnector.client')


class StatusType(Enum):
    disconnected = 1
    connecting = 2
    connected = 3


class Connection:
    '''A :class:`.Transport` bound to a database.

    All methods are coroutines.
    '''
    __slots__ = ('transport', 'database')

    def __init__(self, transport, database):
        self.transport = transport
        self.database = database

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.url)
    __str__ = __repr__

    @property
    def url(self):
        '''Url of the bound database'''
        return url_resolve(self.transport.url, quote_db(self.database))

    # DOCUMENTS
    def get(self, id, **params):
        return self.transport.get(self.database, id, **params)

    def insert(self, document, doc_name=None):
        return self.transport.put(self.database, document, doc_name=doc_name)

    def destroy(self, id, rev):
        return self.transport.delete(self.database, id, rev)

    # DATABASE
    def info(self):
        return self.transport.database_info(self.database)

    def exists(self):
        return self.transport.database_exists(self.database)

    def create(self):
        return self.transport.create_database(self.database)

    def drop(self):
        return self.transport.destroy_database(self.database)

    def close(self):
        return self.transport.close()


class DocumentClient:
    '''Lazy holder of a :class:`Connection`.

    .. attribute:: status

        One of the :class:`StatusType`.
    '''
    def __init__(self, cfg, transport_factory=None):
        self.cfg = cfg
        self.status = StatusType.disconnected
        self._transport_factory = transport_factory or create_transport
        self._connection = None
        self._connecting = None

    def __repr__(self):
        return '%s(%s, %s)' % (self.__class__.__name__, self.cfg.url,
                               self.status.name)
    __str__ = __repr__

    @property
    def connection(self):
        '''The :class:`Connection` when connected, otherwise ``None``'''
        return self._connection

    async def connect(self):
        '''Connect with the store.

        The connection is created once, callers arriving while it is being
        established wait for the same initialisation.

        :return: the :class:`Connection`
        '''
        if self._connection is not None:
            return self._connection
        if self._connecting is None:
            database = self.cfg.database
            if not database:
                raise ConfigurationError(
                    'Database name must be specified for the CouchDB '
                    'connector')
            self.status = StatusType.connecting
            self._connecting = asyncio.ensure_future(self._connect(database))
        return await asyncio.shield(self._connecting)

    async def disconnect(self):
        '''Release the :class:`Connection`.

        It can be called several times, even when not connected.
        '''
        pending = self._connecting
        if pending is not None:
            await asyncio.wait((pending,))
        connection = self._connection
        self._connection = None
        self.status = StatusType.disconnected
        if connection is not None:
            LOGGER.debug('disconnecting from %s', connection)
            await connection.close()
        return True

    async def _connect(self, database):
        cfg = self.cfg
        try:
            transport = self._transport_factory(cfg.url, **self._params())
            await transport.open()
        except BaseException:
            self.status = StatusType.disconnected
            raise
        finally:
            self._connecting = None
        self._connection = Connection(transport, database)
        self.status = StatusType.connected
        LOGGER.debug('connected with %s', self._connection)
        return self._connection

    def _params(self):
        cfg = self.cfg
        params = {}
        for name in ('user', 'password', 'timeout'):
            value = cfg.get(name)
            if value is not None:
                params[name] = value
        return params
