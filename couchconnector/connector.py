'''
The :class:`CouchDBConnector` implements the operations a persistence
framework invokes on its data sources, on top of a CouchDB_ database::

    connector = await initialize({'url': 'http://localhost:5984',
                                  'database': 'library'})
    connector.define('Book', id_name='isbn')

    id, rev = await connector.create('Book', {'isbn': '0-330-25864-8',
                                              'title': 'The Hitchhiker'})
    book = await connector.find_by_id('Book', id)
    books = await connector.all('Book', {'where': {'isbn': {'inq': [id]}}})
    await connector.destroy('Book', id)

Operations addressing documents by identifier are mapped to single document
requests. Filters are only supported on the identifier field, any other
filter gives an empty result.

.. _CouchDB: http://couchdb.apache.org/
'''
import asyncio
import logging
from abc import ABCMeta, abstractmethod

from .client import DocumentClient
from .config import Config
from .design import save_design_docs
from .documents import (derive_document, resolve_for_write, with_revision,
                        reflect_assigned_id)
from .exceptions import NotFound, CouchDbNoDbError
from .filters import keys_from_where
from .models import Models


__all__ = ['Connector', 'CouchDBConnector', 'initialize']


LOGGER = logging.getLogger('couchconnector.connector')


class Connector(metaclass=ABCMeta):
    '''The operations a persistence framework calls on a data source.

    Every operation is a coroutine. ``model`` is the model name and
    ``options`` the options dictionary of the framework.
    '''
    name = None

    @abstractmethod
    async def connect(self):
        '''Connect with the data source'''

    @abstractmethod
    async def disconnect(self):
        '''Disconnect from the data source'''

    @abstractmethod
    async def create(self, model, data, options=None):
        '''Create a new instance, return a ``(id, rev)`` tuple'''

    @abstractmethod
    async def save(self, model, data, options=None):
        '''Save an instance'''

    @abstractmethod
    async def destroy(self, model, id, options=None):
        '''Delete an instance, return the count of deleted instances'''

    @abstractmethod
    async def replace_by_id(self, model, id, data, options=None):
        '''Replace an instance and return the stored data'''

    @abstractmethod
    async def all(self, model, filter, options=None):
        '''Find all instances matching ``filter``'''

    @abstractmethod
    async def destroy_all(self, model, where, options=None):
        '''Delete all instances matching ``where``'''

    @abstractmethod
    async def autoupdate(self, models=None):
        '''Update the data source structure'''

    @abstractmethod
    async def automigrate(self, models=None):
        '''Recreate the data source structure, existing data is lost'''

    async def count(self, model, where=None, options=None):
        raise NotImplementedError('count is not supported by %s' %
                                  self.name)

    async def update_attributes(self, model, id, data, options=None):
        raise NotImplementedError('update_attributes is not supported by %s'
                                  % self.name)

    async def update(self, model, where, data, options=None):
        raise NotImplementedError('update is not supported by %s' %
                                  self.name)


class CouchDBConnector(Connector):
    '''CouchDB :class:`Connector`.

    :param settings: a :class:`.Config` or a dictionary of settings
    :param transport_factory: optional callable creating the
        :class:`.Transport` from the url and the transport parameters.
        By default :func:`.create_transport` is used.

    .. attribute:: cfg

        The :class:`.Config` of this connector

    .. attribute:: models

        The :class:`.Models` registry of identifier fields
    '''
    name = 'couchdb'

    def __init__(self, settings=None, transport_factory=None):
        if isinstance(settings, Config):
            cfg = settings
        else:
            cfg = Config(settings)
        self.cfg = cfg
        self.models = Models()
        self.client = DocumentClient(cfg, transport_factory)

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.client)
    __str__ = __repr__

    @property
    def database(self):
        return self.cfg.database

    @property
    def settings(self):
        return dict(self.cfg.items())

    def define(self, model, id_name=None):
        '''Register the identifier field of ``model``'''
        return self.models.define(model, id_name)

    def connect(self):
        return self.client.connect()

    def disconnect(self):
        return self.client.disconnect()

    # RECORD OPERATIONS
    async def create(self, model, data, options=None):
        document = derive_document(self.models.get(model), data)
        connection = await self.connect()
        result = await connection.insert(document)
        return result['id'], result['rev']

    async def create_record(self, model, data, options=None):
        '''Create a new instance and return ``data`` augmented with the
        identifier assigned by the store.'''
        id, _ = await self.create(model, data, options)
        return reflect_assigned_id(self.models.get(model), data, id)

    async def save(self, model, data, options=None):
        id = self.models.get(model).get_id_value(data)
        connection = await self.connect()
        await connection.insert(dict(data), doc_name=id)

    async def destroy(self, model, id, options=None):
        try:
            await self.destroy_by_id(model, id, options)
        except Exception as exc:
            LOGGER.debug('could not destroy %s %s: %s', model, id, exc)
            return {'count': 0}
        return {'count': 1}

    async def replace_by_id(self, model, id, data, options=None):
        connection = await self.connect()
        current = await resolve_for_write(connection, id)
        document = derive_document(self.models.get(model), data, id)
        await connection.insert(with_revision(document, current),
                                doc_name=id)
        return await self.find_by_id(model, id, options)

    # BULK OPERATIONS
    async def all(self, model, filter, options=None):
        where = (filter or {}).get('where')
        if where is None:
            return []
        keys = self.keys_from_where(model, where)
        if not keys:
            return []
        documents = await asyncio.gather(
            *[self._attempt(self.find_by_id(model, id, options), model, id)
              for id in keys])
        return [doc for doc in documents if doc is not None]

    async def destroy_all(self, model, where, options=None):
        keys = self.keys_from_where(model, where)
        if not keys:
            return {'count': 0}
        results = await asyncio.gather(
            *[self._attempt(self.destroy_by_id(model, id, options), model, id)
              for id in keys])
        return {'count': sum((1 for r in results if r is not None))}

    # DATABASE OPERATIONS
    async def autoupdate(self, models=None):
        '''Create the database if it does not exist and synchronize the
        design documents.

        :return: the database information
        '''
        LOGGER.debug('autoupdate %s', self.database)
        connection = await self.connect()
        info = await self.get_db()
        if not info:
            await connection.create()
            info = await self.get_db()
        if self.cfg.design_docs:
            await self.save_design_docs()
        return info

    async def automigrate(self, models=None):
        '''Destroy the database, if it exists, and create a new one.
        Design documents are then synchronized.

        :return: the database information
        '''
        LOGGER.debug('automigrate %s', self.database)
        connection = await self.connect()
        if await connection.exists():
            await connection.drop()
        await connection.create()
        info = await self.get_db()
        if self.cfg.design_docs:
            await self.save_design_docs()
        return info

    # HELPERS
    async def find_by_id(self, model, id, options=None):
        '''Find the document at ``id``.

        The returned document has the identifier field of ``model`` set
        from ``_id``.
        '''
        connection = await self.connect()
        data = await connection.get(id)
        if data is None:
            raise NotFound()
        return self.models.get(model).set_id_value(data, data['_id'])

    async def destroy_by_id(self, model, id, options=None):
        '''Destroy the document at ``id``, raise :class:`.NotFound` if it
        does not exist.'''
        connection = await self.connect()
        current = await resolve_for_write(connection, id)
        return await connection.destroy(current['_id'], current['_rev'])

    def keys_from_where(self, model, where):
        '''Document keys from the ``where`` filter, an empty list if they
        cannot be derived'''
        return keys_from_where(self.models.get(model), where)

    async def db_url(self):
        '''Url of the connected database'''
        connection = await self.connect()
        return connection.url

    async def get_db(self):
        '''Information about the database or ``None`` if it does not exist
        '''
        connection = await self.connect()
        try:
            return await connection.info()
        except (CouchDbNoDbError, NotFound):
            return None

    async def save_design_docs(self):
        connection = await self.connect()
        return await save_design_docs(connection, self.cfg.design_docs)

    async def _attempt(self, coro, model, id):
        try:
            return await coro
        except NotFound:
            return None
        except Exception as exc:
            LOGGER.warning('%s %s skipped: %s', model, id, exc)
            return None


async def initialize(settings=None, transport_factory=None):
    '''Create a :class:`CouchDBConnector` and connect it'''
    connector = CouchDBConnector(settings, transport_factory)
    await connector.connect()
    return connector
