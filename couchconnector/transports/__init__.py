'''
The :class:`.Transport` is the capability the connector needs from the
document store: single document get/put/delete calls and database
management, each one a coroutine resolving in the store reply or raising
a :class:`.CouchDbError`.

A transport is never created directly, the :func:`create_transport`
function selects the implementation registered for the url scheme::

    transport = create_transport('http://localhost:5984')
'''
from abc import ABCMeta, abstractmethod
from urllib.parse import urlsplit

from ..exceptions import ConfigurationError
from ..utils import module_attribute


__all__ = ['Transport',
           'register_transport',
           'create_transport',
           'transport_schemes']


transports = {}


class Transport(metaclass=ABCMeta):
    '''Base class for document store transports.

    .. attribute:: url

        The server url this transport talks to.
    '''
    def __init__(self, url, **kw):
        self.url = url
        self._init(**kw)

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, self.url)
    __str__ = __repr__

    async def open(self):
        '''Prepare the transport before the first request.'''

    async def close(self):
        '''Release resources held by this transport.'''

    @abstractmethod
    async def info(self):
        '''Information about the server'''

    # DOCUMENTS
    @abstractmethod
    async def get(self, database, id, **params):
        '''Retrieve the document at ``id`` from ``database``.

        Raise :class:`.NotFound` when the document is not available.
        '''

    @abstractmethod
    async def put(self, database, document, doc_name=None):
        '''Write ``document`` into ``database``.

        The document is addressed by ``doc_name`` if given, otherwise by its
        ``_id`` field. A document without either receives an id assigned by
        the store. Writing an existing document requires its current
        ``_rev`` in ``document``, :class:`.Conflict` is raised otherwise.

        :return: a dictionary with ``id`` and ``rev`` keys.
        '''

    @abstractmethod
    async def delete(self, database, id, rev):
        '''Delete document ``id`` at revision ``rev`` from ``database``.'''

    # DATABASES
    @abstractmethod
    async def database_info(self, name):
        '''Information about database ``name``.

        Raise :class:`.CouchDbNoDbError` when the database does not exist.
        '''

    @abstractmethod
    async def database_exists(self, name):
        '''``True`` if database ``name`` exists'''

    @abstractmethod
    async def create_database(self, name):
        '''Create a new database ``name``.'''

    @abstractmethod
    async def destroy_database(self, name):
        '''Delete database ``name`` and all its documents.'''

    @abstractmethod
    async def all_databases(self):
        '''The list of all databases'''

    #    INTERNALS
    def _init(self, **kw):
        '''Internal initialisation'''
        pass


def register_transport(scheme, dotted_path):
    '''Register a new :class:`.Transport` for urls with ``scheme``. The
    class can be found at the python ``dotted_path``.
    '''
    transports[scheme] = dotted_path


def transport_schemes():
    return sorted(transports)


def create_transport(url, **kw):
    '''Create a new :class:`.Transport` for a valid ``url``.

    :param url: the server url, for example ``http://localhost:5984``.
    :param kw: additional key-valued parameters passed to the
        :meth:`.Transport._init` method.
    '''
    if isinstance(url, Transport):
        return url
    scheme = urlsplit(url).scheme
    dotted_path = transports.get(scheme)
    if not dotted_path:
        raise ConfigurationError(
            '"%s" transport not available, use one of %s'
            % (scheme, ', '.join(transport_schemes())))
    transport_class = module_attribute(dotted_path)
    return transport_class(url, **kw)


register_transport('http', 'couchconnector.transports.http:HttpTransport')
register_transport('https', 'couchconnector.transports.http:HttpTransport')
register_transport('local', 'couchconnector.transports.local:LocalTransport')
register_transport('memory', 'couchconnector.transports.local:LocalTransport')
