'''An in-process :class:`.Transport` with the revision semantics of
CouchDB. Databases live in memory and are shared by all transports with
the same url host, so that a connector can disconnect and connect again
without losing its documents::

    transport = create_transport('local://testing')
'''
import re
from copy import deepcopy
from urllib.parse import urlsplit
from uuid import uuid4

from . import Transport
from ..exceptions import (NotFound, Conflict, CouchDbError, CouchDbNoDbError,
                          DatabaseExists)
from ..utils import to_string


servers = {}

valid_database_name = re.compile(r'^[a-z][a-z0-9_$()+/-]*$')


def revision(n):
    return '%d-%s' % (n, uuid4().hex)


def generation(rev):
    return int(rev.split('-', 1)[0])


class LocalDatabase:
    __slots__ = ('name', 'documents', 'deleted', 'update_seq')

    def __init__(self, name):
        self.name = name
        self.documents = {}
        self.deleted = {}
        self.update_seq = 0

    def info(self):
        return {'db_name': self.name,
                'doc_count': len(self.documents),
                'doc_del_count': len(self.deleted),
                'update_seq': self.update_seq}


class LocalTransport(Transport):
    '''In memory :class:`.Transport` registered with the ``local`` and
    ``memory`` schemes.'''

    def _init(self, **kw):
        host = urlsplit(self.url).netloc or 'default'
        self._databases = servers.setdefault(host, {})

    async def info(self):
        return {'couchdb': 'Welcome',
                'vendor': {'name': 'couchconnector local transport'}}

    # DOCUMENTS
    async def get(self, database, id, **params):
        db = self._db(database)
        id = to_string(id)
        document = db.documents.get(id)
        if document is None:
            reason = 'deleted' if id in db.deleted else 'missing'
            raise NotFound(reason=reason)
        return deepcopy(document)

    async def put(self, database, document, doc_name=None):
        db = self._db(database)
        id = doc_name if doc_name is not None else document.get('_id')
        id = uuid4().hex if id is None else to_string(id)
        rev = document.get('_rev')
        current = db.documents.get(id)
        if current is None:
            if rev:
                raise Conflict()
            n = generation(db.deleted[id]) if id in db.deleted else 0
        elif rev != current['_rev']:
            raise Conflict()
        else:
            n = generation(rev)
        document = deepcopy(dict(document))
        document['_id'] = id
        document['_rev'] = revision(n + 1)
        db.deleted.pop(id, None)
        db.documents[id] = document
        db.update_seq += 1
        return {'ok': True, 'id': id, 'rev': document['_rev']}

    async def delete(self, database, id, rev):
        db = self._db(database)
        id = to_string(id)
        current = db.documents.get(id)
        if current is None:
            raise NotFound(reason='deleted' if id in db.deleted else 'missing')
        if rev != current['_rev']:
            raise Conflict()
        rev = revision(generation(rev) + 1)
        db.documents.pop(id)
        db.deleted[id] = rev
        db.update_seq += 1
        return {'ok': True, 'id': id, 'rev': rev}

    # DATABASES
    async def database_info(self, name):
        return self._db(name).info()

    async def database_exists(self, name):
        return name in self._databases

    async def create_database(self, name):
        if not valid_database_name.match(name or ''):
            raise CouchDbError('illegal_database_name',
                               'Name: \'%s\'. Only lowercase characters '
                               '(a-z), digits (0-9), and any of the '
                               'characters _, $, (, ), +, -, and / are '
                               'allowed. Must begin with a letter.' % name,
                               status=400)
        if name in self._databases:
            raise DatabaseExists('file_exists',
                                 'The database could not be created, '
                                 'the file already exists.')
        self._databases[name] = LocalDatabase(name)
        return {'ok': True}

    async def destroy_database(self, name):
        self._db(name)
        self._databases.pop(name)
        return {'ok': True}

    async def all_databases(self):
        return sorted(self._databases)

    def flush(self):
        '''Remove all databases of this transport server'''
        self._databases.clear()

    #    INTERNALS
    def _db(self, name):
        db = self._databases.get(name)
        if db is None:
            raise CouchDbNoDbError('not_found', 'Database does not exist.')
        return db
