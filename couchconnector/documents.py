'''Mapping between records of the host framework and store documents.
'''
from .exceptions import NotFound


STORE_FIELDS = ('_id', '_rev')


def derive_document(definition, record, explicit_id=None):
    '''The document to write for ``record``.

    The identifier, ``explicit_id`` or the value of the identifier field,
    is set as ``_id``. Without an identifier ``_id`` is omitted and the
    store assigns one.
    '''
    document = dict(record or ())
    id = explicit_id
    if id is None:
        id = definition.get_id_value(record)
    if id is not None:
        document['_id'] = id
    return document


async def resolve_for_write(connection, id):
    '''Fetch the current document at ``id`` before a write which must
    target it.

    Raise :class:`.NotFound` if the document does not exist.
    '''
    current = await connection.get(id)
    if current is None:
        raise NotFound()
    return current


def with_revision(document, current):
    '''A copy of ``document`` carrying the ``_rev`` of ``current``'''
    document = dict(document)
    document['_rev'] = current['_rev']
    return document


def reflect_assigned_id(definition, record, id):
    '''``record`` augmented with the identifier assigned by the store.

    A new dictionary is returned, ``record`` is not modified.
    '''
    if definition.get_id_value(record) == id:
        return dict(record)
    return definition.set_id_value(record, id)


def strip_store_fields(document):
    return dict(((k, v) for k, v in document.items()
                 if k not in STORE_FIELDS))
