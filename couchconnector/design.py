'''Synchronization of design documents.

Each configured design document is created when missing. When already
stored, the configured fields are merged onto the stored ones, so that
fields added by other writers survive the update.
'''
import asyncio
import logging

from .documents import strip_store_fields
from .exceptions import NotFound, DesignDocumentError
from .utils import design_id


LOGGER = logging.getLogger('couchconnector.design')


def merge_design(stored, definition):
    '''Merge the configured ``definition`` onto the ``stored`` design
    document.

    Stored fields not in ``definition`` are kept, overlapping fields take
    the configured value. ``_id`` and ``_rev`` are the stored ones.
    '''
    merged = dict(stored)
    merged.update(strip_store_fields(definition))
    return merged


async def save_design_doc(connection, name, definition):
    '''Create or update the design document ``name``.'''
    id = design_id(name)
    try:
        stored = await connection.get(id)
    except NotFound:
        LOGGER.debug('creating design document %s', name)
        document = strip_store_fields(definition)
    else:
        LOGGER.debug('updating design document %s', name)
        document = merge_design(stored, definition)
    return await connection.insert(document, doc_name=id)


async def save_design_docs(connection, design_docs):
    '''Synchronize all ``design_docs`` concurrently.

    A failure does not stop the synchronization of the other documents.
    Once all are done, a :class:`.DesignDocumentError` is raised if any
    of them failed.

    :param design_docs: dictionary of names and definitions
    :return: dictionary of names and store replies
    '''
    names = list(design_docs or ())
    results = await asyncio.gather(
        *[save_design_doc(connection, name, design_docs[name])
          for name in names],
        return_exceptions=True)
    replies = {}
    failures = {}
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            LOGGER.warning('could not synchronize design document %s: %s',
                           name, result)
            failures[name] = result
        else:
            replies[name] = result
    if failures:
        raise DesignDocumentError(failures)
    return replies
