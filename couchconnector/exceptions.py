'''
A list of all Exception specific to couchconnector.
'''
__all__ = ['CouchConnectorException',
           'ConfigurationError',
           'CouchDbError',
           'NotFound',
           'CouchDbNoDbError',
           'Conflict',
           'DatabaseExists',
           'Unauthorized',
           'DesignDocumentError',
           'couch_db_error']


class CouchConnectorException(Exception):
    '''Base class of all couchconnector exceptions.'''


class ConfigurationError(CouchConnectorException):
    '''A :class:`CouchConnectorException` raised when an inconsistent
    configuration has occured.

    .. attribute:: exit_code

        the exit code when rising this exception is set to 2. The command
        line logs the error rather than the full stack trace.
    '''
    exit_code = 2


class CouchDbError(CouchConnectorException):
    '''An error payload returned by the document store.

    .. attribute:: error

        The error name, for example ``not_found`` or ``conflict``.

    .. attribute:: status

        HTTP status code of the failed request, when known.
    '''
    status = None

    def __init__(self, error=None, reason=None, status=None):
        self.error = error
        self.reason = reason
        if status:
            self.status = status
        super().__init__(reason or error)


class NotFound(CouchDbError):
    '''The requested document is not available.'''
    status = 404

    def __init__(self, error='not_found', reason='missing', status=None):
        super().__init__(error, reason, status)


class CouchDbNoDbError(CouchDbError):
    status = 404


class Conflict(CouchDbError):
    '''The revision presented with a write is not the current one.'''
    status = 409

    def __init__(self, error='conflict', reason='Document update conflict.',
                 status=None):
        super().__init__(error, reason, status)


class DatabaseExists(CouchDbError):
    status = 412


class Unauthorized(CouchDbError):
    status = 401


class DesignDocumentError(CouchConnectorException):
    '''Raised once a design documents synchronization completes with
    at least one failure.

    .. attribute:: failures

        Dictionary of design document names and the exception raised while
        synchronizing them.
    '''
    def __init__(self, failures):
        self.failures = failures
        super().__init__('Could not synchronize design documents: %s' %
                         ', '.join(sorted(failures)))


error_classes = {'not_found': NotFound,
                 'conflict': Conflict,
                 'file_exists': DatabaseExists,
                 'unauthorized': Unauthorized}

reason_classes = {'no_db_file': CouchDbNoDbError,
                  'Database does not exist.': CouchDbNoDbError}


def couch_db_error(error=None, reason=None, status=None, **params):
    '''Build the :class:`CouchDbError` matching an error payload.'''
    error_class = (reason_classes.get(reason) or
                   error_classes.get(error) or
                   CouchDbError)
    return error_class(error=error, reason=reason, status=status)
