from importlib import import_module
from urllib.parse import quote


DESIGN_PREFIX = '_design/'


def to_string(s, encoding=None, errors='strict'):
    """Inverse of to_bytes"""
    if isinstance(s, bytes):
        return s.decode(encoding or 'utf-8', errors)
    elif not isinstance(s, str):
        return str(s)
    else:
        return s


def module_attribute(dotpath, default=None, safe=False):
    '''Load an attribute from a module.

    ``dotpath`` is either ``package.module:attribute`` or
    ``package.module.attribute``. If the module or the attribute is not
    available, return the ``default`` argument if ``safe`` is ``True``.
    '''
    if dotpath:
        bits = str(dotpath).split(':')
        try:
            if len(bits) == 2:
                attr = bits[1]
                module_name = bits[0]
            else:
                bits = bits[0].split('.')
                if len(bits) > 1:
                    attr = bits[-1]
                    module_name = '.'.join(bits[:-1])
                else:
                    raise ValueError('Could not find attribute in %s'
                                     % dotpath)

            module = import_module(module_name)
            return getattr(module, attr)
        except Exception:
            if not safe:
                raise
            return default
    elif not safe:
        raise ImportError
    return default


def url_resolve(base_url, name):
    '''Append the already quoted ``name`` to ``base_url``, which is
    always treated as a directory.'''
    if not base_url.endswith('/'):
        base_url += '/'
    return base_url + name


def quote_db(name):
    return quote(to_string(name), safe='')


def quote_id(docid):
    '''Quote a document id for a url path.

    Design documents keep the ``/`` between the prefix and their name.
    '''
    docid = to_string(docid)
    if docid.startswith(DESIGN_PREFIX):
        return DESIGN_PREFIX + quote(docid[len(DESIGN_PREFIX):], safe='')
    return quote(docid, safe='')


def design_id(name):
    if name.startswith(DESIGN_PREFIX):
        return name
    return DESIGN_PREFIX + name
