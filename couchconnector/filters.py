'''Translation of ``where`` filters into document keys.

Only filters on the identifier field are understood:

* an equality, ``{'id': 'abc'}``, gives ``['abc']``
* an ``inq`` operator, ``{'id': {'inq': ['a', 'b']}}``, gives the list
  verbatim, with duplicates and ordering preserved

Any other filter gives an empty list of keys.
'''


def keys_from_where(definition, where):
    '''Keys from the ``where`` filter for the model ``definition``.

    :param definition: a :class:`.ModelDefinition`
    :param where: the where filter, a dictionary
    :return: a list, empty when no key can be derived
    '''
    if not isinstance(where, dict):
        return []
    key = definition.get_id_value(where)
    if key is None:
        return []
    if isinstance(key, (str, bytes)):
        return [key]
    if isinstance(key, dict) and isinstance(key.get('inq'), (list, tuple)):
        return list(key['inq'])
    # range, regex and logical operators are not supported
    return []
