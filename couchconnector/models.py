'''Model definitions known to a connector.

The host framework designates, for each model, the field holding the
record identifier. The connector maps that field to the document ``_id``.
'''

DEFAULT_ID_NAME = 'id'


class ModelDefinition:
    '''The identifier field of a model.

    .. attribute:: name

        The model name used by the host framework

    .. attribute:: id_name

        The record field holding the identifier
    '''
    __slots__ = ('name', 'id_name')

    def __init__(self, name, id_name=None):
        self.name = name
        self.id_name = id_name or DEFAULT_ID_NAME

    def __repr__(self):
        return '%s(%s.%s)' % (self.__class__.__name__, self.name,
                              self.id_name)
    __str__ = __repr__

    def get_id_value(self, record):
        '''The identifier value in ``record`` or ``None``'''
        if record:
            return record.get(self.id_name)

    def set_id_value(self, record, value):
        '''A copy of ``record`` with the identifier field set to ``value``
        '''
        record = dict(record or ())
        record[self.id_name] = value
        return record


class Models:
    '''Registry of :class:`ModelDefinition`.

    Models not registered use ``id`` as identifier field.
    '''
    def __init__(self):
        self._definitions = {}

    def __len__(self):
        return len(self._definitions)

    def __iter__(self):
        return iter(self._definitions.values())

    def __contains__(self, name):
        return name in self._definitions

    def define(self, name, id_name=None):
        definition = ModelDefinition(name, id_name)
        self._definitions[name] = definition
        return definition

    def get(self, name):
        definition = self._definitions.get(name)
        if definition is None:
            definition = ModelDefinition(name)
        return definition
