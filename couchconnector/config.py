"""Configuration utilities which provide the connector with its
parameters. Values can be passed as a mapping (the data source settings of
the host framework) or parsed from the command line. Parsing is
implemented using the python argparser_ standard library module.

Config
~~~~~~~~~~

.. autoclass:: Config
   :members:
   :member-order: bysource

Setting
~~~~~~~~~~

.. autoclass:: Setting
   :members:
   :member-order: bysource


.. _argparser: http://docs.python.org/dev/library/argparse.html
"""
import argparse
import logging
import textwrap

from .exceptions import ConfigurationError


__all__ = ['Config',
           'Setting',
           'ordered_settings',
           'validate_string',
           'validate_pos_int',
           'validate_pos_float',
           'validate_dict']

LOGGER = logging.getLogger('couchconnector.config')

KNOWN_SETTINGS = {}
KNOWN_SETTINGS_ORDER = []
ALIASES = {}


def ordered_settings():
    for name in KNOWN_SETTINGS_ORDER:
        yield KNOWN_SETTINGS[name]


def wrap_method(func):
    def _wrapped(instance, *args, **kwargs):
        return func(*args, **kwargs)
    return _wrapped


def validate_string(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise TypeError("Not a string: %s" % val)
    return val.strip()


def validate_secret(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise TypeError("Not a string")
    return val


def validate_pos_int(val):
    if val is None:
        return None
    if not isinstance(val, int):
        val = int(val, 0)
    else:
        # Booleans are ints!
        val = int(val)
    if val < 0:
        raise ValueError("Value must be positive: %s" % val)
    return val


def validate_pos_float(val):
    if val is None:
        return None
    val = float(val)
    if val < 0:
        raise ValueError("Value must be positive: %s" % val)
    return val


def validate_dict(val):
    if val and not isinstance(val, dict):
        raise TypeError("Not a dictionary: %s" % val)
    return val


class SettingMeta(type):
    """A metaclass which collects all setting classes and put them
    in the global ``KNOWN_SETTINGS`` list.
    """
    def __new__(cls, name, bases, attrs):
        super_new = super().__new__
        val = attrs.get("validator")
        attrs["validator"] = wrap_method(val) if val else None
        if attrs.pop('virtual', False):
            return super_new(cls, name, bases, attrs)
        attrs["order"] = len(KNOWN_SETTINGS) + 1
        new_class = super_new(cls, name, bases, attrs)
        new_class.fmt_desc(attrs.get('desc') or '')
        if not new_class.name:
            new_class.name = name.lower()
        if new_class.name not in KNOWN_SETTINGS_ORDER:
            KNOWN_SETTINGS_ORDER.append(new_class.name)
        KNOWN_SETTINGS[new_class.name] = new_class
        for alias in new_class.aliases:
            ALIASES[alias] = new_class.name
        return new_class

    def fmt_desc(cls, desc):
        desc = textwrap.dedent(desc).strip()
        setattr(cls, "desc", desc)
        lines = desc.split('\n\n')
        setattr(cls, "short", '' if not lines else lines[0])


class Setting(metaclass=SettingMeta):
    """Class for creating connector settings.

    Settings with :attr:`flags` can be specified on the command line,
    all of them in the data source settings mapping.
    """
    virtual = True
    """If set to ``True`` the settings won't be loaded.

    It can be only used as base class for other settings."""
    name = None
    """The key to access this setting in a :class:`Config` container."""
    aliases = ()
    """Alternative keys accepted when updating a :class:`Config`."""
    validator = None
    """A validating function for this setting."""
    value = None
    """The actual value for this setting."""
    default = None
    """The default value for this setting."""
    flags = None
    """List of options strings, e.g. ``[-f, --foo]``."""
    meta = None
    """Same usage as ``metavar`` in the python :mod:`argparse` module."""
    type = None
    short = None
    desc = None

    def __init__(self):
        self.modified = False
        if self.default is not None:
            self.set(self.default)
        self.modified = False

    def __str__(self):
        return '{0} ({1})'.format(self.name, self.value)
    __repr__ = __str__

    def get(self):
        """Returns :attr:`value`"""
        return self.value

    def set(self, val):
        """Set ``val`` as the :attr:`value` for this :class:`Setting`."""
        if hasattr(self.validator, '__call__'):
            try:
                val = self.validator(val)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    'Invalid value for "%s": %s' % (self.name, exc)) from exc
        self.value = val
        self.modified = True

    def add_argument(self, parser):
        """Add this :class:`Setting` to the ``parser``.

        The operation is carried out only if :attr:`flags` are defined.
        """
        if not self.flags:
            return
        kwargs = {'dest': self.name,
                  'default': None,
                  'help': "%s [%s]" % (self.short, self.default)}
        if self.type:
            kwargs['type'] = self.type
        if self.meta:
            kwargs['metavar'] = self.meta
        parser.add_argument(*self.flags, **kwargs)


class Config:
    """A dictionary-like container of :class:`Setting` parameters.

    It provides easy access to :attr:`Setting.value`
    attribute by exposing the :attr:`Setting.name` as attribute.

    .. attribute:: settings

        Dictionary of all :class:`Setting` instances available in this
        :class:`Config` container.

    .. attribute:: params

        Dictionary of additional parameters which are not settings
    """
    def __init__(self, data=None, description=None, **params):
        self.settings = {}
        self.params = {}
        for setting_class in ordered_settings():
            setting = setting_class()
            self.settings[setting.name] = setting
        self.description = description or 'CouchDB connector'
        if data:
            self.update(data)
        self.update(params)

    def __iter__(self):
        return iter(self.settings)

    def __len__(self):
        return len(self.settings)

    def __contains__(self, name):
        return name in self.settings

    def items(self):
        for k, setting in self.settings.items():
            yield k, setting.value

    def __getattr__(self, name):
        try:
            return self._get(name)
        except KeyError as exc:
            raise AttributeError("'%s' object has no attribute '%s'." %
                                 (self.__class__.__name__, name)) from exc

    def __setattr__(self, name, value):
        if name != "settings" and name in self.settings:
            raise AttributeError("Invalid access!")
        super().__setattr__(name, value)

    def update(self, data):
        """Update this :attr:`Config` with ``data``.

        :param data: must be a ``Mapping`` like object exposing the ``item``
            method for iterating through key-value pairs.
        """
        for name, value in data.items():
            if value is not None:
                self.set(name, value)

    def get(self, name, default=None):
        """Get the value at ``name`` for this :class:`Config` container

        The returned value is obtained from the :attr:`settings`,
        the :attr:`params` or the ``default`` value.
        """
        try:
            value = self._get(name)
        except KeyError:
            return default
        return default if value is None else value

    def set(self, name, value):
        """Set the :class:`Setting` at ``name`` (or one of its aliases)
        with a new ``value``.
        """
        name = ALIASES.get(name, name)
        if name in self.settings:
            self.settings[name].set(value)
        else:
            self.params[name] = value

    @property
    def url(self):
        """The server url.

        It is the ``url`` setting when available, otherwise it is built
        from ``protocol``, ``hostname`` and ``port``.
        """
        url = self._get('url')
        if not url:
            url = '%s://%s:%s' % (self.protocol, self.hostname, self.port)
        return url

    def parser(self, parser=None):
        """Create the argparser_ for this configuration by adding all
        settings via the :meth:`Setting.add_argument` method.
        """
        if parser is None:
            parser = argparse.ArgumentParser(description=self.description)
        setts = self.settings
        for k in sorted(setts, key=lambda x: setts[x].order):
            setts[k].add_argument(parser)
        return parser

    def parse_command_line(self, argv=None, parser=None):
        """Parse the command line and update this :class:`Config`.

        Returns the parsed namespace.
        """
        parser = parser or self.parser()
        opts = parser.parse_args(argv)
        for k, v in opts.__dict__.items():
            if v is not None and k in self.settings:
                self.set(k, v)
        return opts

    def _get(self, name):
        if name not in self.settings:
            if name in self.params:
                return self.params[name]
            raise KeyError("'%s'" % name)
        return self.settings[name].get()


class Hostname(Setting):
    name = 'hostname'
    aliases = ('host',)
    flags = ['--hostname']
    meta = 'HOST'
    validator = validate_string
    default = '127.0.0.1'
    desc = 'Host name of the CouchDB server'


class Protocol(Setting):
    name = 'protocol'
    flags = ['--protocol']
    validator = validate_string
    default = 'http'
    desc = 'Protocol used to reach the server (the transport scheme)'


class Port(Setting):
    name = 'port'
    flags = ['--port']
    type = int
    validator = validate_pos_int
    default = 5984
    desc = 'Port of the CouchDB server'


class Url(Setting):
    name = 'url'
    flags = ['--url']
    validator = validate_string
    desc = """\
        Server url.

        When given it overrides ``protocol``, ``hostname`` and ``port``.
        """


class Database(Setting):
    name = 'database'
    aliases = ('db',)
    flags = ['-d', '--database']
    meta = 'NAME'
    validator = validate_string
    desc = 'Name of the database storing the documents'


class DesignDocs(Setting):
    name = 'design_docs'
    aliases = ('designDocs',)
    validator = validate_dict
    desc = """\
        Dictionary of design documents definitions.

        Keys are design document names (without the ``_design/`` prefix),
        values the document bodies.
        """


class User(Setting):
    name = 'user'
    aliases = ('username',)
    flags = ['--user']
    validator = validate_string
    desc = 'User name for session authentication'


class Password(Setting):
    name = 'password'
    flags = ['--password']
    validator = validate_secret
    desc = 'Password for session authentication'


class Timeout(Setting):
    name = 'timeout'
    flags = ['--timeout']
    type = float
    validator = validate_pos_float
    desc = 'Timeout in seconds of requests to the server'


class LogLevel(Setting):
    name = 'log_level'
    flags = ['--log-level']
    meta = 'LEVEL'
    validator = validate_string
    desc = 'Level of the couchconnector logger'
