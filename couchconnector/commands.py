'''Command line management of a connector database::

    python -m couchconnector autoupdate --url http://localhost:5984 -d books
    python -m couchconnector sync-design-docs -d books --design-docs views.json

Results are printed as JSON on the standard output.
'''
import asyncio
import json
import logging
import sys

import httpx

from . import __version__
from .config import Config
from .connector import CouchDBConnector
from .exceptions import ConfigurationError, CouchConnectorException
from .log import configured_logger


LOGGER = logging.getLogger('couchconnector.commands')

COMMANDS = {}


def command(name):
    def _(f):
        COMMANDS[name] = f
        return f
    return _


@command('info')
async def info(connector):
    '''Server and database information'''
    connection = await connector.connect()
    return {'url': connection.url,
            'server': await connection.transport.info(),
            'database': await connector.get_db()}


@command('autoupdate')
def autoupdate(connector):
    '''Create the database if missing and synchronize design documents'''
    return connector.autoupdate()


@command('automigrate')
def automigrate(connector):
    '''Recreate the database and synchronize design documents'''
    return connector.automigrate()


@command('sync-design-docs')
def sync_design_docs(connector):
    '''Synchronize design documents'''
    return connector.save_design_docs()


def load_design_docs(filename):
    try:
        with open(filename) as fp:
            return json.load(fp)
    except (OSError, ValueError) as exc:
        raise ConfigurationError('Could not load design documents from '
                                 '"%s": %s' % (filename, exc)) from exc


def parser(cfg):
    p = cfg.parser()
    p.add_argument('command', choices=sorted(COMMANDS),
                   help='Command to execute')
    p.add_argument('--design-docs', dest='design_docs_file', metavar='FILE',
                   help='JSON file with the design documents definitions')
    p.add_argument('--version', action='version', version=__version__)
    return p


async def execute(cmd, cfg):
    connector = CouchDBConnector(cfg)
    try:
        return await COMMANDS[cmd](connector)
    finally:
        await connector.disconnect()


def main(argv=None, stdout=None):
    stdout = stdout or sys.stdout
    cfg = Config(description='Manage the database of a CouchDB connector')
    try:
        opts = cfg.parse_command_line(argv, parser(cfg))
        if opts.design_docs_file:
            cfg.set('design_docs', load_design_docs(opts.design_docs_file))
        configured_logger('couchconnector', level=cfg.log_level)
        result = asyncio.run(execute(opts.command, cfg))
    except ConfigurationError as exc:
        LOGGER.error(str(exc))
        sys.stderr.write('%s\n' % exc)
        return exc.exit_code
    except (CouchConnectorException, httpx.HTTPError) as exc:
        LOGGER.exception('%s failed', opts.command)
        sys.stderr.write('%s failed: %s\n' % (opts.command, exc))
        return 1
    stdout.write(json.dumps(result, indent=2, default=str))
    stdout.write('\n')
    return 0
