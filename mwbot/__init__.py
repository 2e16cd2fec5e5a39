"""
A small MediaWiki bot client.

Logs in a bot account, keeps its tokens, and reads, edits, moves,
deletes, protects and uploads through the MediaWiki action API.

Requires the ``requests`` and ``packaging`` libraries.

http://www.mediawiki.org/

Installation
============

From a checkout of the source::

    pip install -e .

Example Usage
=============

.. code-block:: python

    import mwbot

Log in:

.. code-block:: python

    bot = mwbot.Bot({'api_url': 'https://en.wikipedia.org/w/api.php'})

    bot.login('MyCoolBot', password)

    print(bot.mw_version)

Edit a page:

.. code-block:: python

    bot.edit('User:MyCoolBot/sandbox', 'Hello World!', 'Made a test edit')

Read a page:

.. code-block:: python

    sandbox = bot.page('User:MyCoolBot/sandbox')
    contents = sandbox.read()

Upload a file (the title defaults to ``photo.png``):

.. code-block:: python

    bot.upload(None, '/tmp/photo.png', 'A photo')

Tokens are fetched on first use and then reused. If the wiki rejects one
with a ``badtoken`` error, fetch a new one and try again:

.. code-block:: python

    result = bot.edit(title, text)
    if result.get('error', {}).get('code') == 'badtoken':
        bot.refresh_edit_token()
        result = bot.edit(title, text)

Every request counts towards ``bot.counter``:

.. code-block:: python

    print(bot.counter.info)

MIT Licensed.
"""

__version__ = '1.0.0'

from .bot import Bot, LoginState, DEFAULT_OPTIONS
from .page import Page
from .tokens import Tokens
from .excs import *
from .misc import merge, Counter, MWVersion

__all__ = [
    '__version__',
    'Bot',
    'LoginState',
    'DEFAULT_OPTIONS',
    'Page',
    'Tokens',
    'merge',
    'Counter',
    'MWVersion',
    'BotError',
    'MissingCredentialsError',
    'InvalidLoginResponseError',
    'LoginRejectedError',
    'SiteInfoUnavailableError',
    'UnsupportedServerVersionError',
    'TokenAcquisitionError',
    'MissingUploadTitleError',
    'PageMissingError',
    'WikiError',
    'TransportError',
]
