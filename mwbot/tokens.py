"""
This submodule contains the token cache.

Each kind of token is fetched at most once per Bot, unless refreshed
explicitly.
"""
from .excs import TokenAcquisitionError
from .misc import dig

class Tokens:
    """Fetches and caches the tokens of a Bot."""
    def __init__(self, bot):
        """Initialize the cache with its bot. Nothing is cached yet."""
        self.bot = bot
        self.edit_token = None
        self.create_account_token = None

    def __repr__(self):
        """Represent the token cache."""
        return '<Tokens edit={} createaccount={}>'.format(
            self.edit_token is not None,
            self.create_account_token is not None
        )

    __str__ = __repr__

    def fetch(self, kind, what):
        """Query a token of type ``kind`` from the wiki.

        ``what`` names the token in log and error messages.
        The tokens in the reply are merged into the bot's state.
        """
        params = {
            'action': 'query',
            'meta': 'tokens',
            'type': kind,
        }
        data = self.bot.request(params)
        tokens = dig(data, 'query', 'tokens')
        token = dig(tokens, kind + 'token')
        if not token:
            message = 'Could not get {} token'.format(what)
            self.bot.log(message)
            raise TokenAcquisitionError(message, data)
        self.bot._merge_state(tokens) #pylint: disable=protected-access
        return token

    def get_edit_token(self):
        """Return the cached csrf token, fetching it if needed."""
        if self.edit_token:
            return self.edit_token
        return self.refresh_edit_token()

    def refresh_edit_token(self):
        """Fetch a new csrf token and cache it."""
        self.edit_token = self.fetch('csrf', 'edit')
        return self.edit_token

    def get_create_account_token(self):
        """Return the cached account creation token, fetching it if needed."""
        if self.create_account_token:
            return self.create_account_token
        return self.refresh_create_account_token()

    def refresh_create_account_token(self):
        """Fetch a new account creation token and cache it."""
        self.create_account_token = self.fetch('createaccount',
                                               'account creation')
        return self.create_account_token
