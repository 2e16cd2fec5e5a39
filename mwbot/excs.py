"""
mwbot.excs - Exceptions raised by the bot.

To tell a rejected login apart from a network failure:

..code-block:: python

    try:
        bot.login('MyBot', password)
    except mwbot.LoginRejectedError as exc:
        print('Wrong password?', exc.reason)
    except mwbot.TransportError as exc:
        print('Could not reach the wiki:', exc)

Everything the bot raises by itself inherits from ``BotError``.
``TransportError`` is simply ``requests.exceptions.RequestException``;
errors from the HTTP layer (timeouts, bad statuses, undecodable JSON) are
never wrapped.
"""
from requests.exceptions import RequestException

__all__ = [
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

TransportError = RequestException

class BotError(Exception):
    """Base class for errors raised by mwbot itself.

    ``response`` is the decoded server reply that caused the error,
    or None if there was none.
    """
    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response

#pylint: disable=too-few-public-methods
class MissingCredentialsError(BotError):
    """login() was called without a username, password or API URL."""
    pass

class InvalidLoginResponseError(BotError):
    """The first login step did not hand out a login token."""
    pass

class LoginRejectedError(BotError):
    """The wiki refused the login. ``reason`` says why."""
    def __init__(self, reason, response=None):
        super().__init__('Could not login: {}'.format(reason), response)
        self.reason = reason

class SiteInfoUnavailableError(BotError):
    """The siteinfo query came back without a ``general`` section."""
    pass

class UnsupportedServerVersionError(BotError):
    """The wiki's ``generator`` string has no usable version in it."""
    def __init__(self, generator, response=None):
        super().__init__('Invalid MediaWiki version: {!r}'.format(generator),
                         response)
        self.generator = generator

class TokenAcquisitionError(BotError):
    """The token query came back without the requested token."""
    pass

class MissingUploadTitleError(BotError, ValueError):
    """upload() got raw data and no title to store it under."""
    pass

class PageMissingError(BotError):
    """The page does not exist."""
    pass

class WikiError(BotError):
    """An error returned by the wiki's API. ``code`` is the API error code."""
    def __init__(self, response):
        error = response['error']
        self.code = error.get('code')
        super().__init__('{}: {}'.format(self.code, error.get('info')),
                         response)
