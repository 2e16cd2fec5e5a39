"""
See the Bot docstrings.
"""
import logging
import os
from enum import Enum
from types import MappingProxyType
import requests
from . import __version__
from .excs import (MissingCredentialsError, InvalidLoginResponseError,
                   LoginRejectedError, SiteInfoUnavailableError,
                   UnsupportedServerVersionError, MissingUploadTitleError)
from .misc import merge, dig, Counter, MWVersion
from .page import Page
from .tokens import Tokens

__all__ = [
    'Bot',
    'LoginState',
    'DEFAULT_OPTIONS',
]

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    'api_url': None,
    'username': None,
    'password': None,
    'default_summary': 'MWBot',
    'verbose': False,
    'concurrency': 1, # advisory only, nothing here schedules requests
    'sparql_endpoint': 'https://query.wikidata.org/bigdata/namespace/wdq/sparql',
}

DEFAULT_TIMEOUT = 120

SPARQL_ACCEPT = 'application/sparql-results+json'

class LoginState(Enum):
    """Where a Bot is in the login sequence."""
    UNAUTHENTICATED = 'unauthenticated'
    AWAITING_CHALLENGE = 'awaiting challenge'
    AWAITING_CONFIRMATION = 'awaiting confirmation'
    AUTHENTICATED = 'authenticated'
    FAILED = 'failed'

class Bot: #pylint: disable=too-many-public-methods,too-many-instance-attributes
    #pylint: disable=too-many-arguments
    """A bot account on one wiki. Contains the API actions as methods."""

    def __init__(self, options=None, request_options=None):
        """Initialize a bot with its options.

        ``options`` is merged over DEFAULT_OPTIONS and should at least
        contain ``api_url``. ``request_options`` is merged over the default
        keyword arguments for ``requests.Session.request``.

        Nothing is requested until the first API call.
        """
        self._state = {}
        self.logged_in = False
        self.login_state = LoginState.UNAUTHENTICATED
        self.mw_version = None
        self.counter = Counter()
        self.tokens = Tokens(self)
        self._session = requests.session()
        self.options = merge(DEFAULT_OPTIONS)
        self.set_options(options)
        self.request_options = {
            'method': 'POST',
            'url': None,
            'headers': {
                'User-Agent': 'mwbot/' + __version__,
            },
            'params': {'format': 'json'},
            'data': {},
            'timeout': DEFAULT_TIMEOUT,
        }
        self.set_request_options(request_options)

    def __repr__(self):
        """Represent a Bot."""
        return '<Bot at {url}>'.format(url=self.options['api_url'])

    __str__ = __repr__

    @property
    def version(self):
        """The version of this library."""
        return __version__

    @property
    def state(self):
        """A read-only view of what the wiki has told us so far."""
        return MappingProxyType(self._state)

    def _merge_state(self, partial):
        """Merge server data into the state."""
        self._state = merge(self._state, partial)

    def log(self, message):
        """Log a message if the bot is verbose."""
        if self.options['verbose']:
            logger.info('[mwbot] %s', message)

    def set_options(self, options):
        """Merge ``options`` over the current options."""
        self.options = merge(self.options, options)

    def set_request_options(self, request_options):
        """Merge ``request_options`` over the current request options."""
        self.request_options = merge(self.request_options, request_options)

    def set_api_url(self, api_url):
        """Point the bot at another API endpoint."""
        self.options['api_url'] = api_url

    # Requests

    def prepare_request(self, params, custom_options=None):
        """Build the keyword arguments for one request.

        ``custom_options`` override the bot's request options, and
        ``params`` override fields of the default form.
        """
        options = merge(self.request_options, custom_options)
        if not options.get('url'):
            options['url'] = self.options['api_url']
        options['data'] = merge(options.get('data'), params)
        return options

    def raw_request(self, options):
        """Send a request and check its HTTP status.

        Remains public since it might be used per se.
        """
        logger.debug('%s %s action=%s', options.get('method'),
                     options.get('url'), dig(options, 'data', 'action'))
        response = self._session.request(**options)
        response.raise_for_status()
        return response

    def raw_request_json(self, options):
        """Send a request and decode the JSON reply."""
        self.counter.start()
        try:
            data = self.raw_request(options).json()
        except BaseException:
            self.counter.reject()
            raise
        self.counter.fulfil()
        return data

    def raw_request_text(self, options):
        """Send a request and return the reply as text."""
        self.counter.start()
        try:
            text = self.raw_request(options).text
        except BaseException:
            self.counter.reject()
            raise
        self.counter.fulfil()
        return text

    def request_json(self, params, custom_options=None):
        """Send ``params`` to the API and return the decoded reply."""
        return self.raw_request_json(
            self.prepare_request(params, custom_options))

    def request_text(self, params, custom_options=None):
        """Send ``params`` to the API and return the raw reply."""
        return self.raw_request_text(
            self.prepare_request(params, custom_options))

    request = request_json

    # Login, site info and tokens

    def login(self, username=None, password=None, **options):
        """Log in with a username and password; store cookies.

        Any other keyword arguments (e.g. ``api_url``) are merged into
        the options first. After logging in, the site info is fetched and
        the MediaWiki version is detected; login is only complete once
        that worked.

        Returns the state.
        """
        if username is not None:
            options['username'] = username
        if password is not None:
            options['password'] = password
        self.set_options(options)
        username = self.options['username']
        password = self.options['password']
        api_url = self.options['api_url']
        if not (username and password and api_url):
            self.log('Missing login credentials.')
            raise MissingCredentialsError('Missing login credentials.')

        login_string = '{}@{}'.format(username, api_url.replace('/api.php', ''))
        params = {
            'action': 'login',
            'lgname': username,
            'lgpassword': password,
        }
        self.logged_in = False
        self.mw_version = None
        self.login_state = LoginState.AWAITING_CHALLENGE
        try:
            data = self.request(params)
            lgtoken = dig(data, 'login', 'token')
            if not lgtoken:
                self.log('Login failed with invalid response: ' + login_string)
                raise InvalidLoginResponseError('Invalid response from API.',
                                                data)
            self._merge_state(data['login'])

            self.login_state = LoginState.AWAITING_CONFIRMATION
            params['lgtoken'] = lgtoken
            data = self.request(params)
            result = dig(data, 'login', 'result')
            if result != 'Success':
                reason = dig(data, 'login', 'reason')
                if not isinstance(reason, str):
                    reason = result or 'Unknown reason'
                self.log('Login failed: ' + login_string)
                raise LoginRejectedError(reason, data)
        except Exception:
            self.login_state = LoginState.FAILED
            raise
        self._merge_state(data['login'])
        self.logged_in = True
        self.login_state = LoginState.AUTHENTICATED

        self.get_site_info()
        generator = self._state.get('generator')
        version = MWVersion.coerce(generator)
        if version is None:
            self.log('Invalid MediaWiki version: {!r}'.format(generator))
            raise UnsupportedServerVersionError(generator)
        self.mw_version = version
        logger.debug('logged in as %s, MediaWiki %s', login_string, version)
        return self.state

    def login_then_edit_token(self, *args, **kwargs):
        """Log in and return a fresh csrf token."""
        self.login(*args, **kwargs)
        return self.refresh_edit_token()

    def login_then_account_creation_token(self, *args, **kwargs):
        """Log in and return a fresh account creation token."""
        self.login(*args, **kwargs)
        return self.refresh_account_creation_token()

    def get_site_info(self):
        """Fetch the general site info and merge it into the state."""
        data = self.request({
            'action': 'query',
            'meta': 'siteinfo',
            'siprop': 'general',
        })
        general = dig(data, 'query', 'general')
        if not isinstance(general, dict):
            self.log('Could not get siteinfo')
            raise SiteInfoUnavailableError('Could not get siteinfo', data)
        self._merge_state(general)
        return self.state

    def get_edit_token(self):
        """Return the csrf token, fetching it only the first time."""
        return self.tokens.get_edit_token()

    def refresh_edit_token(self):
        """Fetch a new csrf token, e.g. after a ``badtoken`` error."""
        return self.tokens.refresh_edit_token()

    def get_account_creation_token(self):
        """Return the account creation token, fetching it only the first time."""
        return self.tokens.get_create_account_token()

    def refresh_account_creation_token(self):
        """Fetch a new account creation token."""
        return self.tokens.refresh_create_account_token()

    # Actions

    def _summary(self, summary):
        """Fall back to the default summary."""
        if summary is None:
            return self.options['default_summary']
        return summary

    def page(self, title=None, **evil):
        """Return a Page instance based off of the title of the page."""
        if isinstance(title, Page):
            return title
        return Page(self, title=title, **evil)

    def query(self, custom_options=None, **params):
        """Run an arbitrary ``action=query`` request."""
        return self.request(merge({'action': 'query'}, params), custom_options)

    def read(self, title, redirect=True, custom_options=None):
        """Read the content of the latest revision of ``title``.

        ``title`` may also be several titles joined by "|".
        """
        return self.read_with_props(title, 'content', redirect, custom_options)

    def read_with_props(self, title, props, redirect=True, custom_options=None):
        """Read the latest revision of ``title`` with the revision
        properties ``props`` (e.g. "content|timestamp").
        """
        return self._read({'titles': title}, props, redirect, custom_options)

    def read_from_id(self, pageid, redirect=True, custom_options=None):
        """Same as ``read``, by page ID."""
        return self.read_with_props_from_id(pageid, 'content',
                                            redirect, custom_options)

    def read_with_props_from_id(self, pageid, props,
                                redirect=True, custom_options=None):
        """Same as ``read_with_props``, by page ID."""
        return self._read({'pageids': pageid}, props, redirect, custom_options)

    def _read(self, target, props, redirect, custom_options):
        """Centralize the revision queries."""
        params = {
            'action': 'query',
            'prop': 'revisions',
            'rvprop': props,
        }
        params.update(target)
        if self.mw_version is not None \
               and self.mw_version.supports_slot_revisions():
            params['rvslots'] = 'main'
        if redirect:
            params['redirects'] = 1
        return self.request(params, custom_options)

    def edit(self, title, content, summary=None, custom_options=None):
        """Edit (or create) the page ``title``."""
        return self._edit({'title': title}, content, summary, custom_options)

    def create(self, title, content, summary=None, custom_options=None):
        """Create the page ``title``; fails if it already exists."""
        return self._edit({'title': title, 'createonly': 1},
                          content, summary, custom_options)

    def update(self, title, content, summary=None, custom_options=None):
        """Edit the page ``title``; fails if it does not exist."""
        return self._edit({'title': title, 'nocreate': 1},
                          content, summary, custom_options)

    def update_from_id(self, pageid, content, summary=None,
                       custom_options=None):
        """Same as ``update``, by page ID."""
        return self._edit({'pageid': pageid, 'nocreate': 1},
                          content, summary, custom_options)

    def _edit(self, target, content, summary, custom_options):
        """Centralize the edit variants."""
        params = {
            'action': 'edit',
            'text': content,
            'summary': self._summary(summary),
            'token': self.get_edit_token(),
            'bot': 1,
        }
        params.update(target)
        return self.request(params, custom_options)

    def delete(self, title, reason=None, custom_options=None):
        """Delete the page ``title``."""
        return self.request({
            'action': 'delete',
            'title': title,
            'reason': self._summary(reason),
            'token': self.get_edit_token(),
            'bot': 1,
        }, custom_options)

    def move(self, old_title, new_title, reason=None, custom_options=None):
        """Move the page ``old_title`` to ``new_title``."""
        return self.request({
            'action': 'move',
            'from': old_title,
            'to': new_title,
            'reason': self._summary(reason),
            'token': self.get_edit_token(),
            'bot': 1,
        }, custom_options)

    def protect(self, title, reason=None, protections=None,
                expiry='infinite', custom_options=None):
        """Protect the page ``title``.

        ``protections`` is a dict of action: level pairs, e.g.
        ``{'edit': 'autoconfirmed', 'move': 'sysop'}``; by default only
        sysops may edit. ``expiry`` is one expiry for all of them, or a
        list with one expiry per pair.
        """
        if protections is None:
            protections = {'edit': 'sysop'}
        if not isinstance(expiry, str):
            expiry = '|'.join(expiry)
        return self.request({
            'action': 'protect',
            'title': title,
            'protections': '|'.join(k + '=' + v
                                    for k, v in protections.items()),
            'expiry': expiry,
            'reason': self._summary(reason),
            'token': self.get_edit_token(),
        }, custom_options)

    def upload(self, title, file, comment='', form_options=None,
               custom_options=None):
        """Upload a file.

        ``file`` is a path, the file's bytes, or a file object open in
        BYTES mode. A path is read into memory entirely, and its base name
        is the default for ``title`` (the target filename).
        ``form_options`` are extra upload parameters, e.g.
        ``{'text': '== Summary =='}``.
        """
        if isinstance(file, (str, os.PathLike)):
            if not title:
                title = os.path.basename(file)
            with open(file, 'rb') as fileobj:
                file = fileobj.read()
        elif hasattr(file, 'read'):
            file = file.read()
        if not title:
            self.log('No title provided for upload')
            raise MissingUploadTitleError('No title provided for upload')

        form = merge({
            'action': 'upload',
            'filename': title,
            'comment': comment,
            'file': file,
            'token': self.get_edit_token(),
        }, form_options)
        # one multipart part per field
        files = {}
        for name, value in form.items():
            if isinstance(value, bytes):
                files[name] = (title, value)
            elif value is not None:
                files[name] = (None, str(value))
        options = merge(self.prepare_request({}, custom_options), {
            'data': None,
            'files': files,
        })
        return self.raw_request_json(options)

    def upload_overwrite(self, title, file, comment='', form_options=None,
                         custom_options=None):
        """Upload a file, overwriting any existing file of that name."""
        return self.upload(title, file, comment,
                           merge({'ignorewarnings': 1}, form_options),
                           custom_options)

    def create_account(self, username, password, reason=None, email=None,
                       custom_options=None):
        """Create an account."""
        return self.request({
            'action': 'createaccount',
            'username': username,
            'password': password,
            'retype': password,
            'email': email,
            'reason': reason,
            'createtoken': self.get_account_creation_token(),
            'createreturnurl': self.options['api_url'],
        }, custom_options)

    def ask_query(self, query, api_url=None, custom_options=None):
        """Run a Semantic MediaWiki ``#ask`` query.

        ``api_url`` defaults to the bot's API.
        """
        return self.request({
            'action': 'ask',
            'query': query,
        }, merge({'url': api_url}, custom_options))

    def sparql_query(self, query, endpoint=None, custom_options=None):
        """Run a SPARQL query, by default against Wikidata's query service.

        The default form of the bot is not sent along.
        """
        options = merge(self.request_options, {
            'url': endpoint or self.options['sparql_endpoint'],
            'headers': merge(self.request_options.get('headers'),
                             {'Accept': SPARQL_ACCEPT}),
            'data': {'query': query},
        }, custom_options)
        return self.raw_request_json(options)
