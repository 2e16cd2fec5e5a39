"""A fake MediaWiki API for the test suite.

Replies are handed out in order; every request is recorded in ``calls``
with its keyword arguments (``method``, ``url``, ``data``, ``files``...).
"""
import json
import requests
import mwbot as mw

API = 'https://wiki.example.org/w/api.php'

LOGIN_CHALLENGE = {'login': {'result': 'NeedToken', 'token': 'T1'}}
LOGIN_SUCCESS = {'login': {'result': 'Success', 'lguserid': 1,
                           'lgusername': 'TestBot'}}
SITEINFO = {'query': {'general': {'generator': 'MediaWiki 1.35.0',
                                  'sitename': 'Example Wiki'}}}
CSRF = {'query': {'tokens': {'csrftoken': 'ABC'}}}

def make_response(data=None, status=200, text=None):
    """Build a real requests.Response holding ``data`` as JSON."""
    response = requests.Response()
    response.status_code = status
    response.reason = 'OK' if status < 400 else 'Error'
    response.url = API
    response.encoding = 'utf-8'
    if text is None:
        text = json.dumps(data)
    response._content = text.encode('utf-8') #pylint: disable=protected-access
    return response

class FakeAPI:
    """Stands in for ``requests.Session.request``."""
    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def __call__(self, method, url, **kwargs):
        self.calls.append(dict(kwargs, method=method, url=url))
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, requests.Response):
            return reply
        return make_response(reply)

    def forms(self):
        """The form of each request so far."""
        return [call.get('data') for call in self.calls]

def fake_api(bot, *replies):
    """Route the requests of ``bot`` to a FakeAPI."""
    api = FakeAPI(*replies)
    bot._session.request = api #pylint: disable=protected-access
    return api

def make_bot(**options):
    """A quiet Bot pointed at the fake API."""
    return mw.Bot(mw.merge({'api_url': API}, options))
