"""Test various aspects of Pages."""
from unittest import TestCase
import mwbot as mw
from mwbot.tests import CSRF, fake_api, make_bot

def revision_reply(revision, title='Sandbox', pageid=5):
    """A formatversion=1 revisions reply for one page."""
    return {'query': {'pages': {str(pageid): {
        'pageid': pageid,
        'ns': 0,
        'title': title,
        'revisions': [revision],
    }}}}

class TestPage(TestCase):
    """Test Pages."""
    def test_page(self):
        """Assert that Bot.page returns a Page, and Pages pass through."""
        bot = make_bot()
        page = bot.page('Sandbox')
        self.assertTrue(isinstance(page, mw.Page))
        self.assertIs(bot.page(page), page)
        self.assertEqual(page, bot.page('Sandbox'))
        self.assertEqual(hash(page), hash(bot.page('Sandbox')))
    def test_read_slots(self):
        """Assert reading finds content in the main slot."""
        bot = make_bot()
        fake_api(bot, revision_reply({'slots': {'main': {'*': 'hello'}}}))
        page = bot.page('Sandbox')
        self.assertEqual(page.read(), 'hello')
        self.assertEqual(page.content, 'hello')
        self.assertEqual(page.pageid, 5)
    def test_read_legacy(self):
        """Assert reading finds content directly on old revisions."""
        bot = make_bot()
        fake_api(bot, revision_reply({'*': 'old style'}))
        self.assertEqual(bot.page('Sandbox').read(), 'old style')
    def test_read_formatversion_2(self):
        """Assert pages given as a list are understood too."""
        bot = make_bot()
        fake_api(bot, {'query': {'pages': [{
            'pageid': 5, 'title': 'Sandbox',
            'revisions': [{'slots': {'main': {'content': 'new style'}}}],
        }]}})
        self.assertEqual(bot.page('Sandbox').read(), 'new style')
    def test_read_by_id(self):
        """Assert a page without title is read by ID."""
        bot = make_bot()
        api = fake_api(bot, revision_reply({'*': 'x'}, title='Found'))
        page = bot.page(pageid=5)
        page.read()
        self.assertEqual(api.calls[0]['data']['pageids'], 5)
        self.assertEqual(page.title, 'Found')
    def test_missing_page(self):
        """Assert that reading nonexistant pages raises."""
        bot = make_bot()
        fake_api(bot, {'query': {'pages': {'-1': {'ns': 0, 'missing': '',
                                                  'title': 'Nope'}}}})
        with self.assertRaises(mw.PageMissingError):
            bot.page('Nope').read()
    def test_edit(self):
        """Assert Page.edit edits its own title."""
        bot = make_bot()
        api = fake_api(bot, CSRF, {'edit': {'result': 'Success'}})
        result = bot.page('Sandbox').edit('text', 'summary')
        self.assertEqual(result['edit']['result'], 'Success')
        self.assertEqual(api.calls[1]['data']['title'], 'Sandbox')
    def test_move(self):
        """Assert moving a Page renames it."""
        bot = make_bot()
        fake_api(bot, CSRF, {'move': {}})
        page = bot.page('Old')
        page.move('New', 'rename')
        self.assertEqual(page.title, 'New')
    def test_update_by_id(self):
        """Assert a page known only by ID is updated by ID."""
        bot = make_bot()
        api = fake_api(bot, CSRF, {'edit': {}})
        bot.page(pageid=9).update('text')
        self.assertEqual(api.calls[1]['data']['pageid'], 9)
    def test_api_error(self):
        """Assert an API error is raised as such, not as a missing page."""
        bot = make_bot()
        reply = {'error': {'code': 'readapidenied',
                           'info': 'You need read permission.'}}
        fake_api(bot, reply)
        with self.assertRaises(mw.WikiError) as ctx:
            bot.page('Sandbox').read()
        self.assertEqual(ctx.exception.code, 'readapidenied')
        self.assertEqual(ctx.exception.response, reply)
        self.assertNotIsInstance(ctx.exception, mw.PageMissingError)
