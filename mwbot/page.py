"""
This submodule contains the Page object.
"""
from .excs import PageMissingError, WikiError
from .misc import dig

__all__ = [
    'Page',
]

class Page:
    """The class for a page on a wiki.

    Must be initialized with a Bot instance. Every action goes through
    the bot, so tokens and options are shared between all its Pages.
    """
    def __init__(self, bot, title=None, pageid=None, **data):
        """Initialize a page with its bot, and a title or page ID."""
        self.bot = bot
        self.title = title
        self.pageid = pageid
        self.content = None
        self.__dict__.update(data)

    def __repr__(self):
        """Represent a page instance."""
        return "<Page {name}>".format(name=self.title)

    def __eq__(self, other):
        """Check if two pages are the same."""
        if not isinstance(other, Page):
            return NotImplemented
        return self.title == other.title

    def __hash__(self):
        """Page.__hash__() <==> hash(Page)"""
        return hash(self.title)

    __str__ = __repr__

    def read(self):
        """Retrieve the page's content.

        Raises PageMissingError if the page does not exist, and
        WikiError if the API answers with an error.
        """
        if self.title is None and self.pageid is not None:
            data = self.bot.read_from_id(self.pageid)
        else:
            data = self.bot.read(self.title)
        if isinstance(dig(data, 'error'), dict):
            raise WikiError(data)
        pages = dig(data, 'query', 'pages')
        if isinstance(pages, dict): # formatversion=1 keys pages by ID
            pages = list(pages.values())
        if not pages or 'missing' in pages[0] or 'invalid' in pages[0]:
            raise PageMissingError('The page does not exist.', data)
        page_data = pages[0]
        self.title = page_data.get('title', self.title)
        self.pageid = page_data.get('pageid', self.pageid)
        revision = page_data['revisions'][0]
        # slot content on 1.32+, directly on the revision before
        slot = dig(revision, 'slots', 'main') or revision
        self.content = slot.get('*', slot.get('content'))
        return self.content

    def edit(self, content, summary=None, **kwargs):
        """Edit the page with the content content."""
        return self.bot.edit(self.title, content, summary, **kwargs)

    def create(self, content, summary=None, **kwargs):
        """Create the page; fails if it exists."""
        return self.bot.create(self.title, content, summary, **kwargs)

    def update(self, content, summary=None, **kwargs):
        """Edit the page; fails if it does not exist."""
        if self.title is None and self.pageid is not None:
            return self.bot.update_from_id(self.pageid, content,
                                           summary, **kwargs)
        return self.bot.update(self.title, content, summary, **kwargs)

    def delete(self, reason=None, **kwargs):
        """Delete this page. Note: this is NOT the same thing
        as `del page`! `del` only unsets names, not objects.
        """
        return self.bot.delete(self.title, reason, **kwargs)

    def move(self, newtitle, reason=None, **kwargs):
        """Move this page to a new title."""
        result = self.bot.move(self.title, newtitle, reason, **kwargs)
        self.title = newtitle #duh
        return result

    def protect(self, reason=None, protections=None, **kwargs):
        """Protect this page. See Bot.protect for the arguments."""
        return self.bot.protect(self.title, reason, protections, **kwargs)
