"""This submodule contains the small helpers and value classes."""
import re
import threading
from functools import total_ordering
from packaging.version import InvalidVersion, Version

__all__ = [
    'merge',
    'dig',
    'Counter',
    'MWVersion',
]

def merge(*records):
    """Merge dicts left to right into a new dict.

    Keys of later dicts replace those of earlier ones. Nested dicts are
    replaced wholesale, not combined. ``None`` records are skipped.
    """
    result = {}
    for record in records:
        if record:
            result.update(record)
    return result

def dig(data, *path):
    """Follow ``path`` into nested API data.

    Returns None as soon as a level is missing or is not a dict.
    """
    for key in path:
        if not isinstance(data, dict) or key not in data:
            return None
        data = data[key]
    return data

class Counter:
    """Counts the requests a Bot has made.

    ``total`` and ``resolved`` are bumped before each request goes out,
    ``fulfilled`` or ``rejected`` once it has finished.
    """
    def __init__(self):
        """Start all counts at zero."""
        self.total = 0
        self.resolved = 0
        self.fulfilled = 0
        self.rejected = 0
        self._lock = threading.Lock()

    def __repr__(self):
        """Represent a Counter."""
        return ('<Counter total={0.total} resolved={0.resolved} '
                'fulfilled={0.fulfilled} rejected={0.rejected}>'
                .format(self))

    __str__ = __repr__

    def start(self):
        """A request is about to be sent."""
        with self._lock:
            self.total += 1
            self.resolved += 1

    def fulfil(self):
        """A request succeeded."""
        with self._lock:
            self.fulfilled += 1

    def reject(self):
        """A request failed."""
        with self._lock:
            self.rejected += 1

    @property
    def info(self):
        """Return a dict of the current counts."""
        return {
            'total': self.total,
            'resolved': self.resolved,
            'fulfilled': self.fulfilled,
            'rejected': self.rejected,
        }

# first x, x.y or x.y.z run of digits in a generator string
_VERSION_RE = re.compile(r'(\d+)(?:\.(\d+))?(?:\.(\d+))?')

@total_ordering
class MWVersion:
    """A MediaWiki version, e.g. parsed from "MediaWiki 1.35.0"."""

    #: revisions are served as named slots from this version on
    SLOTS_SINCE = Version('1.32.0')

    def __init__(self, version):
        """Wrap a version string or ``packaging`` Version.

        Raises InvalidVersion for strings that are not versions at all.
        """
        if not isinstance(version, Version):
            version = Version(version)
        self._version = version

    @classmethod
    def coerce(cls, text):
        """Pull the first version number out of ``text``.

        Missing parts are zero-filled, so "MediaWiki 1.35" gives 1.35.0.
        Returns None when ``text`` has no version number in it.
        """
        if not isinstance(text, str):
            return None
        match = _VERSION_RE.search(text)
        if match is None:
            return None
        parts = [part or '0' for part in match.groups()]
        try:
            return cls('.'.join(parts))
        except InvalidVersion:
            return None

    def supports_slot_revisions(self):
        """Whether the server nests revision content under slots."""
        return self._version >= self.SLOTS_SINCE

    def __repr__(self):
        """Represent a MWVersion."""
        return '<MWVersion {}>'.format(self._version)

    def __str__(self):
        """Return the bare version, e.g. "1.35.0"."""
        return str(self._version)

    @staticmethod
    def _comparable(other):
        """Turn version strings into MWVersions; None if not comparable."""
        if isinstance(other, str):
            try:
                return MWVersion(other)
            except InvalidVersion:
                return None
        if isinstance(other, MWVersion):
            return other
        return None

    def __eq__(self, other):
        """Compare with another MWVersion or a version string."""
        other = self._comparable(other)
        if other is None:
            return NotImplemented
        return self._version == other._version

    def __lt__(self, other):
        """Order by version number."""
        other = self._comparable(other)
        if other is None:
            return NotImplemented
        return self._version < other._version

    def __hash__(self):
        """MWVersion.__hash__() <==> hash(MWVersion)"""
        return hash(self._version)
