"""

    restbind.urlpattern -- URL patterns with ``{label}`` placeholders
    =================================================================

"""

import re

from restbind.exc import (
    InvalidRoutePattern, NoURLPatternMatched, RouteReversalError)

__all__ = ('URLPattern',)

class URLPattern(object):
    """ Pattern like ``/users/{id}``

    A placeholder matches a single non-empty path segment. Patterns match a
    prefix of a path which ends at a segment boundary, the rest of the path is
    left to nested routes.
    """

    placeholder_re = re.compile(r'{([a-zA-Z][a-zA-Z0-9_]*)}')

    def __init__(self, pattern):
        self.pattern = pattern
        self.labels = self.placeholder_re.findall(pattern)
        if len(set(self.labels)) != len(self.labels):
            raise InvalidRoutePattern(
                "duplicate placeholder in '%s'" % pattern)
        parts = self.placeholder_re.split(pattern)
        # split() alternates literal text and labels
        regex = ''.join(
            '(?P<%s>[^/]+)' % part if n % 2 else re.escape(part)
            for n, part in enumerate(parts))
        self.regex = re.compile(regex + '(?=/|$)')

    def match(self, path_info):
        """ Return unmatched rest of ``path_info`` and placeholder values"""
        m = self.regex.match(path_info)
        if m is None:
            raise NoURLPatternMatched(path_info)
        return path_info[m.end():], m.groupdict()

    def reverse(self, *args):
        """ Substitute placeholders with ``args`` in order"""
        if len(args) != len(self.labels):
            raise RouteReversalError(
                "'%s' needs %d params, got %r" % (
                    self.pattern, len(self.labels), args))
        values = iter(args)
        return self.placeholder_re.sub(
            lambda m: str(next(values)), self.pattern)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.pattern)
