"""

    restbind -- binding resources to routes of WebOb based WSGI applications
    ========================================================================

    This module holds the routing engine resources are bound to by
    :mod:`restbind.crud`: endpoints which match a path and a method and run
    guards, groups of them under a common path and URL reversal by route
    name.

"""

from urllib.parse import urlencode

from webob import Response
from webob.exc import HTTPException

from restbind.urlpattern import URLPattern
from restbind.utils import join
from restbind.exc import (
    NoMatchFound, NoURLPatternMatched, MethodNotAllowed, RouteGuarded,
    RouteConfigurationError, RouteReversalError)

__all__ = (
    'Trace', 'Route', 'Endpoint', 'RouteGroup', 'URLPattern',
    'GET', 'POST', 'PUT', 'DELETE', 'NoMatchFound', 'RouteConfigurationError')

GET = 'GET'
POST = 'POST'
PUT = 'PUT'
DELETE = 'DELETE'

class Trace(object):
    """ Result of route matching

    :attr kwargs:
        placeholder values by their labels
    :attr routes:
        matched routes, the endpoint being the last one
    """

    def __init__(self, kwargs, routes):
        self.kwargs = kwargs
        self.routes = routes

    @property
    def endpoint(self):
        return self.routes[-1]

    @property
    def target(self):
        return self.endpoint.target

    def __add__(self, other):
        kwargs = dict(self.kwargs)
        kwargs.update(other.kwargs)
        return self.__class__(kwargs, self.routes + other.routes)

class Route(object):
    """ Base class for routes

    :param pattern:
        path pattern, ``None`` for routes which don't consume path
    """

    def __init__(self, pattern=None):
        if pattern and not pattern.startswith('/'):
            pattern = '/' + pattern
        self.pattern = URLPattern(pattern) if pattern else None

    def __call__(self, request):
        """ Match :class:`webob.Request` and return :class:`Trace`

        :raises restbind.exc.NoMatchFound:
            if request doesn't reach any endpoint
        """
        return self.match(request.path_info, request)

    def match_pattern(self, path_info):
        if self.pattern is None:
            return path_info, {}
        return self.pattern.match(path_info)

    def match(self, path_info, request):
        raise NotImplementedError()

    def names(self):
        """ Iterate over ``(name, path)`` of named endpoints"""
        raise NotImplementedError()

    def reverse(self, name, *args, **query):
        """ Build URL for route ``name``

        :param args:
            values of path placeholders
        :param query:
            query string params
        """
        paths = {}
        for route_name, path in self.names():
            if route_name in paths:
                raise RouteConfigurationError(
                    "route with name '%s' already defined" % route_name)
            paths[route_name] = path
        if name not in paths:
            raise RouteReversalError("no route with name '%s'" % name)
        url = URLPattern(paths[name] or '/').reverse(*args)
        if query:
            url += '?' + urlencode(query)
        return url

class Endpoint(Route):
    """ Route which leads to ``target``

    :param method:
        HTTP method to match
    :param target:
        object associated with the route, for an application it's a callable
        of ``(request, trace)`` returning response
    :param guards:
        callables of ``(request, trace)`` run in order once path and method
        matched, see :meth:`run_guards`
    :param name:
        optional name for URL reversal
    """

    def __init__(self, method, target, pattern=None, guards=(), name=None):
        super(Endpoint, self).__init__(pattern)
        self.method = method
        self.target = target
        self.guards = list(guards)
        self.name = name

    def match(self, path_info, request):
        rest, kwargs = self.match_pattern(path_info)
        if rest not in ('', '/'):
            raise NoURLPatternMatched(path_info)
        if request.method != self.method:
            raise MethodNotAllowed(request.method)
        return self.run_guards(request, Trace(kwargs, [self]))

    def run_guards(self, request, trace):
        """ Pass ``request`` through guards

        A guard lets request through by returning ``None`` or a new trace. It
        answers request itself by returning :class:`webob.Response` or raising
        :class:`webob.exc.HTTPException`, then the rest of guards and the
        target don't run.

        :raises restbind.exc.RouteGuarded:
            if a guard answered request
        """
        for guard in self.guards:
            try:
                result = guard(request, trace)
            except HTTPException as e:
                raise RouteGuarded(e)
            if isinstance(result, Trace):
                trace = result
            elif isinstance(result, Response):
                raise RouteGuarded(result)
            elif result is not None:
                raise RouteConfigurationError(
                    'guard %r returned %r, expected trace, response or None'
                    % (guard, result))
        return trace

    def names(self):
        if self.name:
            yield self.name, self.pattern.pattern if self.pattern else ''

    def __repr__(self):
        return '%s(%r, %r, pattern=%r)' % (
            self.__class__.__name__, self.method, self.target, self.pattern)

class RouteGroup(Route):
    """ Routes sharing a path prefix, the first one matching wins"""

    def __init__(self, routes, pattern=None):
        super(RouteGroup, self).__init__(pattern)
        self.routes = routes

    def match(self, path_info, request):
        rest, kwargs = self.match_pattern(path_info)
        for route in self.routes:
            try:
                trace = route.match(rest, request)
            except NoURLPatternMatched:
                continue
            return Trace(kwargs, [self]) + trace
        raise NoURLPatternMatched(path_info)

    def names(self):
        prefix = self.pattern.pattern if self.pattern else ''
        for route in self.routes:
            for name, path in route.names():
                yield name, join(prefix, path) if path else prefix

    def __repr__(self):
        return '%s(%r, pattern=%r)' % (
            self.__class__.__name__, self.routes, self.pattern)
