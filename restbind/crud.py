"""

    restbind.crud -- binding resources to collection and item routes
    ================================================================

    Usage::

        app = Application()
        crud(app)
        app.crud('users', resource)
        app.crud('/posts/:postId', authenticated, resource)

    Binding ``users`` registers (for operations the resource has)::

        POST    /users          create(query, model)
        GET     /users          read(query)
        GET     /users/{id}     read_by_id(id, query) for each id in "1,2,3"
        PUT     /users/{id}     update(id, query, model)
        DELETE  /users/{id}     delete(id, query) for each id in "1,2,3"

"""

import logging
import re

from webob.exc import HTTPBadRequest

from restbind import Endpoint, RouteGroup
from restbind.exc import (
    RouteConfigurationError, InvalidRoutePattern, InvalidResource)
from restbind.outcome import as_outcome, aggregate
from restbind.resource import capabilities, bindings
from restbind.utils import join, split_ids

__all__ = ('crud', 'Binder', 'OperationAdapter', 'paths')

log = logging.getLogger(__name__)

_label_re = re.compile(r'^[a-zA-Z][a-zA-Z0-9_]*$')

def paths(path, id_param='id'):
    """ Compute collection path, item path and identifier key for ``path``

    The identifier placeholder is a segment starting with ``:``, if there's
    none ``id_param`` is used.

        >>> paths('users')
        ('/users', '/users/{id}', 'id')
        >>> paths('/users/:userId')
        ('/users', '/users/{userId}', 'userId')

    """
    if not path.startswith('/'):
        path = '/' + path
    segments = path.split('/')
    placeholders = [n for n, s in enumerate(segments) if s.startswith(':')]
    if len(placeholders) > 1:
        raise InvalidRoutePattern(
            "only one identifier placeholder allowed in '%s'" % path)
    if placeholders:
        key = segments.pop(placeholders[0])[1:]
        collection = '/'.join(segments)
    else:
        key = id_param
        collection = path
    if not _label_re.match(key):
        raise InvalidRoutePattern(
            "invalid identifier placeholder '%s' in '%s'" % (key, path))
    collection = collection.rstrip('/') or '/'
    return collection, join(collection, '{%s}' % key), key

def read_model(request):
    """ Decode JSON body of ``request``, ``None`` if there's no body"""
    if not request.body:
        return None
    try:
        return request.json_body
    except ValueError:
        raise HTTPBadRequest('malformed JSON body')

class OperationAdapter(object):
    """ Route target which invokes resource operation and translates its
    outcome into response

    :param op:
        operation callable
    :param operation:
        operation name, one of :data:`restbind.resource.OPERATIONS`
    :param key:
        label of identifier placeholder
    :param separator:
        separator of identifiers in a path segment
    """

    def __init__(self, op, operation, key='id', separator=','):
        self.op = op
        self.operation = operation
        self.key = key
        self.separator = separator
        self.invoke = getattr(self, operation)

    def __call__(self, request, trace):
        outcome = self.invoke(request, trace, request.GET.mixed())
        log.debug('%s %s -> %r', request.method, request.path_info, outcome)
        return outcome.to_response()

    def ids(self, trace):
        return split_ids(trace.kwargs[self.key], self.separator)

    def create(self, request, trace, query):
        return as_outcome(self.op(query, read_model(request)))

    def read(self, request, trace, query):
        return as_outcome(self.op(query))

    def read_by_id(self, request, trace, query):
        return aggregate(self.op(i, query) for i in self.ids(trace))

    def update(self, request, trace, query):
        # no fan-out, the segment is passed as a single identifier
        return as_outcome(
            self.op(trace.kwargs[self.key], query, read_model(request)))

    def delete(self, request, trace, query):
        return aggregate(self.op(i, query) for i in self.ids(trace))

    def __repr__(self):
        return '%s(%r, %r)' % (
            self.__class__.__name__, self.operation, self.op)

class Binder(object):
    """ Binds resources to routes of ``app``

    :param app:
        application with ``add(route)`` method, usually
        :class:`restbind.app.Application`
    :param id_param:
        name of identifier placeholder if path doesn't specify one
    :param separator:
        separator of identifiers in item path segment
    """

    adapter_cls = OperationAdapter

    def __init__(self, app, id_param='id', separator=','):
        self.app = app
        self.id_param = id_param
        self.separator = separator

    def bind(self, path, *args, **kwargs):
        """ Bind resource to routes under ``path``

        :param path:
            base path, may contain identifier placeholder like ``:userId``
        :param args:
            guards to run before operation followed by resource
        :param name:
            name used for route names (``<operation>-<name>``), defaults to
            the last static segment of collection path
        :return:
            registered route group or ``None`` if resource has no operations
        """
        name = kwargs.pop('name', None)
        if kwargs:
            raise TypeError(
                'unexpected keyword arguments: %s' % ', '.join(sorted(kwargs)))
        if not isinstance(path, str) or not path:
            raise InvalidRoutePattern('route expected as string')
        if not args or args[-1] is None:
            raise InvalidResource('expected resource Object')
        guards, res = list(args[:-1]), capabilities(args[-1])
        for guard in guards:
            if not callable(guard):
                raise RouteConfigurationError(
                    'expected guards to be callables, got %r' % (guard,))

        collection, item, key = paths(path, self.id_param)
        name = name or _default_name(collection)

        routes = []
        for b in bindings(res):
            target = self.adapter_cls(
                getattr(res, b.operation), b.operation,
                key=key, separator=self.separator)
            route_name = '%s-%s' % (b.operation, name) if name else None
            routes.append(Endpoint(
                b.method, target, pattern='{%s}' % key if b.item else None,
                guards=guards, name=route_name))
            log.debug('bound %s %s to %s', b.method,
                      item if b.item else collection, b.operation)

        if not routes:
            log.warning("resource bound at '%s' has no operations", path)
            return None

        group = RouteGroup(routes, collection if collection != '/' else None)
        self.app.add(group)
        return group

    __call__ = bind

def _default_name(collection):
    static = [s for s in collection.split('/') if s and not '{' in s]
    return static[-1] if static else None

def crud(app, **options):
    """ Attach :class:`Binder` to ``app`` as ``app.crud`` and return it

    :param options:
        passed to :class:`Binder`
    """
    binder = Binder(app, **options)
    app.crud = binder
    return binder
