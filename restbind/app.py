"""

    restbind.app -- WSGI application dispatching requests to routes
    ===============================================================

"""

import logging

from webob import Request
from webob.exc import HTTPException, HTTPInternalServerError

from restbind import RouteGroup
from restbind.exc import NoMatchFound

__all__ = ('Application', 'default_error_handler')

log = logging.getLogger(__name__)

def default_error_handler(request, error):
    """ Log ``error`` and respond with ``500 Internal Server Error``"""
    log.exception('error while handling %s %s',
                  request.method, request.path_info, exc_info=error)
    return HTTPInternalServerError()

class Application(object):
    """ WSGI application

    Routes are matched in order of registration. Matched endpoint's target is
    called with request and trace and should return :class:`webob.Response`.

    :param routes:
        initial routes
    :param error_handler:
        callable of ``(request, error)`` which produces response for errors
        raised by targets, other than :class:`webob.exc.HTTPException`
    """

    request_cls = Request

    def __init__(self, *routes, **kwargs):
        error_handler = kwargs.pop('error_handler', None)
        self.error_handler = error_handler or default_error_handler
        if kwargs:
            raise TypeError(
                'unexpected keyword arguments: %s' % ', '.join(sorted(kwargs)))
        self.routes = RouteGroup(list(routes))

    def add(self, route):
        """ Register ``route``"""
        self.routes.routes.append(route)
        return route

    def reverse(self, name, *args, **kwargs):
        """ Reverse route with ``name``, see :meth:`restbind.Route.reverse`"""
        return self.routes.reverse(name, *args, **kwargs)

    def handle(self, request):
        """ Produce response for ``request``

        Exactly one response is produced: the one returned by matched target,
        the one of routing failure or the one of error handler.
        """
        try:
            trace = self.routes(request)
            return trace.target(request, trace)
        except NoMatchFound as e:
            return e.response
        except HTTPException as e:
            return e
        except Exception as e:
            return self.error_handler(request, e)

    def __call__(self, environ, start_response):
        request = self.request_cls(environ)
        response = self.handle(request)
        return response(environ, start_response)
