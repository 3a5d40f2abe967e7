"""

    restbind.exc -- exceptions
    ==========================

"""

from webob import exc

__all__ = (
    'NoMatchFound', 'NoURLPatternMatched', 'MethodNotAllowed', 'RouteGuarded',
    'RouteConfigurationError', 'InvalidRoutePattern', 'InvalidResource',
    'RouteReversalError')

class NoMatchFound(Exception):
    """ Request didn't reach any endpoint

    :attr response:
        response to answer the request with
    """

    response = exc.HTTPNotFound()

class NoURLPatternMatched(NoMatchFound):
    """ No route pattern matched the request path"""

class MethodNotAllowed(NoURLPatternMatched):
    """ Path matched but method didn't, answered like an unknown path"""

class RouteGuarded(NoMatchFound):
    """ A guard answered the request itself with ``response``"""

    def __init__(self, response):
        super(RouteGuarded, self).__init__(response)
        self.response = response

class RouteConfigurationError(Exception):
    """ Routes were set up improperly, raised at configuration time only"""

class InvalidRoutePattern(RouteConfigurationError):
    """ Path given for a route isn't usable"""

class InvalidResource(RouteConfigurationError):
    """ Resource given for binding isn't an object with operations"""

class RouteReversalError(Exception):
    """ No URL can be built for a route name and params"""
