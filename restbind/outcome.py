"""

    restbind.outcome -- results of resource operations
    ==================================================

    Operation results are normalized into one of two states before a response
    is produced: :data:`EMPTY` which is answered with ``204 No Content`` and
    :class:`Present` which is answered with ``200 OK`` and the value
    serialized as JSON. Failures aren't outcomes, they are exceptions
    propagated to the application.

"""

from webob import Response
from webob.exc import HTTPNoContent

__all__ = ('Outcome', 'Present', 'Empty', 'EMPTY', 'as_outcome', 'aggregate')

class Outcome(object):
    """ Base class for operation outcomes"""

    def to_response(self):
        raise NotImplementedError()

class Empty(Outcome):
    """ Operation produced nothing"""

    def to_response(self):
        return HTTPNoContent()

    def __eq__(self, o):
        return isinstance(o, Empty)

    def __repr__(self):
        return 'EMPTY'

EMPTY = Empty()

class Present(Outcome):
    """ Operation produced ``value``"""

    def __init__(self, value):
        self.value = value

    def to_response(self):
        return Response(json_body=self.value)

    def __eq__(self, o):
        return isinstance(o, Present) and o.value == self.value

    def __repr__(self):
        return 'Present(%r)' % (self.value,)

def as_outcome(value):
    """ Normalize value returned by an operation

    Outcomes pass through as is, ``None`` becomes :data:`EMPTY` and anything
    else, empty containers included, becomes :class:`Present`.
    """
    if isinstance(value, Outcome):
        return value
    if value is None:
        return EMPTY
    return Present(value)

def aggregate(values):
    """ Combine results of a fan-out into a single outcome

    A single result is normalized with :func:`as_outcome`, several results
    are kept as a list with one slot per invocation, in order. Slots which
    are outcomes themselves are unwrapped, :data:`EMPTY` becoming ``None``.
    """
    values = list(values)
    if len(values) == 1:
        return as_outcome(values[0])
    return Present([_unwrap(v) for v in values])

def _unwrap(value):
    if isinstance(value, Present):
        return value.value
    if isinstance(value, Empty):
        return None
    return value
