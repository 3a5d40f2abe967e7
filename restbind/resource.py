"""

    restbind.resource -- capabilities of a resource
    ===============================================

    A resource is any object (or mapping) which exposes up to five
    operations::

        create(query, model)
        read(query)
        read_by_id(id, query)
        update(id, query, model)
        delete(id, query)

    Each operation returns its result or raises. Which of them are present is
    decided once, when the resource is bound.

"""

from collections import namedtuple
from collections.abc import Mapping

from restbind import GET, POST, PUT, DELETE
from restbind.exc import InvalidResource

__all__ = ('Resource', 'Binding', 'capabilities', 'bindings', 'OPERATIONS')

OPERATIONS = ('create', 'read', 'read_by_id', 'update', 'delete')

Resource = namedtuple(
    'Resource', OPERATIONS, defaults=(None,) * len(OPERATIONS))
Resource.__doc__ = """ Record of optional operations of a resource"""

Binding = namedtuple('Binding', ('method', 'item', 'operation'))
Binding.__doc__ = """ Route to register for an operation

:attr method:
    HTTP method
:attr item:
    ``True`` if bound to item path, ``False`` for collection path
:attr operation:
    name of the operation
"""

_collection_methods = (
    ('create', POST),
    ('read', GET),
    )

_item_methods = (
    ('read_by_id', GET),
    ('update', PUT),
    ('delete', DELETE),
    )

_aliases = {
    'read_by_id': 'readById',
    }

def capabilities(res):
    """ Make :class:`Resource` record out of ``res``

    Falsy members are treated as absent.

    :param res:
        an object with operations as attributes or a mapping of operation
        names to callables
    """
    if isinstance(res, Resource):
        return res
    if res is None or isinstance(res, (str, bytes, int, float, bool)):
        raise InvalidResource("expected resource Object")
    if isinstance(res, Mapping):
        lookup = res.get
    else:
        lookup = lambda name: getattr(res, name, None)
    ops = {}
    for name in OPERATIONS:
        op = lookup(name) or (lookup(_aliases[name]) if name in _aliases
                              else None)
        if op and not callable(op):
            raise InvalidResource(
                "resource operation '%s' isn't callable" % name)
        ops[name] = op or None
    return Resource(**ops)

def bindings(res):
    """ Compute routes to register for ``res``

    :param res:
        :class:`Resource` record
    :rtype:
        list of :class:`Binding`
    """
    return (
        [Binding(m, False, n) for n, m in _collection_methods
            if getattr(res, n)] +
        [Binding(m, True, n) for n, m in _item_methods
            if getattr(res, n)])
