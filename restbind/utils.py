"""

    restbind.utils -- path helpers
    ==============================

"""

__all__ = ('join', 'split_ids')

def join(prefix, path):
    """ Concatenate two URL paths with exactly one slash between them

        >>> join('/users/', '/{id}')
        '/users/{id}'

    """
    return (prefix or '').rstrip('/') + '/' + (path or '').lstrip('/')

def split_ids(segment, separator=','):
    """ Split path ``segment`` into a list of identifiers

    Splitting is literal: order is preserved and empty items are kept.

        >>> split_ids('5,6,7')
        ['5', '6', '7']
        >>> split_ids('5,,6')
        ['5', '', '6']

    """
    return segment.split(separator)
