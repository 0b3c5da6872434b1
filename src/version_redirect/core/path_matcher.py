"""Extraction of the package name from a request path.

Recognized shapes, where ``<name>`` is one or more characters other than
``/``::

    /<name>
    /<name>/
    /<name>/latest
    /<name>/latest/<anything>

Everything else is rejected.

Examples:
    >>> match_package_path("/asar/latest/docs/api.html")
    'asar'
    >>> match_package_path("/asar/v4.0.1") is None
    True
"""

import re

PACKAGE_PATH_PATTERN = re.compile(r"/([^/]+)(?:/latest(/.*)?|/?)?", re.DOTALL)


def match_package_path(path: str) -> str | None:
    """Return the package name encoded in a request path.

    Args:
        path: Request path, starting with ``/``.

    Returns:
        The first path segment if the path has a recognized shape,
        None otherwise.
    """
    match = PACKAGE_PATH_PATTERN.fullmatch(path)
    if match is None:
        return None
    return match.group(1)
