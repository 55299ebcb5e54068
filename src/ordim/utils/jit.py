"""JIT compilation utilities for ordim.

Provides conditional JIT compilation based on environment settings.
"""

import os

from numba import njit

# Check if Numba should be disabled
ORDIM_DISABLE_NUMBA = os.getenv("ORDIM_DISABLE_NUMBA", "False").lower() in (
    "true",
    "1",
    "yes",
)


def conditional_njit(*args, **kwargs):
    """Conditionally apply numba JIT compilation based on environment settings.

    If the ORDIM_DISABLE_NUMBA environment variable is set to 'true', '1' or
    'yes', this returns the original function without JIT compilation.
    Otherwise, applies numba.njit with the given parameters.

    Parameters
    ----------
    *args
        Positional arguments passed to numba.njit. If a single function is
        passed, it will be decorated directly.
    **kwargs
        Keyword arguments passed to numba.njit (e.g., cache=True).

    Returns
    -------
    decorator or function
        If called with arguments: returns a decorator function.
        If called on a function directly: returns the (possibly JIT-compiled) function.

    Examples
    --------
    >>> @conditional_njit
    ... def fast_computation(x):
    ...     return x ** 2

    With numba parameters::

        @conditional_njit(cache=True)
        def cached_computation(x):
            return x ** 2

    See Also
    --------
    ~ordim.utils.jit.is_jit_enabled :
        Check if JIT compilation is currently enabled.
    :func:`numba.njit` :
        The underlying Numba JIT decorator.
    """
    if ORDIM_DISABLE_NUMBA:

        def decorator(func):
            return func

        return decorator if not args else args[0]

    return njit(*args, **kwargs)


def is_jit_enabled():
    """Check if JIT compilation is enabled.

    Returns
    -------
    bool
        False when the ORDIM_DISABLE_NUMBA environment variable is set to
        'true', '1' or 'yes', True otherwise.

    Examples
    --------
    >>> is_jit_enabled()  # doctest: +SKIP
    True

    Disable JIT via environment (must be set before ordim is imported)::

        import os
        os.environ['ORDIM_DISABLE_NUMBA'] = '1'
    """
    return not ORDIM_DISABLE_NUMBA

