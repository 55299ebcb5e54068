"""Parallel execution utilities for ordim.

The k-NN sweep dispatches row chunks through :func:`parallel_executor`,
which follows the global ordim.PARALLEL_BACKEND setting.
"""

from contextlib import contextmanager
from joblib import Parallel, delayed, parallel_config

# Seconds before idle loky workers are released
LOKY_IDLE_TIMEOUT = 60


def get_parallel_backend():
    """Get the current parallel backend setting.

    Returns
    -------
    str
        Current backend: 'loky', 'threading', or 'multiprocessing'.
    """
    import ordim
    return ordim.PARALLEL_BACKEND


def dispatch_settings(backend):
    """Return the ``parallel_config`` and ``Parallel`` keyword arguments for a backend.

    Threads share the input array, so at most ``n_jobs`` chunks are queued;
    process backends keep two chunks per worker in flight.
    """
    config = {'backend': backend}
    if backend == 'loky':
        config['idle_worker_timeout'] = LOKY_IDLE_TIMEOUT
    pre_dispatch = 'n_jobs' if backend == 'threading' else '2*n_jobs'
    return config, {'backend': backend, 'pre_dispatch': pre_dispatch}


@contextmanager
def parallel_executor(n_jobs):
    """Joblib executor configured for the current ordim.PARALLEL_BACKEND.

    Parameters
    ----------
    n_jobs : int
        Number of parallel jobs. Use -1 for all available cores.

    Yields
    ------
    Parallel
        Configured joblib Parallel executor.

    Examples
    --------
    >>> with parallel_executor(n_jobs=2) as parallel:
    ...     results = parallel(delayed(abs)(i) for i in range(-3, 0))
    >>> results
    [3, 2, 1]
    """
    config, parallel_kwargs = dispatch_settings(get_parallel_backend())
    with parallel_config(**config):
        yield Parallel(n_jobs=n_jobs, **parallel_kwargs)


__all__ = ['parallel_executor', 'get_parallel_backend', 'delayed']
