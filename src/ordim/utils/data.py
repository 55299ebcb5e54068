import numpy as np
import scipy.sparse as ssp


def to_numpy_array(data):
    if isinstance(data, np.ndarray):
        return data

    if ssp.issparse(data):
        return data.toarray()
    else:
        return np.array(data)


def check_positive(**kwargs):
    """Check that all provided parameters are positive (> 0).

    Validates that numeric parameters are strictly positive. Used for
    tolerances and iteration caps of the root finder.

    Parameters
    ----------
    **kwargs : dict
        Parameter name to value mappings. None values are skipped.

    Raises
    ------
    ValueError
        If any parameter value is not positive, NaN, or infinite.
        Error message includes parameter name and value.
    TypeError
        If any parameter value is not numeric.

    Examples
    --------
    >>> check_positive(xtol=1e-12, maxiter=100)  # No error

    >>> check_positive(maxiter=0)
    Traceback (most recent call last):
    ...
    ValueError: maxiter must be positive, got 0
    """
    for name, value in kwargs.items():
        if value is None:
            continue
        try:
            val = float(value)
        except (TypeError, ValueError):
            raise TypeError(f"{name} must be numeric, got {type(value).__name__}")

        if np.isnan(val):
            raise ValueError(f"{name} cannot be NaN")
        if np.isinf(val):
            raise ValueError(f"{name} cannot be infinite")
        if val <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
