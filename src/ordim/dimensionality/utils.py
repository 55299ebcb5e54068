import numbers

from scipy.special import betainc
from scipy.optimize import brentq
import numpy as np

from .errors import ConvergenceError, PreconditionError
from ..utils.data import check_positive

IRBETA_X = 0.75
IRBETA_BETA = 0.5
DEFAULT_BRACKET = (0.0, 10.0)
# brentq rejects relative tolerances below this
MIN_RTOL = 4 * np.finfo(float).eps


def ir_beta(d, x=IRBETA_X):
    """
    Regularized incomplete beta function I_x((d+1)/2, 1/2).

    Links the expected overlap of neighboring k-NN balls to the dimension
    `d`. For fixed ``x < 1`` it is strictly decreasing in `d`; at the default
    ``x = 0.75`` it starts from ``I(0) = 2/3``.

    Parameters
    ----------
    d : float or array-like
        Candidate dimension(s), ``d > -1``.
    x : float, default=0.75
        Integration limit.

    Returns
    -------
    float or ndarray
        Function value(s) in (0, 1).

    Examples
    --------
    >>> round(float(ir_beta(1.0)), 6)
    0.5
    """
    a = (np.asarray(d, dtype=np.float64) + 1.0) / 2.0
    return betainc(a, IRBETA_BETA, x)


def check_solver_params(bracket, xtol, rtol, maxiter):
    """
    Validate the root-finder settings of :func:`invert_ir_beta`.

    Returns
    -------
    tuple of float
        The bracket as ``(lo, hi)``.

    Raises
    ------
    PreconditionError
        If the bracket is not a finite increasing pair, a tolerance is not
        positive, `rtol` is below ``MIN_RTOL`` or `maxiter` is not a
        positive integer.
    """
    try:
        check_positive(xtol=xtol, rtol=rtol, maxiter=maxiter)
    except (TypeError, ValueError) as e:
        raise PreconditionError(str(e)) from e

    if float(rtol) < MIN_RTOL:
        raise PreconditionError(f"rtol must be at least {MIN_RTOL:.3g}, got {rtol}")
    if isinstance(maxiter, bool) or not isinstance(maxiter, numbers.Integral):
        raise PreconditionError(f"maxiter must be an integer, got {maxiter!r}")

    try:
        lo, hi = (float(b) for b in bracket)
    except (TypeError, ValueError) as e:
        raise PreconditionError(f"bracket must be a pair of numbers, got {bracket!r}") from e
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise PreconditionError(f"Invalid bracket ({lo}, {hi}): bounds must be finite")
    if not lo < hi:
        raise PreconditionError(f"Invalid bracket ({lo}, {hi}): lower bound must be below upper bound")

    return lo, hi


def invert_ir_beta(
    target,
    bracket=DEFAULT_BRACKET,
    x=IRBETA_X,
    xtol=2e-12,
    rtol=1e-6,
    maxiter=100,
):
    """
    Find the dimension `d` in `bracket` with ``ir_beta(d, x) == target``.

    Uses Brent's method (:func:`scipy.optimize.brentq`) after checking that
    the bracket contains a sign change.

    Parameters
    ----------
    target : float
        Value to invert, e.g. the averaged capacity ratio.
    bracket : tuple of float, default=(0.0, 10.0)
        Search interval for the dimension.
    x : float, default=0.75
        Integration limit passed to :func:`ir_beta`.
    xtol : float, default=2e-12
        Absolute tolerance on the root.
    rtol : float, default=1e-6
        Relative tolerance on the root.
    maxiter : int, default=100
        Iteration cap for the root finder.

    Returns
    -------
    float
        The dimension estimate.

    Raises
    ------
    ConvergenceError
        If `target` lies outside the range of :func:`ir_beta` on the
        bracket, or the root finder does not converge within `maxiter`.
    PreconditionError
        If the bracket or the solver settings are invalid
        (see :func:`check_solver_params`).

    Examples
    --------
    >>> round(invert_ir_beta(0.5), 3)
    1.0
    """
    lo, hi = check_solver_params(bracket, xtol, rtol, maxiter)

    if not np.isfinite(target):
        raise ConvergenceError(
            f"Cannot invert non-finite value {target}", target=target, bracket=(lo, hi)
        )

    def objective(d):
        return float(ir_beta(d, x)) - target

    f_lo = objective(lo)
    f_hi = objective(hi)
    if f_lo * f_hi > 0:
        raise ConvergenceError(
            f"No sign change on [{lo}, {hi}]: target {target:.6f} lies outside "
            f"[{f_hi + target:.6f}, {f_lo + target:.6f}]",
            target=target,
            bracket=(lo, hi),
        )

    root, result = brentq(
        objective, lo, hi, xtol=xtol, rtol=rtol, maxiter=int(maxiter),
        full_output=True, disp=False,
    )
    if not result.converged:
        raise ConvergenceError(
            f"Root finding did not converge after {result.iterations} iterations "
            f"(target {target:.6f})",
            target=target,
            bracket=(lo, hi),
        )

    return float(root)
