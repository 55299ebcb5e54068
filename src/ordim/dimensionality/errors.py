"""
Error kinds raised by the ordinal dimension estimators.

Each error subclasses the built-in exception normally raised for the same
situation, so ``except ValueError`` style handlers keep working.
"""


class PreconditionError(ValueError):
    """Input contract violated; raised before any computation starts."""


class ConvergenceError(RuntimeError):
    """Root-finding could not bracket or converge on a dimension estimate.

    Parameters
    ----------
    message : str
        Human-readable description.
    target : float, optional
        The value the special function was being inverted at (the averaged
        capacity ratio, L_CAP).
    bracket : tuple of float, optional
        The dimension interval that was searched.
    """

    def __init__(self, message, target=None, bracket=None):
        super().__init__(message)
        self.target = target
        self.bracket = bracket


class NumericDomainError(ArithmeticError):
    """A degenerate intermediate value left the domain of the estimator."""
