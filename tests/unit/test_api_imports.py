"""Test public API imports for the ordim package."""


def test_main_package_import():
    """Test that the main ordim package can be imported."""
    import ordim

    assert hasattr(ordim, "__version__")
    assert isinstance(ordim.__version__, str)
    assert len(ordim.__version__) > 0


def test_main_exports():
    """Test that main exports are available."""
    import ordim

    # Estimators
    assert hasattr(ordim, "doubling_dimension")
    assert hasattr(ordim, "capacity_dimension")
    assert hasattr(ordim, "ordinal_dimension")

    # Neighbor ranking
    assert hasattr(ordim, "knn")
    assert hasattr(ordim, "knn_graph")

    # Errors
    assert issubclass(ordim.PreconditionError, ValueError)
    assert issubclass(ordim.ConvergenceError, RuntimeError)
    assert issubclass(ordim.NumericDomainError, ArithmeticError)

    # Configuration
    assert hasattr(ordim, "PARALLEL_BACKEND")
    assert hasattr(ordim, "set_parallel_backend")


def test_submodule_imports():
    """Test that submodules are importable."""
    import ordim.dimensionality
    import ordim.utils

    assert hasattr(ordim.dimensionality, "__all__")
    assert hasattr(ordim.utils, "__all__")


def test_dimensionality_exports():
    """Every name in __all__ resolves."""
    from ordim import dimensionality

    for name in dimensionality.__all__:
        assert hasattr(dimensionality, name), name
