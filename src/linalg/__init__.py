from .invert import DEFAULT_TOL, ComputeError, invert

__all__ = ['ComputeError', 'DEFAULT_TOL', 'invert']
