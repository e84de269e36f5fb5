# FILE: hopfield_errors.py
# Erori ridicate la intrarea in build / recover / utilitare.
# Toate sunt ValueError, ca sa poata fi prinse si generic.


class HopfieldError(ValueError):
    """Base class for every validation error raised by the Hopfield modules."""


class ShapeError(HopfieldError):
    """Dimension mismatch (pattern lengths, state length vs model size)."""


class InvalidPatternError(HopfieldError):
    """Values outside the bipolar domain {-1, +1}."""


class InvalidParameterError(HopfieldError):
    """Bad tuning parameter (max_iterations, patience, noise rate...)."""


class EmptyMemoryError(ShapeError, InvalidPatternError):
    # no patterns (K < 1) or zero-length patterns
    pass
