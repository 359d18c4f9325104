"""
errors.py

Exceptions raised by the alignment engine and the metrics calculator.
"""


class InvalidMode(ValueError):
    """The requested alignment mode is neither 'global' nor 'local'."""


class AlphabetError(ValueError):
    """A residue is not covered by the substitution matrix."""


class InvariantViolation(RuntimeError):
    """
    An alignment trace does not consume the residues it claims to.
    This always points at a bug in the engine, never at bad user input.
    """
