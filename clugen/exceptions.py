from __future__ import annotations


class ClugenError(Exception):
    """Base class for every error raised by clugen."""


class ValidationError(ClugenError, ValueError):
    """Malformed or inconsistent input, raised before any sampling happens."""


class StrategyContractError(ClugenError, TypeError):
    """A caller-supplied strategy returned a value of the wrong shape or type."""

    def __init__(self, slot: str, message: str):
        self.slot = slot
        super().__init__(f"{slot}: {message}")


class NumericalError(ClugenError, ArithmeticError):
    """A zero-norm vector that cannot be avoided by re-sampling."""
