"""Demo scenario driver."""

from .sim import Sim

__all__ = ["Sim"]
