"""Bladework: blade algebra engine with Cayley tables, sparse multivectors and grade-tagged terms."""

__version__ = "0.1.0"

from core.algebra import BladeAlgebra
from core.multivector import Multivector
from terms.ga_term import GATerm

__all__ = [
    "__version__",
    "BladeAlgebra",
    "Multivector",
    "GATerm",
]
