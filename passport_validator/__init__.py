"""
Passport Validator — batch parsing and validation of passport records.

Architecture: Raw lines → Record Builder → Validator (simplified | full) → Report
"""

from .models import Passport, ValidationMode, Violation, ViolationKind
from .reader import read_all

__version__ = "1.0.0"

__all__ = [
    "Passport",
    "ValidationMode",
    "Violation",
    "ViolationKind",
    "read_all",
    "__version__",
]
