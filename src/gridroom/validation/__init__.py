"""
Validation package for generated rooms.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Generation phase enumeration
    - ValidationError: Exception raised on FAIL issues
    - validate_generation(): Run every room check against a finished run
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import ALL_RULES, ValidationRule, get_rule
from .checks import validate_generation

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Rules
    'ALL_RULES',
    'ValidationRule',
    'get_rule',
    # Checks
    'validate_generation',
]
