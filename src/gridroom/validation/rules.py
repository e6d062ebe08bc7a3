"""
Validation rule definitions for generated rooms.

Each rule has:
- Code: Unique identifier (e.g., "ROOM-001")
- Severity: FAIL or WARN
- Rule reference: Short name of the guarantee it checks
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- ROOM: Interior grid
- DOOR: Door spans
- WALL: Boundary ring walls
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "ROOM-001")
        severity: Default severity for this rule
        rule_reference: Short name of the checked guarantee
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
    """
    code: str
    severity: Severity
    rule_reference: str
    message_template: str
    remediation_template: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, location: Optional[str] = None, mesh: Optional[str] = None,
              **kwargs) -> ValidationIssue:
        """Build an issue for this rule with the template values filled in."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            rule_reference=self.rule_reference,
            remediation=self.format_remediation(**kwargs),
            location=location,
            mesh=mesh,
        )


# =============================================================================
# INTERIOR RULES (ROOM)
# =============================================================================

ROOM_001 = ValidationRule(
    code="ROOM-001",
    severity=Severity.FAIL,
    rule_reference="Interior coverage",
    message_template="Cell ({x}, {y}) is neither covered nor reserved",
    remediation_template="Give the floor style a filler mesh that resolves",
)

ROOM_002 = ValidationRule(
    code="ROOM-002",
    severity=Severity.FAIL,
    rule_reference="No interior overlap",
    message_template="Cell ({x}, {y}) is covered by {count} placements",
)

ROOM_003 = ValidationRule(
    code="ROOM-003",
    severity=Severity.FAIL,
    rule_reference="Placement inside grid",
    message_template="Placement at ({x}, {y}) with footprint {fw}x{fh} leaves the grid",
)


# =============================================================================
# DOOR RULES (DOOR)
# =============================================================================

DOOR_001 = ValidationRule(
    code="DOOR-001",
    severity=Severity.FAIL,
    rule_reference="Door spans disjoint",
    message_template="Doors at {a} and {b} overlap on the {edge} edge",
)

DOOR_002 = ValidationRule(
    code="DOOR-002",
    severity=Severity.FAIL,
    rule_reference="Door span on edge",
    message_template="Door [{start}, {end}) leaves the {edge} edge of length {length}",
)


# =============================================================================
# WALL RULES (WALL)
# =============================================================================

WALL_001 = ValidationRule(
    code="WALL-001",
    severity=Severity.WARN,
    rule_reference="Wall coverage",
    message_template="Edge cell {index} on the {edge} edge has no wall or door",
    remediation_template="Add a wall module with footprint 1",
)

WALL_002 = ValidationRule(
    code="WALL-002",
    severity=Severity.FAIL,
    rule_reference="Wall spans disjoint",
    message_template="Edge cell {index} on the {edge} edge is covered {count} times",
)


ALL_RULES = {
    'ROOM-001': ROOM_001,
    'ROOM-002': ROOM_002,
    'ROOM-003': ROOM_003,
    'DOOR-001': DOOR_001,
    'DOOR-002': DOOR_002,
    'WALL-001': WALL_001,
    'WALL-002': WALL_002,
}


def get_rule(code: str) -> Optional[ValidationRule]:
    return ALL_RULES.get(code)
