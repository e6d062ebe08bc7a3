"""
Result types for room checks.

- Severity: WARN (room usable, not as authored) or FAIL (a guarantee broke)
- ValidationStage: which products of the run a check looked at
- ValidationIssue: one finding, tied to a cell, edge or mesh
- ValidationResult: the findings of one run
- ValidationError: raised by ValidationResult.raise_if_failed()
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(Enum):
    """How bad a finding is. Only FAIL makes a result fail."""
    WARN = "warn"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    INTERIOR = "interior"
    WALLS = "walls"
    ROOM = "room"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """
    A single finding.

    Attributes:
        severity: WARN or FAIL
        code: Rule code, e.g. "ROOM-001"
        message: What is wrong
        rule_reference: Name of the guarantee the rule checks
        remediation: How a designer can fix it, when known
        location: Cell "(x, y)" or edge name
        mesh: Mesh name involved, when there is one
    """
    severity: Severity
    code: str
    message: str
    rule_reference: str
    remediation: Optional[str] = None
    location: Optional[str] = None
    mesh: Optional[str] = None

    def format(self) -> str:
        """One-line form: ``[FAIL] ROOM-002 at (1, 1) mesh=- :: message :: fix=...``"""
        text = (f"[{self.severity}] {self.code} at {self.location or '-'} "
                f"mesh={self.mesh or '-'} :: {self.message}")
        if self.remediation:
            text += f" :: fix={self.remediation}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['severity'] = str(self.severity)
        return data

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Findings of one run; passes while nothing is FAIL."""
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    def by_severity(self, severity: Severity) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    @property
    def errors(self) -> List[ValidationIssue]:
        return self.by_severity(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.by_severity(Severity.WARN)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def passed(self) -> bool:
        return not self.failed

    def extend(self, issues: List[ValidationIssue]) -> 'ValidationResult':
        self.issues.extend(issues)
        return self

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def summary(self) -> str:
        stage = f" [{self.stage}]" if self.stage else ""
        status = "passed" if self.passed else "FAILED"
        return (f"Room checks{stage} {status}: "
                f"{len(self.errors)} fail, {len(self.warnings)} warn")

    def report(self) -> str:
        """Summary line followed by every issue, failures first."""
        if not self.issues:
            return self.summary()
        lines = [self.summary()]
        lines.extend(i.format() for i in self.errors)
        lines.extend(i.format() for i in self.warnings)
        return "\n".join(lines)

    def raise_if_failed(self) -> None:
        if self.failed:
            raise ValidationError(self)

    def to_dict(self) -> dict:
        """JSON-ready form used by the result export."""
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'fail_count': len(self.errors),
            'warn_count': len(self.warnings),
            'issues': [i.to_dict() for i in self.issues],
        }


class ValidationError(Exception):
    """A generated room broke at least one FAIL rule."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
