"""
Result types for maze validation.

Every finding names the generation stage that produced it and, where it
can, the cell or edge it is about. Results from several stages merge into
one report grouped stage by stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Severity(Enum):
    """WARN is reported only; FAIL stops the pipeline gate."""
    WARN = "warn"
    FAIL = "fail"


class ValidationStage(Enum):
    """Where in generation a check looks at the maze."""
    LATTICE = "lattice"  # freshly built grid, before carving
    CARVE = "carve"      # carved passage set
    RASTER = "raster"    # tile raster of the carved grid
    WALLS = "walls"      # materialized wall list


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single finding.

    Attributes:
        stage: Stage that found it
        severity: WARN or FAIL
        code: Rule code such as "MAZE-012"
        message: What is wrong
        cell: Cell index the finding is about, if any
        edge: (a, b) edge the finding is about, if any
        remediation: Suggested fix
    """
    stage: ValidationStage
    severity: Severity
    code: str
    message: str
    cell: Optional[int] = None
    edge: Optional[Tuple[int, int]] = None
    remediation: Optional[str] = None

    def where(self) -> str:
        if self.edge is not None:
            return f"edge {self.edge[0]}-{self.edge[1]}"
        if self.cell is not None:
            return f"cell {self.cell}"
        return "maze"

    def format(self) -> str:
        text = f"{self.code} {self.severity.name} {self.where()}: {self.message}"
        if self.remediation:
            text += f" (fix: {self.remediation})"
        return text

    def to_dict(self) -> Dict:
        return {
            'code': self.code,
            'severity': self.severity.value,
            'message': self.message,
            'cell': self.cell,
            'edge': list(self.edge) if self.edge is not None else None,
            'remediation': self.remediation,
        }


@dataclass
class ValidationResult:
    """
    Findings of one check (stage set) or of several merged checks (stage None).
    """
    stage: Optional[ValidationStage] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    def add(self, severity: Severity, code: str, message: str, cell: Optional[int] = None,
            edge: Optional[Tuple[int, int]] = None, remediation: Optional[str] = None):
        assert self.stage is not None, "merged results take issues through merge()"
        self.issues.append(ValidationIssue(self.stage, severity, code, message,
                                           cell, edge, remediation))

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        self.issues.extend(other.issues)
        return self

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity is Severity.FAIL]

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def by_stage(self) -> Dict[ValidationStage, List[ValidationIssue]]:
        """Issues grouped by stage, stages in generation order."""
        grouped: Dict[ValidationStage, List[ValidationIssue]] = {}
        for stage in ValidationStage:
            found = [i for i in self.issues if i.stage is stage]
            if found:
                grouped[stage] = found
        return grouped

    def report(self) -> str:
        """Readable summary, one block per stage with findings."""
        if not self.issues:
            return "Validation passed: No issues found"

        failures = len(self.errors)
        status = "FAILED" if failures else "passed with warnings"
        lines = [f"Maze validation {status}: {failures} error(s), "
                 f"{len(self.issues) - failures} warning(s)"]
        for stage, issues in self.by_stage().items():
            lines.append(f"{stage.value}:")
            lines.extend(f"  {issue.format()}" for issue in issues)
        return "\n".join(lines)

    def to_dict(self) -> Dict:
        return {
            'passed': self.passed,
            'error_count': len(self.errors),
            'stages': {stage.value: [i.to_dict() for i in issues]
                       for stage, issues in self.by_stage().items()},
        }
