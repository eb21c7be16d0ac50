"""
Validation framework for pytheater definition files.

Region definitions are checked by BaseValidator subclasses that collect every
issue found instead of stopping at the first one, so a theater author sees
all problems with a `region.def` in a single run.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional
from dataclasses import dataclass
from enum import Enum


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ValidationIssue:
    """Represents a single validation issue."""
    severity: ValidationSeverity
    message: str
    field: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of one validator run."""
    is_valid: bool
    issues: List[ValidationIssue]
    warnings_count: int
    errors_count: int
    critical_count: int

    def get_issues_by_severity(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        """Get all issues of a specific severity."""
        return [issue for issue in self.issues if issue.severity == severity]

    def get_summary(self) -> str:
        """One-line summary followed by one line per error or critical issue."""
        if self.is_valid:
            return "Validation passed"

        parts = []
        if self.critical_count > 0:
            parts.append(f"{self.critical_count} critical")
        if self.errors_count > 0:
            parts.append(f"{self.errors_count} errors")
        if self.warnings_count > 0:
            parts.append(f"{self.warnings_count} warnings")

        lines = [f"Validation failed: {', '.join(parts)}"]
        for issue in self.issues:
            if issue.severity in (ValidationSeverity.ERROR, ValidationSeverity.CRITICAL):
                where = f"{issue.field}: " if issue.field else ""
                lines.append(f"  - {where}{issue.message}")
        return "\n".join(lines)


class BaseValidator(ABC):
    """Abstract base class for all validators."""

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def add_issue(self, severity: ValidationSeverity, message: str, field: Optional[str] = None):
        self.issues.append(ValidationIssue(severity, message, field))

    def validate(self, data: Any) -> ValidationResult:
        """Run the checks against `data` and collect the result."""
        self.issues.clear()
        self._validate_impl(data)
        return self._build_result()

    @abstractmethod
    def _validate_impl(self, data: Any):
        """Implement specific validation logic."""

    def _build_result(self) -> ValidationResult:
        warnings = sum(1 for issue in self.issues if issue.severity == ValidationSeverity.WARNING)
        errors = sum(1 for issue in self.issues if issue.severity == ValidationSeverity.ERROR)
        critical = sum(1 for issue in self.issues if issue.severity == ValidationSeverity.CRITICAL)

        return ValidationResult(
            is_valid=errors == 0 and critical == 0,
            issues=self.issues.copy(),
            warnings_count=warnings,
            errors_count=errors,
            critical_count=critical,
        )


def is_number(value: Any) -> bool:
    """True for int/float values that are not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
