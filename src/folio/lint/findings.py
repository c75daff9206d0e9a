"""Lint results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """How serious a finding is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Finding:
    """One editorial problem in one file.

    Attributes:
        code: Stable rule code (e.g., "FM002")
        severity: ERROR or WARNING
        path: File the problem was found in
        line: 1-based line in that file
        message: Human-readable message

    """

    code: str
    severity: Severity
    path: Path
    line: int
    message: str

    def location(self, root: Path | None = None) -> str:
        path = self.path
        if root is not None:
            try:
                path = self.path.relative_to(root)
            except ValueError:
                pass
        return f"{path}:{self.line}"


@dataclass
class LintReport:
    findings: list[Finding] = field(default_factory=list)
    files_checked: int = 0

    def sort(self) -> None:
        self.findings.sort(key=lambda f: (str(f.path), f.line, f.code))

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(f.severity is Severity.ERROR for f in self.findings)

    def counts(self) -> Counter[str]:
        """Number of findings per rule code."""
        return Counter(f.code for f in self.findings)

    def for_path(self, path: Path) -> list[Finding]:
        return [f for f in self.findings if f.path == path]


__all__ = ["Finding", "LintReport", "Severity"]
