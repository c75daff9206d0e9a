"""Editorial checks for posts and drafts."""

from folio.lint.findings import Finding, LintReport, Severity
from folio.lint.rules import RULES, rule_catalog
from folio.lint.runner import run_lint

__all__ = ["RULES", "Finding", "LintReport", "Severity", "rule_catalog", "run_lint"]
