"""Run the lint rules over a whole corpus."""

from __future__ import annotations

import logging
from collections import defaultdict

from folio.corpus.models import Post
from folio.corpus.store import Corpus
from folio.lint.findings import Finding, LintReport
from folio.lint.rules import CORPUS_RULES, RULES, LintContext, severity_of

logger = logging.getLogger(__name__)


def _duplicate_slugs(corpus: Corpus) -> list[Finding]:
    severity, _ = CORPUS_RULES["FN002"]
    by_slug: dict[str, list[Post]] = defaultdict(list)
    for post in corpus.posts:
        by_slug[post.slug].append(post)

    findings = []
    for slug, posts in by_slug.items():
        if len(posts) < 2:
            continue
        names = ", ".join(sorted(post.path.name for post in posts))
        for post in posts:
            findings.append(Finding("FN002", severity, post.path, 1, f"slug '{slug}' is used by: {names}"))
    return findings


def run_lint(corpus: Corpus) -> LintReport:
    """Check every post and draft and return the sorted findings.

    Files the corpus could not load are reported from ``corpus.problems``.
    """
    config = corpus.config
    disabled = set(config.lint.disabled)
    report = LintReport()

    for problem in corpus.problems:
        severity = severity_of(problem.code)
        if severity is None or problem.code in disabled:
            continue
        report.findings.append(Finding(problem.code, severity, problem.path, problem.line or 1, problem.message))
        report.files_checked += 1

    for document in corpus.documents():
        report.files_checked += 1
        ctx = LintContext(document=document, config=config, site_root=corpus.site_root)
        for rule in RULES:
            if rule.code in disabled:
                continue
            if rule.posts_only and document.is_draft:
                continue
            if rule.skip_drafts and document.is_draft:
                continue
            report.findings.extend(rule.check(ctx, rule))

    if "FN002" not in disabled:
        report.findings.extend(_duplicate_slugs(corpus))

    report.sort()
    logger.debug("Linted %d files: %d findings", report.files_checked, len(report.findings))
    return report


__all__ = ["run_lint"]
