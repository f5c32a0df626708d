"""Per-file rule evaluation.

All rules that apply to one file are evaluated here, in registration order,
so the engine only deals with whole files. Path-only rules (filename and
companion modes) never read the file; content rules share a single read.
"""

import logging
import re
import time
from pathlib import Path
from typing import NamedTuple, Optional, Sequence

from .errors import FileWarning, MatchError
from .file_walker import read_text, rule_applies
from .models import CONTENT_MODES, Finding, MatchMode, Rule, ScanWarning, WarningKind
from .redaction import redact

logger = logging.getLogger(__name__)


class FileResult(NamedTuple):
    """Findings and warnings produced by one file."""

    findings: list[Finding]
    warnings: list[ScanWarning]


class _Deadline:
    """Time budget for one (file, rule) pair, checked between lines and matches.

    A single regex call cannot be interrupted, so the budget bounds the
    number of further calls rather than the length of any one of them.
    """

    def __init__(self, rule_id: str, seconds: float):
        self.rule_id = rule_id
        self.seconds = seconds
        self.expires = time.monotonic() + seconds

    def check(self) -> None:
        if time.monotonic() > self.expires:
            raise MatchError(self.rule_id, f"exceeded time budget of {self.seconds:g}s")


def _finding(rule: Rule, rel_path: str, line: Optional[int], value: Optional[str]) -> Finding:
    return Finding(
        path=rel_path,
        line=line,
        rule=rule.id,
        title=rule.title,
        severity=rule.severity,
        snippet=redact(value.strip()) if value is not None else "",
        category=rule.tag,
        rule_category=rule.category,
        remediation=rule.remediation,
    )


def _captured(rule: Rule, match: re.Match) -> tuple[str, int]:
    """Matched value and its offset; the named capture wins when it participated."""
    if rule.capture is not None and match.start(rule.capture) != -1:
        return match.group(rule.capture), match.start(rule.capture)
    return match.group(0), match.start()


def _line_at(text: str, offset: int) -> str:
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    return text[start:] if end == -1 else text[start:end]


def _match_lines(rule: Rule, rel_path: str, text: str, deadline: _Deadline) -> list[Finding]:
    findings = []
    for lineno, line in enumerate(text.split("\n"), start=1):
        deadline.check()
        if line.endswith("\r"):
            line = line[:-1]
        if rule.line_unless is not None and rule.line_unless.search(line):
            continue
        for match in rule.pattern.finditer(line):
            value, _ = _captured(rule, match)
            findings.append(_finding(rule, rel_path, lineno, value))
            deadline.check()
    return findings


def _match_file(rule: Rule, rel_path: str, text: str, deadline: _Deadline) -> list[Finding]:
    findings = []
    for match in rule.pattern.finditer(text):
        deadline.check()
        value, offset = _captured(rule, match)
        if rule.line_unless is not None and rule.line_unless.search(_line_at(text, offset)):
            continue
        line = text.count("\n", 0, offset) + 1
        findings.append(_finding(rule, rel_path, line, value))
    return findings


def match_content(rule: Rule, rel_path: str, text: str, timeout: float) -> list[Finding]:
    """Apply one content rule to file text.

    The correlation pass runs after matching: findings of a rule with
    ``escalate_if`` take ``escalate_to`` when that pattern also occurs in
    the same file.

    Raises:
        MatchError: the matcher failed or ran out of time.
    """
    if rule.requires is not None and not rule.requires.search(text):
        return []
    if rule.unless is not None and rule.unless.search(text):
        return []

    deadline = _Deadline(rule.id, timeout)
    try:
        if rule.mode == MatchMode.line:
            findings = _match_lines(rule, rel_path, text, deadline)
        elif rule.mode == MatchMode.file:
            findings = _match_file(rule, rel_path, text, deadline)
        elif rule.pattern.search(text):
            findings = []
        else:
            findings = [_finding(rule, rel_path, None, None)]

        if findings and rule.escalate_if is not None and rule.escalate_if.search(text):
            findings = [f.model_copy(update={"severity": rule.escalate_to}) for f in findings]
    except (re.error, RecursionError, MemoryError) as e:
        raise MatchError(rule.id, f"{type(e).__name__}: {e}") from e
    return findings


def match_path(rule: Rule, path: Path, rel_path: str, max_file_size: int) -> list[Finding]:
    """Apply a filename or companion rule, which look at paths instead of text.

    Raises:
        FileWarning: the companion file exists but cannot be read.
    """
    if rule.mode == MatchMode.filename:
        return [_finding(rule, rel_path, None, None)]

    sibling = path.parent / rule.companion
    if not sibling.is_file():
        return [_finding(rule, rel_path, None, None)]
    if rule.companion_pattern is not None:
        if not rule.companion_pattern.search(read_text(sibling, max_file_size)):
            return [_finding(rule, rel_path, None, None)]
    return []


def evaluate_file(
    path: Path,
    rel_path: str,
    rules: Sequence[Rule],
    max_file_size: int,
    match_timeout: float,
) -> FileResult:
    """Run every applicable rule against one file.

    The file is read once, and only if a content rule applies. A file that
    cannot be read yields one warning and no content findings; a rule that
    fails yields a match_error warning and the remaining rules still run.
    """
    findings: list[Finding] = []
    warnings: list[ScanWarning] = []
    text: Optional[str] = None
    unreadable = False

    for rule in rules:
        if not rule_applies(rule, rel_path):
            continue

        if rule.mode not in CONTENT_MODES:
            try:
                findings.extend(match_path(rule, path, rel_path, max_file_size))
            except FileWarning as e:
                warnings.append(
                    ScanWarning(path=rel_path, kind=e.kind, message=f"{rule.companion}: {e.message}", rule=rule.id)
                )
            continue

        if unreadable:
            continue
        if text is None:
            try:
                text = read_text(path, max_file_size)
            except FileWarning as e:
                logger.debug(f"Skipping {rel_path}: {e.message}")
                warnings.append(ScanWarning(path=rel_path, kind=e.kind, message=e.message))
                unreadable = True
                continue

        try:
            findings.extend(match_content(rule, rel_path, text, match_timeout))
        except MatchError as e:
            logger.warning(f"Rule {e.rule_id} skipped on {rel_path}: {e.message}")
            warnings.append(
                ScanWarning(path=rel_path, kind=WarningKind.match_error, message=e.message, rule=e.rule_id)
            )

    return FileResult(findings, warnings)
