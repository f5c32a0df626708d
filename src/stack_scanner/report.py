"""Severity aggregation and report rendering."""

from typing import Iterable

from .models import SEVERITY_ORDER, Finding, ScanReport, ScanSummary, ScanWarning

HEADER = "=== STACK SCANNER REPORT ==="


def _dedupe_key(finding: Finding) -> tuple:
    # Whole-file findings carry no line to tell them apart, so they are
    # distinct per rule.
    if finding.line is None:
        return finding.path, None, finding.rule
    return finding.path, finding.line, finding.rule_category


def dedupe(findings: Iterable[Finding]) -> list[Finding]:
    """Drop findings sharing (path, line, rule category), keeping the most severe.

    Ties keep the earliest in discovery order. The result is ordered by
    severity, then discovery order.
    """
    seen = set()
    kept = []
    for finding in sorted(findings, key=lambda f: f.severity.rank):
        key = _dedupe_key(finding)
        if key in seen:
            continue
        seen.add(key)
        kept.append(finding)
    return kept


def summarize(
    findings: Iterable[Finding],
    warnings: Iterable[ScanWarning] = (),
    profiles: Iterable[str] = (),
    files_scanned: int = 0,
    cancelled: bool = False,
) -> ScanReport:
    """Build the final, immutable report for one scan."""
    ordered = dedupe(findings)
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for finding in ordered:
        counts[finding.severity] += 1

    summary = ScanSummary(
        **{severity.value.lower(): n for severity, n in counts.items()},
        total=len(ordered),
        issues_found=bool(ordered),
    )
    return ScanReport(
        findings=tuple(ordered),
        warnings=tuple(warnings),
        summary=summary,
        profiles=tuple(sorted(profiles)),
        files_scanned=files_scanned,
        cancelled=cancelled,
    )


def _format_finding(finding: Finding) -> str:
    location = finding.path if finding.line is None else f"{finding.path}:{finding.line}"
    parts = [location, finding.title]
    if finding.snippet:
        parts.append(finding.snippet)
    return "  " + " — ".join(parts)


def render(report: ScanReport) -> str:
    """Human-readable text report. Identical reports render identically."""
    lines = [
        HEADER,
        f"Profiles: {', '.join(report.profiles) if report.profiles else 'none (generic rules only)'}",
        f"Files scanned: {report.files_scanned}",
    ]

    for severity in SEVERITY_ORDER:
        group = report.by_severity(severity)
        if not group:
            continue
        lines.append("")
        lines.append(f"[{severity.value}] ({len(group)})")
        for finding in group:
            lines.append(_format_finding(finding))
            if finding.remediation:
                lines.append(f"      Fix: {finding.remediation}")

    if report.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            rule = f" [{warning.rule}]" if warning.rule else ""
            lines.append(f"  {warning.path}: {warning.kind.value}{rule}: {warning.message}")

    lines.append("")
    summary = report.summary
    if summary.issues_found:
        counts = ", ".join(
            f"{getattr(summary, s.value.lower())} {s.value.lower()}"
            for s in SEVERITY_ORDER
            if getattr(summary, s.value.lower())
        )
        lines.append(f"[!] Found {summary.total} issue(s): {counts}")
    else:
        lines.append("[✓] No issues found")
    if report.cancelled:
        lines.append("Scan was cancelled; results are partial.")
    return "\n".join(lines) + "\n"


def render_json(report: ScanReport) -> str:
    """JSON report: findings, summary, warnings, profiles and scan status."""
    return report.model_dump_json(indent=2)
