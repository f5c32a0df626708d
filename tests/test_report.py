"""Tests for severity aggregation and rendering."""

import json

from stack_scanner.models import Finding, FindingTag, RuleCategory, ScanWarning, Severity, WarningKind
from stack_scanner.report import HEADER, dedupe, render, render_json, summarize


def _finding(path="app.py", line=1, rule="r", severity=Severity.HIGH, category=FindingTag.secret, **kwargs):
    kwargs.setdefault(
        "rule_category",
        RuleCategory.secret if category == FindingTag.secret else RuleCategory.misconfiguration,
    )
    return Finding(
        path=path,
        line=line,
        rule=rule,
        title=kwargs.pop("title", f"{rule} title"),
        severity=severity,
        snippet=kwargs.pop("snippet", "AKIA...MPLE"),
        category=category,
        **kwargs,
    )


class TestDedupe:
    """Test dedupe()."""

    def test_same_location_and_category_collapsed(self):
        """Test that the most severe of duplicates is kept."""
        low = _finding(rule="generic-cors", severity=Severity.MEDIUM, category=FindingTag.network)
        high = _finding(rule="stack-cors", severity=Severity.HIGH, category=FindingTag.network)
        assert dedupe([low, high]) == [high]

    def test_tie_keeps_first_discovered(self):
        """Test discovery order breaks ties."""
        first = _finding(rule="aws-access-key")
        second = _finding(rule="ai-key-heuristic")
        assert dedupe([first, second]) == [first]

    def test_tags_within_rule_category_collapsed(self):
        """Test that misconfigurations with different tags on one line are merged."""
        exposed = _finding(rule="cors-wildcard", severity=Severity.MEDIUM, category=FindingTag.network)
        debug = _finding(rule="debug-enabled", severity=Severity.HIGH, category=FindingTag.config)
        assert dedupe([exposed, debug]) == [debug]

    def test_different_category_kept(self):
        """Test that a secret and a config issue on one line both survive."""
        secret = _finding(category=FindingTag.secret)
        config = _finding(rule="other", category=FindingTag.config)
        assert len(dedupe([secret, config])) == 2

    def test_whole_file_findings_kept_per_rule(self):
        """Test that line-less findings on one file are only merged per rule."""
        a = _finding(path="Dockerfile", line=None, rule="docker-no-user", category=FindingTag.config)
        b = _finding(path="Dockerfile", line=None, rule="docker-no-dockerignore", category=FindingTag.config)
        assert dedupe([a, b, a]) == [a, b]


class TestSummarize:
    """Test summarize()."""

    def test_orders_by_severity_then_discovery(self):
        """Test severity bands with stable order inside each band."""
        findings = [
            _finding(path="a", severity=Severity.LOW),
            _finding(path="b", severity=Severity.CRITICAL),
            _finding(path="c", severity=Severity.LOW),
            _finding(path="d", severity=Severity.CRITICAL),
        ]
        report = summarize(findings)
        assert [f.path for f in report.findings] == ["b", "d", "a", "c"]

    def test_counts(self):
        """Test per-severity counts and the issues flag."""
        report = summarize([
            _finding(path="a", severity=Severity.CRITICAL),
            _finding(path="b", severity=Severity.MEDIUM),
            _finding(path="c", severity=Severity.MEDIUM),
            _finding(path="d", severity=Severity.INFO),
        ])
        assert report.summary.critical == 1
        assert report.summary.medium == 2
        assert report.summary.info == 1
        assert report.summary.total == 4
        assert report.issues_found is True
        assert report.exit_code == 1

    def test_empty(self):
        """Test that no findings means exit code 0."""
        report = summarize([])
        assert report.summary.total == 0
        assert report.exit_code == 0

    def test_profiles_sorted(self):
        """Test that profiles are reported in sorted order."""
        assert summarize([], profiles={"nextjs", "docker"}).profiles == ("docker", "nextjs")


class TestRender:
    """Test text and JSON rendering."""

    def test_text_layout(self):
        """Test header, sections, finding lines and summary."""
        report = summarize(
            [
                _finding(path="config.py", line=3, rule="aws-access-key", title="AWS Access Key",
                         severity=Severity.CRITICAL, remediation="Rotate it."),
                _finding(path="Dockerfile", line=None, rule="docker-no-user", title="No USER instruction",
                         severity=Severity.MEDIUM, category=FindingTag.config, snippet=""),
            ],
            profiles=["docker"],
            files_scanned=2,
        )
        text = render(report)
        lines = text.splitlines()
        assert lines[0] == HEADER
        assert "Profiles: docker" in lines
        assert "Files scanned: 2" in lines
        assert "[CRITICAL] (1)" in lines
        assert "  config.py:3 — AWS Access Key — AKIA...MPLE" in lines
        assert "      Fix: Rotate it." in lines
        assert "  Dockerfile — No USER instruction" in lines
        assert lines[-1] == "[!] Found 2 issue(s): 1 critical, 1 medium"
        assert text.index("[CRITICAL]") < text.index("[MEDIUM]")

    def test_text_clean_report(self):
        """Test the no-findings summary line."""
        text = render(summarize([]))
        assert "Profiles: none (generic rules only)" in text
        assert text.rstrip().endswith("[✓] No issues found")

    def test_text_warnings_and_cancelled(self):
        """Test the warnings section and partial-result note."""
        warning = ScanWarning(path="big.log", kind=WarningKind.oversized, message="too big")
        text = render(summarize([], warnings=[warning], cancelled=True))
        assert "Warnings (1):" in text
        assert "  big.log: oversized: too big" in text
        assert "Scan was cancelled; results are partial." in text

    def test_render_is_deterministic(self):
        """Test identical reports render identically."""
        findings = [_finding(path=p) for p in "abc"]
        assert render(summarize(findings)) == render(summarize(list(findings)))

    def test_json_fields(self):
        """Test JSON field names."""
        report = summarize([_finding(path="config.py", line=None, rule="aws-access-key")], profiles=["docker"])
        data = json.loads(render_json(report))
        assert set(data) >= {"findings", "summary", "warnings", "profiles", "cancelled"}
        [finding] = data["findings"]
        assert {"path", "line", "rule", "severity", "snippet", "category", "title"} <= set(finding)
        assert finding["line"] is None
        assert finding["severity"] == "HIGH"
        assert finding["category"] == "secret"
        assert finding["rule_category"] == "secret"
        assert data["summary"]["total"] == 1
        assert data["summary"]["issues_found"] is True
