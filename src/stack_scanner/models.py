"""Pydantic models for stack-scanner."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class Severity(str, Enum):
    """Severity levels for findings, most severe first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """0 for CRITICAL up to 4 for INFO."""
        return SEVERITY_ORDER.index(self)


SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
)


class RuleCategory(str, Enum):
    """What kind of problem a rule looks for."""

    secret = "secret"
    misconfiguration = "misconfiguration"


class FindingTag(str, Enum):
    """Classification attached to every finding."""

    secret = "secret"
    config = "config"
    auth = "auth"
    network = "network"


class MatchMode(str, Enum):
    """How a rule's matcher is applied to a file."""

    line = "line"
    file = "file"
    absent = "absent"
    filename = "filename"
    companion = "companion"


# Modes that need the file's text
CONTENT_MODES = frozenset({MatchMode.line, MatchMode.file, MatchMode.absent})


class Rule(BaseModel):
    """A named detection rule. Compiled once at load time, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Stable rule identifier, e.g. 'aws-access-key'")
    title: str = Field(description="Short human-readable title")
    category: RuleCategory
    tag: FindingTag = Field(description="Classification copied onto findings")
    severity: Severity = Field(description="Default severity")
    mode: MatchMode = Field(default=MatchMode.line)
    ignore_case: bool = Field(default=False)
    globs: tuple[str, ...] = Field(default=("*",), description="File globs the rule applies to")
    skip_globs: tuple[str, ...] = Field(default=(), description="Globs carved out of `globs`")
    pattern: Optional[re.Pattern] = Field(default=None, description="Main matcher")
    capture: Optional[str] = Field(
        default=None,
        description="Named group holding the value to redact and locate; whole match if unset",
    )
    requires: Optional[re.Pattern] = Field(
        default=None, description="File must contain this for the rule to be evaluated"
    )
    unless: Optional[re.Pattern] = Field(
        default=None, description="Rule is skipped when the file contains this"
    )
    line_unless: Optional[re.Pattern] = Field(
        default=None, description="Line matches are dropped when the line contains this"
    )
    escalate_if: Optional[re.Pattern] = Field(
        default=None, description="Severity override applies when this also matches in the file"
    )
    escalate_to: Optional[Severity] = Field(default=None)
    companion: Optional[str] = Field(
        default=None, description="Sibling file name checked by companion rules"
    )
    companion_pattern: Optional[re.Pattern] = Field(
        default=None, description="Content the companion file must contain"
    )
    remediation: Optional[str] = Field(default=None, description="How to fix the issue")
    profile: Optional[str] = Field(
        default=None, description="Profile that activates the rule; None means always on"
    )

    @field_validator("globs")
    @classmethod
    def _non_empty_globs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a rule needs at least one file glob")
        return value

    @field_validator(
        "pattern", "requires", "unless", "line_unless", "escalate_if", "companion_pattern",
        mode="before",
    )
    @classmethod
    def _compile(cls, value, info: ValidationInfo):
        if value is None or isinstance(value, re.Pattern):
            return value
        flags = re.MULTILINE
        if info.data.get("ignore_case"):
            flags |= re.IGNORECASE
        try:
            return re.compile(value, flags)
        except re.error as e:
            raise ValueError(f"invalid regular expression {value!r}: {e}") from e

    @model_validator(mode="after")
    def _check_mode(self) -> "Rule":
        if self.mode in CONTENT_MODES and self.pattern is None:
            raise ValueError(f"{self.mode.value} rules need a pattern")
        if self.mode == MatchMode.companion and not self.companion:
            raise ValueError("companion rules need a companion file name")
        if (self.escalate_if is None) != (self.escalate_to is None):
            raise ValueError("escalate_if and escalate_to must be set together")
        if self.capture is not None:
            if self.pattern is None or self.capture not in self.pattern.groupindex:
                raise ValueError(f"pattern has no group named {self.capture!r}")
        return self


class Profile(BaseModel):
    """A stack context: detection predicate plus the rules it activates."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    files: tuple[str, ...] = Field(default=(), description="Root-level files, any one present")
    dirs: tuple[str, ...] = Field(default=(), description="Root-level directories, any one present")
    anywhere: tuple[str, ...] = Field(
        default=(), description="File names found anywhere in the tree"
    )
    manifests: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Root-level manifest glob -> substrings, any substring in any manifest",
    )
    ignore_case: bool = Field(default=False, description="Case-insensitive manifest matching")
    rules: tuple[Rule, ...] = Field(default=(), description="Rules in registration order")


class Finding(BaseModel):
    """One rule match in one location."""

    path: str = Field(description="File path relative to the scan root")
    line: Optional[int] = Field(default=None, description="1-based line, None for whole-file checks")
    rule: str = Field(description="Identifier of the rule that matched")
    title: str = Field(description="Short title describing the issue")
    severity: Severity
    snippet: str = Field(description="Redacted matched value")
    category: FindingTag
    rule_category: RuleCategory = Field(description="Category of the rule that matched")
    remediation: Optional[str] = Field(default=None)


class WarningKind(str, Enum):
    """Why part of the tree was not fully scanned."""

    unreadable = "unreadable"
    binary = "binary"
    oversized = "oversized"
    match_error = "match_error"


class ScanWarning(BaseModel):
    """A recoverable problem that reduced scan coverage."""

    path: str
    kind: WarningKind
    message: str
    rule: Optional[str] = Field(default=None, description="Rule involved, for match errors")


class ScanSummary(BaseModel):
    """Summary counts for a scan report."""

    critical: int = Field(default=0, description="Number of critical findings")
    high: int = Field(default=0, description="Number of high findings")
    medium: int = Field(default=0, description="Number of medium findings")
    low: int = Field(default=0, description="Number of low findings")
    info: int = Field(default=0, description="Number of informational findings")
    total: int = Field(default=0, description="Total number of findings")
    issues_found: bool = Field(default=False, description="Whether any finding was reported")


class ScanReport(BaseModel):
    """Final report of one scan. Built once by summarize()."""

    model_config = ConfigDict(frozen=True)

    findings: tuple[Finding, ...] = Field(default=(), description="Sorted by severity, then discovery")
    warnings: tuple[ScanWarning, ...] = Field(default=())
    summary: ScanSummary = Field(default_factory=ScanSummary)
    profiles: tuple[str, ...] = Field(default=(), description="Active profiles, sorted")
    files_scanned: int = Field(default=0)
    cancelled: bool = Field(default=False, description="Scan was stopped before all files ran")

    @property
    def issues_found(self) -> bool:
        return self.summary.issues_found

    @property
    def exit_code(self) -> int:
        """1 when findings are present, else 0. Cancellation is not an error."""
        return 1 if self.summary.issues_found else 0

    def by_severity(self, severity: Severity) -> list[Finding]:
        return [f for f in self.findings if f.severity == severity]


class ScanRequest(BaseModel):
    """Request body for the /scan endpoint and the sandbox entrypoint."""

    path: str = Field(description="Directory to scan")
    profiles: Optional[list[str]] = Field(
        default=None, description="Force these profiles instead of auto-detection"
    )
    exclude: list[str] = Field(default_factory=list, description="Extra glob exclusions")
    max_file_size: Optional[int] = Field(default=None, description="Skip files larger than this")
    workers: Optional[int] = Field(default=None, description="Worker thread count")
