"""Scan engine: fans candidate files out to a worker pool and collects results."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from .config import ScanConfig
from .detector import detect
from .errors import InputError
from .file_walker import rule_applies, walk_files
from .matcher import FileResult, evaluate_file
from .models import Finding, Rule, ScanReport, ScanWarning, WarningKind
from .registry import PatternRegistry
from .report import summarize

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Raw output of scan(), before deduplication and ordering by severity."""

    findings: list[Finding] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    files_scanned: int = 0
    cancelled: bool = False


class _Collector:
    """Thread-safe sink for per-file results, keyed by walk order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._results: dict[int, FileResult] = {}

    def add(self, index: int, result: FileResult) -> None:
        with self._lock:
            self._results[index] = result

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def ordered(self) -> list[FileResult]:
        with self._lock:
            return [self._results[i] for i in sorted(self._results)]


def _check_root(root: str | Path) -> Path:
    root = Path(root)
    if not root.exists():
        raise InputError(f"path does not exist: {root}")
    if not root.is_dir():
        raise InputError(f"not a directory: {root}")
    try:
        next(root.iterdir(), None)
    except OSError as e:
        raise InputError(f"cannot list directory {root}: {e.strerror or e}") from e
    return root


def scan(
    root: str | Path,
    profiles: Iterable[str],
    rules: Iterable[Rule],
    config: Optional[ScanConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    progress: Optional[Callable[[str], None]] = None,
) -> ScanResult:
    """Apply rules to every candidate file under root.

    Only rules that are generic or belong to one of ``profiles`` run, and a
    file is a candidate only when at least one of those rules' globs matches
    it. Findings are ordered by path, then line, then rule registration, so
    the result does not depend on which worker finished first. No
    deduplication happens here.

    Once ``cancel_event`` is set, files that have not started are skipped
    and files in flight finish. ``progress`` is called with each completed
    file's relative path.

    Raises:
        InputError: root is missing, not a directory or cannot be listed.
    """
    root = _check_root(root)
    config = config or ScanConfig()
    cancel_event = cancel_event or threading.Event()

    active = set(profiles)
    rules = [r for r in rules if r.profile is None or r.profile in active]
    rule_order = {rule.id: i for i, rule in enumerate(rules)}
    walk_warnings: list[ScanWarning] = []

    def unlisted(rel_dir: str, error: OSError) -> None:
        walk_warnings.append(
            ScanWarning(
                path=rel_dir,
                kind=WarningKind.unreadable,
                message=f"cannot list directory: {error.strerror or error}",
            )
        )

    candidates = [
        (path, rel_path)
        for path, rel_path in walk_files(root, config.exclude, on_error=unlisted)
        if any(rule_applies(r, rel_path) for r in rules)
    ]
    logger.info(f"Scanning {len(candidates)} files with {len(rules)} rules ({config.workers} workers)")

    collector = _Collector()

    def scan_one(index: int, path: Path, rel_path: str) -> None:
        if cancel_event.is_set():
            return
        collector.add(index, evaluate_file(path, rel_path, rules, config.max_file_size, config.match_timeout))
        if progress is not None:
            progress(rel_path)

    if candidates:
        with ThreadPoolExecutor(max_workers=min(config.workers, len(candidates))) as pool:
            futures = [pool.submit(scan_one, i, path, rel) for i, (path, rel) in enumerate(candidates)]
            try:
                for future in as_completed(futures):
                    future.result()
            except KeyboardInterrupt:
                logger.warning("Interrupted, finishing files in flight")
                cancel_event.set()
                for future in futures:
                    future.cancel()

    result = ScanResult(warnings=walk_warnings, files_scanned=len(collector))
    for file_result in collector.ordered():
        result.findings.extend(
            sorted(
                file_result.findings,
                key=lambda f: (f.line or 0, rule_order[f.rule]),
            )
        )
        result.warnings.extend(file_result.warnings)
    result.cancelled = cancel_event.is_set() and result.files_scanned < len(candidates)
    if result.cancelled:
        logger.warning(f"Scan cancelled after {result.files_scanned} of {len(candidates)} files")
    return result


def run_scan(
    root: str | Path,
    config: Optional[ScanConfig] = None,
    registry: Optional[PatternRegistry] = None,
    cancel_event: Optional[threading.Event] = None,
    progress: Optional[Callable[[str], None]] = None,
) -> ScanReport:
    """Detect (or take forced) profiles, scan, and build the final report.

    Raises:
        InputError: root is missing, not a directory or cannot be listed.
        ConfigError: a forced profile is unknown.
    """
    root = _check_root(root)
    config = config or ScanConfig()
    registry = registry or PatternRegistry.from_catalog()

    if config.profiles is not None:
        profiles = set(config.profiles)
    else:
        profiles = detect(root, registry.profiles, config.exclude)
    rules = registry.rules_for(profiles)

    result = scan(root, profiles, rules, config, cancel_event=cancel_event, progress=progress)
    return summarize(
        result.findings,
        warnings=result.warnings,
        profiles=sorted(profiles),
        files_scanned=result.files_scanned,
        cancelled=result.cancelled,
    )
