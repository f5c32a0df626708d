"""Stack detection: which profiles apply to a project root."""

import logging
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Optional

from .errors import InputError
from .file_walker import walk_files
from .models import Profile
from .registry import PatternRegistry

logger = logging.getLogger(__name__)


def _read_manifest(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.warning(f"Could not read manifest {path.name}: {e}")
        return None


class _ProjectView:
    """What the predicates look at, gathered lazily and at most once per detect() call."""

    def __init__(self, root: Path, exclude: tuple[str, ...]):
        self.root = root
        self.exclude = exclude
        try:
            self.root_files = sorted(p.name for p in root.iterdir() if p.is_file())
        except OSError as e:
            raise InputError(f"cannot list directory {root}: {e.strerror or e}") from e
        self._manifests: dict[str, Optional[str]] = {}
        self._tree_names: Optional[set[str]] = None

    def manifest(self, name: str) -> Optional[str]:
        if name not in self._manifests:
            self._manifests[name] = _read_manifest(self.root / name)
        return self._manifests[name]

    def tree_names(self) -> set[str]:
        if self._tree_names is None:
            self._tree_names = {path.name for path, _ in walk_files(self.root, self.exclude)}
        return self._tree_names


def _matches(profile: Profile, view: _ProjectView) -> bool:
    if any((view.root / name).is_file() for name in profile.files):
        return True
    if any((view.root / name).is_dir() for name in profile.dirs):
        return True

    for glob, needles in profile.manifests.items():
        if profile.ignore_case:
            needles = tuple(n.lower() for n in needles)
        for name in view.root_files:
            if not fnmatchcase(name, glob):
                continue
            text = view.manifest(name)
            if text is None:
                continue
            if profile.ignore_case:
                text = text.lower()
            if any(n in text for n in needles):
                return True

    return any(name in view.tree_names() for name in profile.anywhere)


def detect(
    root: str | Path,
    profiles: Optional[Iterable[Profile]] = None,
    exclude: Iterable[str] = (),
) -> set[str]:
    """Return the ids of every profile whose predicate holds under ``root``.

    Profiles are evaluated independently. Each manifest is read at most once
    per call, and the tree is walked only when a profile looks for a file
    name anywhere. An empty result is not an error.

    Raises:
        InputError: root does not exist, is not a directory or cannot be listed.
    """
    root = Path(root)
    if not root.is_dir():
        raise InputError(f"not a directory: {root}")
    if profiles is None:
        profiles = PatternRegistry.from_catalog().profiles

    view = _ProjectView(root, tuple(exclude))
    detected = {p.id for p in profiles if _matches(p, view)}
    logger.info(f"Detected profiles: {', '.join(sorted(detected)) or 'none'}")
    return detected
