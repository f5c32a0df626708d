"""Built-in rule catalog.

Each module declares ``PROFILE`` (a profile spec dict, or None for the
always-on rules) and ``RULES`` (a list of rule spec dicts using the field
names of :class:`stack_scanner.models.Rule`). Module order is registration
order.
"""

from types import ModuleType
from typing import Any, Iterator

from . import ai_keys, bun, convex, django, docker, express, fastapi, generic, nextjs, vite

CATALOG_MODULES: tuple[ModuleType, ...] = (
    generic,
    ai_keys,
    nextjs,
    vite,
    bun,
    express,
    django,
    fastapi,
    docker,
    convex,
)


def profile_specs() -> Iterator[dict[str, Any]]:
    """Yield the profile spec of every stack module."""
    for module in CATALOG_MODULES:
        if module.PROFILE is not None:
            yield dict(module.PROFILE)


def rule_specs() -> Iterator[dict[str, Any]]:
    """Yield every rule spec, tagged with the profile id of its module."""
    for module in CATALOG_MODULES:
        profile_id = module.PROFILE["id"] if module.PROFILE is not None else None
        for spec in module.RULES:
            yield {**spec, "profile": profile_id}
