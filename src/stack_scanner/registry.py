"""Pattern registry: validated rules and profiles, looked up by active profile."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ValidationError

from . import catalog
from .errors import ConfigError, InputError
from .models import Profile, Rule

logger = logging.getLogger(__name__)


def _validate(model: type[BaseModel], spec: Any, kind: str):
    ident = spec.get("id", "?") if isinstance(spec, dict) else "?"
    try:
        return model.model_validate(spec)
    except ValidationError as e:
        raise ConfigError(f"invalid {kind} {ident!r}: {e}") from e


class PatternRegistry:
    """Read-only collection of rules and the profiles that activate them.

    Rules keep registration order. Every check on the catalog happens here,
    so a registry that constructs successfully never fails at match time
    because of a bad rule definition.
    """

    def __init__(self, profiles: Iterable[Profile], rules: Iterable[Rule]):
        self._rules: list[Rule] = list(rules)
        self._rules_by_id: dict[str, Rule] = {}
        for rule in self._rules:
            if rule.id in self._rules_by_id:
                raise ConfigError(f"duplicate rule id {rule.id!r}")
            self._rules_by_id[rule.id] = rule

        self._profiles: dict[str, Profile] = {}
        for profile in profiles:
            if profile.id in self._profiles:
                raise ConfigError(f"duplicate profile id {profile.id!r}")
            own_rules = tuple(r for r in self._rules if r.profile == profile.id)
            self._profiles[profile.id] = profile.model_copy(update={"rules": own_rules})

        for rule in self._rules:
            if rule.profile is not None and rule.profile not in self._profiles:
                raise ConfigError(f"rule {rule.id!r} references unknown profile {rule.profile!r}")

        logger.debug(f"Registry holds {len(self._rules)} rules across {len(self._profiles)} profiles")

    @classmethod
    def from_specs(
        cls,
        profile_specs: Iterable[dict[str, Any]],
        rule_specs: Iterable[dict[str, Any]],
    ) -> "PatternRegistry":
        """Build a registry from plain dict definitions.

        Raises:
            ConfigError: a spec fails validation (bad regex, unknown severity,
                missing escalation target, ...), an id is duplicated, or a
                rule names an unknown profile.
        """
        profiles = [_validate(Profile, spec, "profile") for spec in profile_specs]
        rules = [_validate(Rule, spec, "rule") for spec in rule_specs]
        return cls(profiles, rules)

    @classmethod
    def from_catalog(cls) -> "PatternRegistry":
        """Load the built-in catalog."""
        return cls.from_specs(catalog.profile_specs(), catalog.rule_specs())

    def load_file(self, path: str | Path) -> "PatternRegistry":
        """Return a new registry with the rules of a JSON catalog file merged in.

        The file holds ``{"profiles": [...], "rules": [...]}``; both keys are
        optional. Rules may reference built-in profiles.

        Raises:
            InputError: the file is unreadable or not JSON.
            ConfigError: the file content is not a valid catalog.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InputError(f"rule catalog {path} is not valid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"cannot read rule catalog {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"rule catalog {path} must be a JSON object")
        profile_specs = data.get("profiles", [])
        rule_specs = data.get("rules", [])
        if not isinstance(profile_specs, list) or not isinstance(rule_specs, list):
            raise ConfigError(f"rule catalog {path}: 'profiles' and 'rules' must be lists")

        new_profiles = [_validate(Profile, spec, "profile") for spec in profile_specs]
        new_rules = [_validate(Rule, spec, "rule") for spec in rule_specs]
        logger.info(f"Loaded {len(new_rules)} rules and {len(new_profiles)} profiles from {path}")
        return PatternRegistry(
            list(self._profiles.values()) + new_profiles,
            self._rules + new_rules,
        )

    @property
    def profiles(self) -> tuple[Profile, ...]:
        return tuple(self._profiles.values())

    @property
    def profile_ids(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules_by_id.get(rule_id)

    def rules_for(self, profiles: Iterable[str]) -> list[Rule]:
        """Generic rules plus every rule of an active profile, in registration order.

        Raises:
            ConfigError: a requested profile id is not registered.
        """
        active = set(profiles)
        unknown = active - self._profiles.keys()
        if unknown:
            raise ConfigError(f"unknown profile(s): {', '.join(sorted(unknown))}")
        return [r for r in self._rules if r.profile is None or r.profile in active]
