"""Tests for the pattern registry and rule validation."""

import json

import pytest

from stack_scanner.errors import ConfigError, InputError
from stack_scanner.models import MatchMode, Severity
from stack_scanner.registry import PatternRegistry


def _rule(**overrides):
    spec = {
        "id": "test-rule",
        "title": "Test rule",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "pattern": r"secret=(?P<value>\w+)",
    }
    spec.update(overrides)
    return spec


class TestCatalog:
    """Test the built-in catalog."""

    def test_loads(self, registry):
        """Test that every built-in rule compiles and validates."""
        assert len(registry.rules) > 50
        assert set(registry.profile_ids) == {
            "nextjs", "vite", "bun", "express", "django", "fastapi", "docker", "convex",
        }

    def test_aws_rule_registered(self, registry):
        """Test lookup by rule id."""
        rule = registry.get("aws-access-key")
        assert rule is not None
        assert rule.severity == Severity.CRITICAL
        assert rule.profile is None
        assert registry.get("does-not-exist") is None

    def test_profiles_carry_their_rules(self, registry):
        """Test that each profile lists exactly its own rules, in order."""
        docker = next(p for p in registry.profiles if p.id == "docker")
        ids = [r.id for r in docker.rules]
        assert "compose-db-port" in ids
        assert all(r.profile == "docker" for r in docker.rules)
        assert ids == [r.id for r in registry.rules if r.profile == "docker"]


class TestRulesFor:
    """Test rules_for()."""

    def test_no_profiles_returns_generic_only(self, registry):
        """Test that the empty set yields only always-on rules."""
        rules = registry.rules_for(set())
        assert rules
        assert all(r.profile is None for r in rules)

    def test_profile_rule_included_iff_active(self, registry):
        """Test that a profile rule appears exactly when its profile is active."""
        for profile_id in registry.profile_ids:
            with_profile = {r.id for r in registry.rules_for({profile_id})}
            without = {r.id for r in registry.rules_for(set(registry.profile_ids) - {profile_id})}
            for rule in registry.rules:
                if rule.profile == profile_id:
                    assert rule.id in with_profile
                    assert rule.id not in without

    def test_registration_order_and_idempotence(self, registry):
        """Test stable ordering across repeated calls."""
        first = registry.rules_for({"docker", "nextjs"})
        second = registry.rules_for({"nextjs", "docker"})
        assert [r.id for r in first] == [r.id for r in second]
        order = [r.id for r in registry.rules]
        positions = [order.index(r.id) for r in first]
        assert positions == sorted(positions)

    def test_unknown_profile_rejected(self, registry):
        """Test that asking for an unregistered profile is a ConfigError."""
        with pytest.raises(ConfigError, match="rails"):
            registry.rules_for({"rails"})


class TestValidation:
    """Test malformed rule detection at load time."""

    def test_invalid_regex(self):
        """Test that a bad regular expression fails at load, not match time."""
        with pytest.raises(ConfigError, match="test-rule"):
            PatternRegistry.from_specs([], [_rule(pattern="([unclosed")])

    def test_unknown_severity(self):
        """Test that severities outside the scale are rejected."""
        with pytest.raises(ConfigError):
            PatternRegistry.from_specs([], [_rule(severity="URGENT")])

    def test_duplicate_ids(self):
        """Test that two rules cannot share an id."""
        with pytest.raises(ConfigError, match="duplicate"):
            PatternRegistry.from_specs([], [_rule(), _rule()])

    def test_unknown_profile_reference(self):
        """Test that a rule cannot point at a missing profile."""
        with pytest.raises(ConfigError, match="unknown profile"):
            PatternRegistry.from_specs([], [_rule(profile="rails")])

    def test_escalation_needs_target(self):
        """Test that escalate_if without escalate_to is rejected."""
        with pytest.raises(ConfigError):
            PatternRegistry.from_specs([], [_rule(escalate_if="credentials")])

    def test_companion_mode_needs_companion(self):
        """Test that companion rules must name the sibling file."""
        with pytest.raises(ConfigError):
            PatternRegistry.from_specs([], [_rule(mode="companion", pattern=None)])

    def test_capture_must_name_a_group(self):
        """Test that capture refers to a group of the pattern."""
        with pytest.raises(ConfigError):
            PatternRegistry.from_specs([], [_rule(capture="missing")])

    def test_content_modes_need_pattern(self):
        """Test that line/file/absent rules require a pattern."""
        with pytest.raises(ConfigError):
            PatternRegistry.from_specs([], [_rule(pattern=None)])

    def test_filename_mode_needs_no_pattern(self):
        """Test that filename rules are valid without a pattern."""
        registry = PatternRegistry.from_specs([], [_rule(mode="filename", pattern=None, globs=["*.pem"])])
        assert registry.get("test-rule").mode == MatchMode.filename

    def test_ignore_case_applies_to_pattern(self):
        """Test that ignore_case compiles patterns case-insensitively."""
        registry = PatternRegistry.from_specs([], [_rule(ignore_case=True)])
        assert registry.get("test-rule").pattern.search("SECRET=abc")


class TestLoadFile:
    """Test merging a user JSON catalog."""

    def test_merges_rules_and_profiles(self, registry, tmp_path):
        """Test that user rules and profiles are added after the built-ins."""
        catalog = tmp_path / "rules.json"
        catalog.write_text(json.dumps({
            "profiles": [{"id": "rails", "title": "Rails", "files": ["Gemfile"]}],
            "rules": [
                _rule(id="rails-secret", profile="rails"),
                _rule(id="extra-docker", profile="docker", tag="config", category="misconfiguration"),
            ],
        }))
        merged = registry.load_file(catalog)
        assert "rails" in merged.profile_ids
        assert merged.get("rails-secret") is not None
        assert [r.id for r in merged.rules_for({"docker"})][-1] == "extra-docker"
        # Original registry is untouched
        assert registry.get("rails-secret") is None

    def test_missing_file(self, registry, tmp_path):
        """Test that an unreadable catalog is an InputError."""
        with pytest.raises(InputError):
            registry.load_file(tmp_path / "nope.json")

    def test_not_json(self, registry, tmp_path):
        """Test that a non-JSON catalog is an InputError."""
        catalog = tmp_path / "rules.json"
        catalog.write_text("rules: [")
        with pytest.raises(InputError, match="not valid JSON"):
            registry.load_file(catalog)

    def test_malformed_rule_in_file(self, registry, tmp_path):
        """Test that a bad rule inside the file is a ConfigError."""
        catalog = tmp_path / "rules.json"
        catalog.write_text(json.dumps({"rules": [_rule(pattern="(")]}))
        with pytest.raises(ConfigError):
            registry.load_file(catalog)

    def test_wrong_shape(self, registry, tmp_path):
        """Test that a catalog must be an object of lists."""
        catalog = tmp_path / "rules.json"
        catalog.write_text(json.dumps([_rule()]))
        with pytest.raises(ConfigError):
            registry.load_file(catalog)
