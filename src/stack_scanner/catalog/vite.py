"""Vite rules: VITE_ secrets and risky dev/build config."""

_CONFIG_GLOBS = ["vite.config.ts", "vite.config.js", "vite.config.mjs"]

PROFILE = {
    "id": "vite",
    "title": "Vite",
    "files": _CONFIG_GLOBS,
}

RULES = [
    {
        "id": "vite-public-secret",
        "title": "Suspicious VITE_ variable (bundled into client)",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "ignore_case": True,
        "globs": [".env", ".env.*"],
        "pattern": r"VITE_\w*(?:SECRET|KEY|PASSWORD|TOKEN|PRIVATE)\w*\s*=\s*(?P<value>.*)",
        "capture": "value",
        "remediation": "Only prefix values that are safe to publish with VITE_.",
    },
    {
        "id": "vite-define-process-env",
        "title": "process.env in define block (may expose secrets to client)",
        "category": "misconfiguration",
        "tag": "secret",
        "severity": "HIGH",
        "mode": "file",
        "globs": _CONFIG_GLOBS,
        "pattern": r"define\s*:\s*\{[^}]*process\.env",
    },
    {
        "id": "vite-env-prefix",
        "title": "envPrefix configured (verify only public prefixes are exposed)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": _CONFIG_GLOBS,
        "pattern": r"envPrefix",
    },
    {
        "id": "vite-host-exposed",
        "title": "Dev server exposed to network",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "globs": _CONFIG_GLOBS,
        "pattern": r"host\s*:\s*(?:['\"]0\.0\.0\.0['\"]|true)",
    },
    {
        "id": "vite-sourcemap",
        "title": "Source maps enabled (check if production)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": _CONFIG_GLOBS,
        "pattern": r"sourcemap\s*:\s*true",
    },
    {
        "id": "vite-env-local-not-ignored",
        "title": ".env.local exists but is not in .gitignore",
        "category": "misconfiguration",
        "tag": "secret",
        "severity": "MEDIUM",
        "mode": "companion",
        "globs": [".env.local", ".env.*.local"],
        "companion": ".gitignore",
        "companion_pattern": r"^\s*/?(?:\.env\.local|\.env\*|\.env\.\*|\.env\.\*\.local|\*\.local)\s*$",
        "remediation": "Add .env.local and .env.*.local to .gitignore.",
    },
]
