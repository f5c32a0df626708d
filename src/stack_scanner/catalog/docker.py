"""Docker rules: Dockerfile secrets and root user, compose exposure, .dockerignore."""

_DOCKERFILE_GLOBS = ["Dockerfile*", "*.Dockerfile"]
_COMPOSE_GLOBS = [
    "docker-compose*.yml",
    "docker-compose*.yaml",
    "compose.yml",
    "compose.yaml",
]

PROFILE = {
    "id": "docker",
    "title": "Docker",
    "files": [
        "Dockerfile",
        "docker-compose.yml",
        "docker-compose.yaml",
        "compose.yml",
        "compose.yaml",
    ],
}


def _dockerignore_entry(entry: str, pattern: str) -> dict:
    return {
        "id": f"dockerignore-missing-{entry.strip('*.')}",
        "title": f".dockerignore missing: {entry}",
        "category": "misconfiguration",
        "tag": "secret",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": [".dockerignore"],
        "pattern": pattern,
        "remediation": f"Add {entry} to .dockerignore.",
    }


RULES = [
    # --- Dockerfile ---
    {
        "id": "docker-env-secret",
        "title": "Secret in ENV instruction",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "globs": _DOCKERFILE_GLOBS,
        "pattern": r"^\s*ENV\s+(?P<value>.*(?:KEY|SECRET|PASSWORD|TOKEN).*)$",
        "capture": "value",
        "remediation": "Use BuildKit secrets or runtime environment variables.",
    },
    {
        "id": "docker-arg-secret",
        "title": "Sensitive ARG instruction (visible in image history)",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "globs": _DOCKERFILE_GLOBS,
        "pattern": r"^\s*ARG\s+(?P<value>.*(?:KEY|SECRET|PASSWORD|TOKEN).*)$",
        "capture": "value",
        "remediation": "Use RUN --mount=type=secret instead of build args.",
    },
    {
        "id": "docker-copy-all",
        "title": "COPY . copies all files (may include secrets)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": _DOCKERFILE_GLOBS,
        "pattern": r"^COPY \. ",
    },
    {
        "id": "docker-no-user",
        "title": "No USER instruction (runs as root)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": _DOCKERFILE_GLOBS,
        "pattern": r"^USER ",
        "remediation": "Add a non-root USER before CMD/ENTRYPOINT.",
    },
    {
        "id": "docker-outdated-base",
        "title": "Potentially outdated base image",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": _DOCKERFILE_GLOBS,
        "pattern": r"^FROM\s+(?:node:(?:14|16)(?![0-9])|python:3\.[78](?![0-9]))",
    },
    {
        "id": "docker-no-dockerignore",
        "title": "No .dockerignore file (secrets may be copied into image)",
        "category": "misconfiguration",
        "tag": "secret",
        "severity": "MEDIUM",
        "mode": "companion",
        "globs": _DOCKERFILE_GLOBS,
        "companion": ".dockerignore",
    },
    # --- Compose ---
    {
        "id": "compose-db-port",
        "title": "Database/Redis port exposed to host",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "CRITICAL",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"(?<![\d.])(?P<value>(?:\d{1,3}(?:\.\d{1,3}){3}:)?(?:5432|3306|27017|6379):\d+)",
        "capture": "value",
        "line_unless": r"127\.0\.0\.1:",
        "remediation": "Drop the ports mapping or bind it to 127.0.0.1.",
    },
    {
        "id": "compose-docker-socket",
        "title": "Docker socket mounted (root access to host)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "CRITICAL",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"docker\.sock",
    },
    {
        "id": "compose-privileged",
        "title": "Privileged container (full host access)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "CRITICAL",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"privileged\s*:\s*true",
    },
    {
        "id": "compose-cap-add",
        "title": "cap_add includes privileged capability (review necessity)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"\b(?:SYS_ADMIN|NET_ADMIN|SYS_PTRACE)\b|^\s*-\s*['\"]?ALL['\"]?\s*$",
    },
    {
        "id": "compose-weak-password",
        "title": "Potential default/weak password",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "ignore_case": True,
        "globs": _COMPOSE_GLOBS,
        "pattern": r"PASSWORD['\"]?\s*[:=]\s*['\"]?(?P<value>(?:postgres|mysql|admin|root|password|123)\S*)",
        "capture": "value",
    },
    {
        "id": "compose-host-network",
        "title": "Host network mode (bypasses Docker networking)",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "HIGH",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"network_mode\s*:\s*['\"]?host",
    },
    {
        "id": "compose-host-pid",
        "title": "PID namespace set to host (process isolation bypass)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _COMPOSE_GLOBS,
        "pattern": r"pid\s*:\s*['\"]?host",
    },
    # --- .dockerignore ---
    _dockerignore_entry(".env", r"\.env"),
    _dockerignore_entry(".git", r"\.git"),
    _dockerignore_entry("*.pem", r"\*\.pem"),
    _dockerignore_entry("*.key", r"\*\.key"),
]
