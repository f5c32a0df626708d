"""Bun rules: shell and SQL injection, path traversal, network exposure."""

_SOURCE_GLOBS = ["*.ts", "*.js", "*.tsx"]

PROFILE = {
    "id": "bun",
    "title": "Bun",
    "files": ["bun.lockb", "bun.lock", "bunfig.toml"],
}

RULES = [
    {
        "id": "bun-shell-call",
        "title": "Non-template $ usage (verify escaping)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _SOURCE_GLOBS,
        "pattern": r"\$\s*\(",
    },
    {
        "id": "bun-nested-shell",
        "title": "Nested shell invocation (verify input is not user-controlled)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _SOURCE_GLOBS,
        "pattern": r"\b(?:bash|sh)\s+-c\b",
    },
    {
        "id": "bun-sql-call",
        "title": "sql() used as function call (injection risk)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "CRITICAL",
        "globs": ["*.ts", "*.js"],
        "pattern": r"\bsql\s*\(",
        "remediation": "Use the tagged template form sql`...` so values are parameterized.",
    },
    {
        "id": "bun-query-interpolation",
        "title": "String interpolation in query/run/exec",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": ["*.ts", "*.js"],
        "pattern": r"(?:query|run|exec)\s*\(\s*`",
    },
    {
        "id": "bun-spawn",
        "title": "Bun.spawn usage (verify input validation)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": ["*.ts", "*.js"],
        "pattern": r"Bun\.spawn",
    },
    {
        "id": "bun-file-variable",
        "title": "Bun.file() with variable (path traversal risk)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": ["*.ts", "*.js"],
        "pattern": r"Bun\.file\s*\(",
        "line_unless": r"Bun\.file\s*\(\s*[\"'`]",
    },
    {
        "id": "bun-bind-all",
        "title": "Server bound to 0.0.0.0 (network exposed)",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "globs": ["*.ts", "*.js"],
        "pattern": r"hostname.*0\.0\.0\.0",
    },
    {
        "id": "bun-cors-header",
        "title": "CORS Allow-Origin header found (verify not wildcard)",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "globs": ["*.ts", "*.js"],
        "pattern": r"Access-Control-Allow-Origin",
    },
    {
        "id": "bun-websocket-upgrade",
        "title": "server.upgrade() found (verify auth before upgrade)",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "MEDIUM",
        "globs": ["*.ts", "*.js"],
        "pattern": r"server\.upgrade",
    },
]
