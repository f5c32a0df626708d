"""Express rules: hardening middleware, CORS, SQL injection, sessions."""

_SOURCE_GLOBS = ["*.js", "*.ts"]

PROFILE = {
    "id": "express",
    "title": "Express",
    "manifests": {"package.json": ['"express"']},
}

RULES = [
    {
        "id": "express-helmet-missing",
        "title": "Helmet.js not in dependencies",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": ["package.json"],
        "requires": r"\"express\"",
        "pattern": r"\"helmet\"",
        "remediation": "npm install helmet",
    },
    {
        "id": "express-helmet-unused",
        "title": "Express app without helmet()",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": _SOURCE_GLOBS,
        "requires": r"\bexpress\(\)",
        "pattern": r"helmet\(",
        "remediation": "app.use(helmet())",
    },
    {
        "id": "express-x-powered-by",
        "title": "x-powered-by not explicitly disabled (framework fingerprinting)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "LOW",
        "mode": "absent",
        "globs": _SOURCE_GLOBS,
        "requires": r"\bexpress\(\)",
        "pattern": r"x-powered-by|helmet\(",
        "remediation": "app.disable('x-powered-by')",
    },
    {
        "id": "express-permissive-cors",
        "title": "Permissive CORS configuration",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "HIGH",
        "mode": "file",
        "globs": _SOURCE_GLOBS,
        "pattern": r"cors\(\s*(?:\)|\{[^}]*?origin\s*:\s*(?:['\"]\*['\"]|true))",
        "remediation": "Pass an explicit origin allowlist to cors().",
    },
    {
        "id": "express-sql-template",
        "title": "Potential SQL injection (string interpolation in query)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _SOURCE_GLOBS,
        "pattern": r"(?:query|execute)\s*\(\s*`",
        "remediation": "Use parameterized queries.",
    },
    {
        "id": "express-sql-concat",
        "title": "Potential SQL injection (string concatenation)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _SOURCE_GLOBS,
        "pattern": r"SELECT.*\+.*req\.",
        "remediation": "Use parameterized queries.",
    },
    {
        "id": "express-session-secret",
        "title": "Potential hardcoded session secret",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "mode": "file",
        "globs": _SOURCE_GLOBS,
        "pattern": r"session\(\s*\{[^}]*?secret\s*:\s*['\"](?P<value>[^'\"]{5,})['\"]",
        "capture": "value",
        "remediation": "Read the session secret from process.env.",
    },
    {
        "id": "express-insecure-cookie",
        "title": "Session cookie secure:false (not HTTPS-only)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "file",
        "globs": _SOURCE_GLOBS,
        "pattern": r"cookie\s*:\s*\{[^}]*?secure\s*:\s*false",
    },
    {
        "id": "express-no-rate-limit",
        "title": "No rate limiting package found",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": ["package.json"],
        "requires": r"\"express\"",
        "pattern": r"\"express-rate-limit\"|\"rate-limiter-flexible\"",
        "remediation": "npm install express-rate-limit",
    },
    {
        "id": "express-body-limit",
        "title": "Body parser without size limit (DoS risk)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "LOW",
        "globs": _SOURCE_GLOBS,
        "pattern": r"express\.(?:json|urlencoded)\(",
        "line_unless": r"limit",
    },
]
