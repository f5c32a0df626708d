"""Next.js rules: client-exposed env vars, unauthenticated server code, config gaps."""

_CONFIG_GLOBS = ["next.config.js", "next.config.mjs", "next.config.ts"]
_AUTH_CALLS = r"getServerSession|auth\(|getSession|currentUser|getAuthUserId"

PROFILE = {
    "id": "nextjs",
    "title": "Next.js",
    "files": _CONFIG_GLOBS,
    "manifests": {"package.json": ['"next"']},
}

RULES = [
    {
        "id": "nextjs-public-secret",
        "title": "Suspicious NEXT_PUBLIC_ variable (secrets exposed to client)",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "ignore_case": True,
        "globs": [".env", ".env.*"],
        "pattern": r"NEXT_PUBLIC_\w*(?:SECRET|KEY|PASSWORD|TOKEN|PRIVATE)\w*\s*=\s*(?P<value>.*)",
        "capture": "value",
        "remediation": "Drop the NEXT_PUBLIC_ prefix and read the value only on the server.",
    },
    {
        "id": "nextjs-config-env",
        "title": "next.config env block (values are bundled to client)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "file",
        "globs": _CONFIG_GLOBS,
        "pattern": r"\benv\s*:",
        "escalate_if": r"SECRET|KEY|PASSWORD|TOKEN|PRIVATE",
        "escalate_to": "HIGH",
        "remediation": "Use server-only environment variables instead of next.config env.",
    },
    {
        "id": "nextjs-server-action-no-auth",
        "title": "Server Action file without auth checks",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "HIGH",
        "mode": "absent",
        "globs": ["*.ts", "*.tsx"],
        "requires": r"[\"']use server[\"']",
        "pattern": _AUTH_CALLS,
        "remediation": "Verify the session at the top of every Server Action.",
    },
    {
        "id": "nextjs-api-route-no-auth",
        "title": "API route without apparent auth",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "HIGH",
        "mode": "absent",
        "globs": [
            "app/api/route.[jt]s",
            "app/api/*/route.[jt]s",
            "*/app/api/route.[jt]s",
            "*/app/api/*/route.[jt]s",
        ],
        "pattern": r"getServerSession|auth\(|getSession|NextAuth",
        "remediation": "Check the session before handling the request.",
    },
    {
        "id": "nextjs-middleware-no-matcher",
        "title": "Middleware without matcher config (applies to all routes)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": ["middleware.ts", "middleware.js", "src/middleware.ts", "src/middleware.js"],
        "pattern": r"matcher",
    },
    {
        "id": "nextjs-middleware-api-gap",
        "title": "Middleware matcher may not cover /api routes",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": ["middleware.ts", "middleware.js", "src/middleware.ts", "src/middleware.js"],
        "requires": r"matcher",
        "pattern": r"/api",
    },
    {
        "id": "nextjs-dangerous-html",
        "title": "dangerouslySetInnerHTML usage (XSS risk if unsanitized)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "globs": ["*.tsx", "*.jsx"],
        "pattern": r"dangerouslySetInnerHTML",
        "remediation": "Sanitize the HTML (e.g. DOMPurify) or render it as text.",
    },
    {
        "id": "nextjs-no-security-headers",
        "title": "No security headers configured in next.config",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "LOW",
        "mode": "absent",
        "globs": _CONFIG_GLOBS,
        "pattern": r"headers",
        "remediation": "Add an async headers() block with CSP, X-Frame-Options and friends.",
    },
]
