"""Convex rules: unauthenticated public functions, IDOR, missing validators."""

_CONVEX_GLOBS = ["convex/*.ts"]
_GENERATED = ["convex/_generated/*"]

PROFILE = {
    "id": "convex",
    "title": "Convex",
    "dirs": ["convex"],
}

RULES = [
    {
        "id": "convex-public-no-auth",
        "title": "Public query/mutation without auth checks",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "CRITICAL",
        "mode": "absent",
        "globs": _CONVEX_GLOBS,
        "skip_globs": _GENERATED,
        "requires": r"export const \w+ = (?:query|mutation)\(",
        "pattern": r"getAuthUserId|getUserIdentity|ctx\.auth",
        "remediation": "Resolve the caller with ctx.auth.getUserIdentity() in every handler.",
    },
    {
        "id": "convex-client-user-id",
        "title": "userId in function args (should come from auth context)",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "HIGH",
        "globs": _CONVEX_GLOBS,
        "skip_globs": _GENERATED,
        "pattern": r"userId\s*:\s*v\.id\(\s*[\"']users[\"']\s*\)",
    },
    {
        "id": "convex-missing-validator",
        "title": "Function handler without args validation",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": _CONVEX_GLOBS,
        "skip_globs": _GENERATED,
        "pattern": r"handler\s*:\s*async\s*\(\s*ctx\s*\)\s*=>",
    },
    {
        "id": "convex-http-action",
        "title": "HTTP action found (verify authentication)",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "MEDIUM",
        "globs": _CONVEX_GLOBS,
        "skip_globs": _GENERATED,
        "pattern": r"httpAction",
    },
    {
        "id": "convex-no-internal-functions",
        "title": "Module exposes only public functions",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "INFO",
        "mode": "absent",
        "globs": _CONVEX_GLOBS,
        "skip_globs": _GENERATED,
        "requires": r"export const \w+ = (?:query|mutation|action)\(",
        "pattern": r"internal(?:Query|Mutation|Action)\(",
        "remediation": "Use internalMutation/internalAction for sensitive operations.",
    },
]
