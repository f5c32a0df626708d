"""FastAPI rules: route auth dependencies, CORS, host and HTTPS middleware."""

PROFILE = {
    "id": "fastapi",
    "title": "FastAPI",
    "manifests": {
        "pyproject.toml": ["fastapi"],
        "requirements*.txt": ["fastapi"],
    },
    "ignore_case": True,
}

RULES = [
    {
        "id": "fastapi-routes-no-depends",
        "title": "Routes without Depends()/Security() auth dependencies",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "HIGH",
        "mode": "absent",
        "globs": ["*.py"],
        "requires": r"@(?:app|router)\.(?:get|post|put|patch|delete)\(",
        "pattern": r"Depends\(|Security\(",
        "remediation": "Add an auth dependency to the routes or the router.",
    },
    {
        # Wildcard origins alone are MEDIUM; with credentials in the same
        # file browsers will send cookies cross-origin.
        "id": "fastapi-cors-wildcard",
        "title": "CORS wildcard origin",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "globs": ["*.py"],
        "pattern": r"allow_origins\s*=\s*\[\s*['\"]\*['\"]\s*\]",
        "escalate_if": r"allow_credentials\s*=\s*True",
        "escalate_to": "HIGH",
        "remediation": "Set explicit allow_origins when allow_credentials=True.",
    },
    {
        "id": "fastapi-trusted-host",
        "title": "TrustedHostMiddleware not found",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": ["*.py"],
        "requires": r"\bFastAPI\(",
        "pattern": r"TrustedHostMiddleware",
        "remediation": "Restrict allowed hosts in production.",
    },
    {
        "id": "fastapi-https-redirect",
        "title": "HTTPSRedirectMiddleware not found",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "LOW",
        "mode": "absent",
        "globs": ["*.py"],
        "requires": r"\bFastAPI\(",
        "pattern": r"HTTPSRedirectMiddleware",
        "remediation": "Ensure HTTPS is enforced by a proxy or middleware.",
    },
]
