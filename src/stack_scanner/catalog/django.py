"""Django rules: settings hardening, CSRF, raw SQL, shell commands."""

_SETTINGS_GLOBS = ["settings*.py", "*/settings/*.py"]

PROFILE = {
    "id": "django",
    "title": "Django",
    "files": ["manage.py"],
    "anywhere": ["settings.py"],
}

RULES = [
    {
        "id": "django-secret-key",
        "title": "SECRET_KEY appears hardcoded",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"^\s*SECRET_KEY\s*=\s*['\"](?P<value>[^'\"]+)['\"]",
        "capture": "value",
        "remediation": "SECRET_KEY = os.environ['DJANGO_SECRET_KEY']",
    },
    {
        "id": "django-debug",
        "title": "DEBUG = True (should be False in production)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "CRITICAL",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"^DEBUG\s*=\s*True",
    },
    {
        "id": "django-allowed-hosts-wildcard",
        "title": "ALLOWED_HOSTS contains wildcard",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "CRITICAL",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"ALLOWED_HOSTS.*['\"]\*['\"]",
    },
    {
        "id": "django-allowed-hosts-empty",
        "title": "ALLOWED_HOSTS is empty",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "HIGH",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"ALLOWED_HOSTS\s*=\s*\[\s*\]",
    },
    {
        "id": "django-security-middleware",
        "title": "SecurityMiddleware not found in MIDDLEWARE",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "mode": "absent",
        "globs": _SETTINGS_GLOBS,
        "requires": r"^MIDDLEWARE\s*=",
        "pattern": r"SecurityMiddleware",
    },
    {
        "id": "django-csrf-middleware",
        "title": "CsrfViewMiddleware not found (CSRF disabled?)",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "CRITICAL",
        "mode": "absent",
        "globs": _SETTINGS_GLOBS,
        "requires": r"^MIDDLEWARE\s*=",
        "pattern": r"CsrfViewMiddleware",
    },
    {
        "id": "django-session-cookie-secure",
        "title": "SESSION_COOKIE_SECURE not set to True",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"SESSION_COOKIE_SECURE\s*=\s*True",
    },
    {
        "id": "django-csrf-cookie-secure",
        "title": "CSRF_COOKIE_SECURE not set to True",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"CSRF_COOKIE_SECURE\s*=\s*True",
    },
    {
        "id": "django-ssl-redirect",
        "title": "SECURE_SSL_REDIRECT not set to True",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "MEDIUM",
        "mode": "absent",
        "globs": _SETTINGS_GLOBS,
        "pattern": r"SECURE_SSL_REDIRECT\s*=\s*True",
    },
    {
        "id": "django-csrf-exempt",
        "title": "@csrf_exempt decorator (needs justification)",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "HIGH",
        "globs": ["*.py"],
        "pattern": r"@csrf_exempt",
    },
    {
        "id": "django-raw-sql",
        "title": "Raw SQL query (check for string interpolation)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": ["*.py"],
        "pattern": r"\.raw\(|cursor\.execute\(",
    },
    {
        "id": "django-shell-true",
        "title": "subprocess with shell=True (command injection risk)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": ["*.py"],
        "pattern": r"subprocess\.\w+\(.*shell\s*=\s*True",
    },
    {
        "id": "django-os-system",
        "title": "os.system usage (command injection risk)",
        "category": "misconfiguration",
        "tag": "config",
        "severity": "HIGH",
        "globs": ["*.py"],
        "pattern": r"os\.system\(",
    },
    {
        "id": "django-view-no-auth",
        "title": "View function may lack an auth decorator",
        "category": "misconfiguration",
        "tag": "auth",
        "severity": "MEDIUM",
        "mode": "file",
        "globs": ["views.py"],
        "pattern": (
            r"^(?!\s*@(?:login_required|permission_required|user_passes_test))[^\n]*\n"
            r"def (?P<name>[a-z_]+)\(request"
        ),
        "capture": "name",
        "remediation": "Decorate the view with @login_required or @permission_required.",
    },
]
