"""Always-on secret rules.

High-confidence token formats (cloud, VCS, payment, chat, LLM vendors),
private key blocks, credentials in URLs, and medium-confidence assignments
of api keys, JWT secrets and passwords.
"""

PROFILE = None

_ROTATE = "Rotate this credential immediately and remove it from the codebase."
_ENV = "Load the value from an environment variable or a secrets manager."

RULES = [
    # --- Cloud ---
    {
        "id": "aws-access-key",
        "title": "AWS Access Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"(?<![0-9A-Z])(?P<value>AKIA[0-9A-Z]{16})(?![0-9A-Z])",
        "capture": "value",
        "remediation": _ROTATE,
    },
    {
        "id": "aws-secret-key",
        "title": "AWS Secret Access Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "ignore_case": True,
        "pattern": r"aws.{0,20}['\"](?P<value>[0-9a-zA-Z/+]{40})['\"]",
        "capture": "value",
        "remediation": _ROTATE,
    },
    {
        "id": "google-api-key",
        "title": "Google API Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"AIza[0-9A-Za-z_\-]{35}",
        "remediation": _ROTATE,
    },
    # --- Source control ---
    {
        "id": "github-token",
        "title": "GitHub Token",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"gh[pousr]_[A-Za-z0-9_]{36,}",
        "remediation": _ROTATE,
    },
    {
        "id": "github-pat",
        "title": "GitHub Fine-Grained PAT",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"github_pat_[A-Za-z0-9_]{22,}",
        "remediation": _ROTATE,
    },
    # --- Payments ---
    {
        "id": "stripe-secret-key",
        "title": "Stripe Secret Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"sk_(?:live|test)_[0-9a-zA-Z]{24,}",
        "remediation": _ROTATE,
    },
    {
        "id": "stripe-restricted-key",
        "title": "Stripe Restricted Key",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "pattern": r"rk_(?:live|test)_[0-9a-zA-Z]{24,}",
        "remediation": _ROTATE,
    },
    {
        "id": "stripe-publishable-key",
        "title": "Stripe Publishable Key",
        "category": "secret",
        "tag": "secret",
        "severity": "MEDIUM",
        "pattern": r"pk_(?:live|test)_[0-9a-zA-Z]{24,}",
        "remediation": "Publishable keys are public by design; confirm it is not a secret key.",
    },
    # --- Chat ---
    {
        "id": "slack-token",
        "title": "Slack Bot/User Token",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"xox[baprs]-[A-Za-z0-9\-]{10,}",
        "remediation": _ROTATE,
    },
    {
        "id": "slack-app-token",
        "title": "Slack App Token",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"xapp-[A-Za-z0-9\-]{10,}",
        "remediation": _ROTATE,
    },
    {
        "id": "slack-workflow-token",
        "title": "Slack Workflow Token",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"xwfp-[A-Za-z0-9\-]{10,}",
        "remediation": _ROTATE,
    },
    # --- Keys ---
    {
        "id": "private-key",
        "title": "Private Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "mode": "file",
        "pattern": (
            r"-----BEGIN (?:RSA |EC |DSA |OPENSSH |PGP |ENCRYPTED )?PRIVATE KEY(?: BLOCK)?-----"
            r"(?P<value>[\s\S]*?)(?:-----END[^\n]*|\Z)"
        ),
        "capture": "value",
        "remediation": "Remove the key from the repository and issue a new key pair.",
    },
    # --- LLM vendors ---
    {
        "id": "openai-key",
        "title": "OpenAI Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"sk-(?:proj-[A-Za-z0-9_\-]{40,}|[A-Za-z0-9]{48})",
        "remediation": _ROTATE,
    },
    {
        "id": "anthropic-key",
        "title": "Anthropic Key",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"sk-ant-[A-Za-z0-9\-]{32,}",
        "remediation": _ROTATE,
    },
    # --- Connection strings ---
    {
        "id": "database-url-password",
        "title": "Database URL with Password",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "pattern": r"(?:postgres(?:ql)?|mysql|mongodb(?:\+srv)?|redis)://[^:\s/]+:(?P<value>[^@\s]+)@",
        "capture": "value",
        "remediation": _ENV,
    },
    {
        "id": "password-in-url",
        "title": "Password in URL",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "pattern": r"[a-zA-Z]{3,10}://[^/\s:@]+:(?P<value>[^/\s:@]+)@",
        "capture": "value",
        "remediation": _ENV,
    },
    # --- Medium confidence ---
    {
        "id": "generic-api-key",
        "title": "Generic API Key Assignment",
        "category": "secret",
        "tag": "secret",
        "severity": "MEDIUM",
        "ignore_case": True,
        "pattern": (
            r"(?:api[_-]?key|apikey|secret[_-]?key)['\"]?\s*[:=]\s*"
            r"['\"](?P<value>[A-Za-z0-9]{16,})['\"]"
        ),
        "capture": "value",
        "remediation": _ENV,
    },
    {
        "id": "jwt-secret",
        "title": "JWT Secret",
        "category": "secret",
        "tag": "secret",
        "severity": "MEDIUM",
        "ignore_case": True,
        "pattern": r"(?:jwt[_-]?secret|token[_-]?secret)['\"]?\s*[:=]\s*['\"](?P<value>[^'\"]+)['\"]",
        "capture": "value",
        "remediation": _ENV,
    },
    {
        "id": "password-assignment",
        "title": "Password Assignment",
        "category": "secret",
        "tag": "secret",
        "severity": "MEDIUM",
        "ignore_case": True,
        "pattern": r"password['\"]?\s*[:=]\s*['\"](?P<value>[^'\"]{8,})['\"]",
        "capture": "value",
        "remediation": _ENV,
    },
    # --- Files to check manually ---
    {
        "id": "env-file",
        "title": "Environment file present (check it is not committed)",
        "category": "secret",
        "tag": "secret",
        "severity": "LOW",
        "mode": "filename",
        "globs": [".env", ".env.*"],
        "skip_globs": [".env.example", ".env.sample", ".env.template"],
        "remediation": "Add .env files to .gitignore and commit a .env.example instead.",
    },
    {
        "id": "key-file",
        "title": "Potential key file",
        "category": "secret",
        "tag": "secret",
        "severity": "MEDIUM",
        "mode": "filename",
        "globs": ["*.pem", "*.key", "*.p12"],
        "remediation": "Keep key material out of the repository.",
    },
]
