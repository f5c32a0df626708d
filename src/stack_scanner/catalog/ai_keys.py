"""Always-on AI API key leakage rules."""

PROFILE = None

_ENV_GLOBS = [".env", ".env.*"]
_CLIENT_GLOBS = ["*.js", "*.ts", "*.jsx", "*.tsx", "*.vue"]

_AI_VENDORS = (
    "OPENAI|OPENROUTER|ANTHROPIC|GEMINI|GOOGLE|VERTEX|BEDROCK|AWS|AZURE|MISTRAL|"
    "COHERE|GROQ|PERPLEXITY|TOGETHER|REPLICATE|FIREWORKS|HUGGINGFACE|HF_"
)

_AI_ENDPOINTS = (
    r"api\.openai\.com|openrouter\.ai|api\.anthropic\.com|generativelanguage\.googleapis\.com|"
    r"aiplatform\.googleapis\.com|bedrock[\w.\-]*\.amazonaws\.com|api\.mistral\.ai|api\.cohere\.ai|"
    r"api\.groq\.com|api\.together\.xyz|api\.perplexity\.ai|api\.replicate\.com|"
    r"api\.fireworks\.ai|openai\.azure\.com"
)

RULES = [
    {
        "id": "ai-key-client-env",
        "title": "AI key in client-exposed env var",
        "category": "secret",
        "tag": "secret",
        "severity": "CRITICAL",
        "globs": _ENV_GLOBS,
        "pattern": rf"(?:NEXT_PUBLIC_|VITE_)\w*(?:{_AI_VENDORS})\w*\s*=\s*(?P<value>.*)",
        "capture": "value",
        "remediation": "Remove the NEXT_PUBLIC_/VITE_ prefix and call the AI API from the server.",
    },
    {
        "id": "ai-endpoint-client",
        "title": "AI API endpoint used in client code",
        "category": "misconfiguration",
        "tag": "network",
        "severity": "HIGH",
        "globs": _CLIENT_GLOBS,
        "pattern": _AI_ENDPOINTS,
        "remediation": "Verify calls are server-side and keys are not shipped to the browser.",
    },
    {
        "id": "cloud-ai-credentials",
        "title": "Cloud AI credentials in repository",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "globs": _ENV_GLOBS + ["*.json"],
        "skip_globs": ["package.json", "package-lock.json", "tsconfig*.json"],
        "pattern": (
            r"\"type\"\s*:\s*\"service_account\"|GOOGLE_APPLICATION_CREDENTIALS|AWS_ACCESS_KEY_ID|"
            r"AWS_SECRET_ACCESS_KEY|AWS_SESSION_TOKEN|AZURE_OPENAI_API_KEY|AZURE_OPENAI_ENDPOINT"
        ),
        "remediation": "Verify the file is not committed and rotate credentials if exposed.",
    },
    {
        "id": "ai-key-heuristic",
        "title": "Possible AI API key (heuristic)",
        "category": "secret",
        "tag": "secret",
        "severity": "HIGH",
        "pattern": (
            r"(?P<value>sk-or-[A-Za-z0-9\-]{20,}|sk-ant-[A-Za-z0-9\-]{20,}|sk-[A-Za-z0-9]{20,}|"
            r"hf_[A-Za-z0-9]{20,})"
        ),
        "capture": "value",
        "remediation": "Rotate the key immediately if it is real.",
    },
]
