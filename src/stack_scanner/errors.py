"""Error taxonomy for the scanner.

Fatal errors (InputError, ConfigError) abort the invocation and map to exit
code 2. FileWarning and MatchError are recoverable: the engine records them as
ScanWarning entries and keeps scanning.
"""


class ScannerError(Exception):
    """Base class for all scanner errors."""

    exit_code = 2


class InputError(ScannerError):
    """Bad root path or unreadable rule catalog."""


class ConfigError(ScannerError):
    """Malformed rule definition, unknown profile or invalid settings."""


class FileWarning(ScannerError):
    """A file could not be scanned (unreadable, binary or oversized)."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class MatchError(ScannerError):
    """A rule matcher failed or ran past its time budget on one file."""

    def __init__(self, rule_id: str, message: str):
        super().__init__(f"{rule_id}: {message}")
        self.rule_id = rule_id
        self.message = message
