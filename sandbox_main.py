#!/usr/bin/env python3
"""
Sandbox entrypoint for stack-scanner.
Reads scan parameters from stdin JSON, scans the directory, outputs the JSON report to stdout.
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from stack_scanner.config import ScanConfig
from stack_scanner.engine import run_scan
from stack_scanner.errors import ScannerError
from stack_scanner.log import configure_logging
from stack_scanner.models import ScanRequest

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()

    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        sys.exit(2)

    try:
        request = ScanRequest.model_validate(input_data)
    except ValidationError as e:
        print(
            json.dumps(
                {
                    "error": f"Invalid scan request: {e.errors(include_url=False)}",
                    "example": {"path": ".", "profiles": ["nextjs", "docker"]},
                }
            )
        )
        sys.exit(2)

    try:
        config = ScanConfig.from_env(
            profiles=tuple(request.profiles) if request.profiles is not None else None,
            exclude=tuple(request.exclude),
            max_file_size=request.max_file_size,
            workers=request.workers,
        )
        report = run_scan(request.path, config)
    except ScannerError as e:
        logger.error(f"Scan failed: {e}")
        print(json.dumps({"error": str(e)}))
        sys.exit(e.exit_code)

    print(report.model_dump_json())
    sys.exit(report.exit_code)


if __name__ == "__main__":
    main()
