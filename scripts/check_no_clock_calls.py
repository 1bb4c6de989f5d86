#!/usr/bin/env python3
"""Pre-commit hook to prevent direct clock reads in production code.

Deadlines depend on "today". Every service obtains the current day and
instant from an injected TimeAuthorityProtocol, so tests can pin the
calendar and a deployment can pin the zone that defines the day.

This script scans src/ for datetime.now(), datetime.utcnow() and
date.today() and fails if any appear outside the system time authority
adapter.

Usage:
    python scripts/check_no_clock_calls.py [src_directory]

Exit codes:
    0: No violations found
    1: Violations found
"""

import re
import sys
from pathlib import Path

CLOCK_CALL_PATTERN = re.compile(
    r"\b(?:datetime\s*\.\s*(?:now|utcnow)|date\s*\.\s*today)\s*\("
)

# The system time authority is the only module that reads the clock
ALLOWED_FILES = {
    Path("infrastructure/adapters/time/system_time_authority.py"),
}


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Check a single file for direct clock reads.

    Args:
        file_path: Path to the Python file to check.

    Returns:
        List of (line_number, line_content) tuples for violations.
    """
    violations: list[tuple[int, str]] = []

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return violations

    for line_num, line in enumerate(content.splitlines(), start=1):
        if line.lstrip().startswith("#"):
            continue
        if CLOCK_CALL_PATTERN.search(line):
            violations.append((line_num, line.strip()))

    return violations


def find_violations(src_path: Path) -> dict[str, list[tuple[int, str]]]:
    """Scan ``src_path`` and map offending files to their violations."""
    found: dict[str, list[tuple[int, str]]] = {}
    for py_file in src_path.rglob("*.py"):
        if py_file.relative_to(src_path) in ALLOWED_FILES:
            continue
        violations = check_file(py_file)
        if violations:
            found[str(py_file)] = violations
    return found


def main() -> int:
    src_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("src")

    if not src_path.exists():
        print("Warning: src/ directory not found, skipping check")
        return 0

    all_violations = find_violations(src_path)
    if not all_violations:
        print("No direct clock reads found in src/")
        return 0

    print("Direct clock reads detected:")
    print()
    for file_path, violations in sorted(all_violations.items()):
        print(f"  {file_path}:")
        for line_num, line_content in violations:
            print(f"    Line {line_num}: {line_content}")
        print()

    print("How to fix:")
    print("  1. Inject TimeAuthorityProtocol in your service constructor")
    print("  2. Use self._time.today() / self._time.now() instead")
    return 1


if __name__ == "__main__":
    sys.exit(main())
