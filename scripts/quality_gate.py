"""Run lint, format, type and test checks and report results as JSON.

Usage:
    python scripts/quality_gate.py              # run all, JSON output
    python scripts/quality_gate.py --skip-tests # skip pytest
    python scripts/quality_gate.py --fix        # apply ruff fixes first
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

MYPY_TARGETS = ["trello_cli/"]

_LINT_LOCATION_RE = re.compile(r"^\S+:\d+:\d+:")


def _run(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", *args],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
        timeout=300,
    )


def _timed(args: list[str]) -> tuple[subprocess.CompletedProcess, float]:
    t0 = time.monotonic()
    r = _run(args)
    return r, round(time.monotonic() - t0, 1)


def _status(r: subprocess.CompletedProcess) -> str:
    return "pass" if r.returncode == 0 else "fail"


def check_ruff_lint(fix: bool = False) -> dict:
    if fix:
        _run(["ruff", "check", "--fix", "."])
    r, duration = _timed(["ruff", "check", "."])
    errors = sum(1 for line in r.stdout.splitlines() if _LINT_LOCATION_RE.match(line))
    return {"status": _status(r), "errors": errors, "duration_s": duration, "output": r.stdout}


def check_ruff_format() -> dict:
    r, duration = _timed(["ruff", "format", "--check", "."])
    lines = (r.stdout + r.stderr).splitlines()
    pending = sum(1 for line in lines if line.startswith("Would reformat"))
    return {
        "status": _status(r),
        "files_to_reformat": pending,
        "duration_s": duration,
        "output": r.stderr,
    }


def check_mypy() -> dict:
    r, duration = _timed(["mypy", *MYPY_TARGETS])
    errors = sum(1 for line in r.stdout.splitlines() if ": error:" in line)
    return {"status": _status(r), "errors": errors, "duration_s": duration, "output": r.stdout}


def check_pytest() -> dict:
    r, duration = _timed(["pytest", "tests/", "-q", "--no-header", "--tb=short"])
    counts = {"passed": 0, "failed": 0}
    # Summary line looks like "3 failed, 120 passed in 1.2s"
    for line in reversed(r.stdout.strip().splitlines()):
        found = {k: re.search(rf"(\d+)\s+{k}", line) for k in counts}
        if any(found.values()):
            counts.update({k: int(m.group(1)) for k, m in found.items() if m})
            break
    return {"status": _status(r), **counts, "duration_s": duration, "output": r.stdout[-2000:]}


def main() -> None:
    parser = argparse.ArgumentParser(description="Run all quality checks")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Auto-fix ruff issues first")
    args = parser.parse_args()

    t0 = time.monotonic()
    checks: dict[str, dict] = {}

    print("Running ruff lint...", file=sys.stderr)
    checks["ruff_lint"] = check_ruff_lint(fix=args.fix)
    print("Running ruff format...", file=sys.stderr)
    checks["ruff_format"] = check_ruff_format()
    print("Running mypy...", file=sys.stderr)
    checks["mypy"] = check_mypy()
    if args.skip_tests:
        checks["pytest"] = {"status": "skip", "reason": "--skip-tests"}
    else:
        print("Running pytest...", file=sys.stderr)
        checks["pytest"] = check_pytest()

    for check in checks.values():
        if check["status"] != "fail":
            check.pop("output", None)

    overall = "fail" if any(c["status"] == "fail" for c in checks.values()) else "pass"
    result = {
        "overall": overall,
        "checks": checks,
        "total_duration_s": round(time.monotonic() - t0, 1),
    }
    print(json.dumps(result, indent=2))
    sys.exit(0 if overall == "pass" else 1)


if __name__ == "__main__":
    main()
