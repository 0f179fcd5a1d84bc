"""
festival-contract — run the API contract checks against a live endpoint.

Usage:
    festival-contract api
    festival-contract api --url http://localhost:8080/api/v1/festivals --threshold-ms 500

Prints the JSON report to stdout and a one-line summary to stderr.
Exit code is 0 when every check passed, 1 otherwise.
"""

import argparse
import json
import sys
from typing import List, Optional

from festival_contract.core.config import get_settings
from festival_contract.core.logging import configure_logging
from festival_contract.services.api_checks import run_api_checks
from festival_contract.services.client import FestivalsClient


def cmd_api(url: Optional[str], threshold_ms: Optional[float], allow_empty: bool) -> int:
    settings = get_settings()
    if url:
        settings = settings.model_copy(update={"festivals_api_url": url})

    with FestivalsClient(settings=settings) as client:
        report = run_api_checks(
            client,
            threshold_ms=threshold_ms,
            require_non_empty=False if allow_empty else None,
        )

    print(json.dumps(report.model_dump(mode="json"), indent=2))

    passed = sum(1 for result in report.checks.values() if result.valid)
    print(f"\n# Summary: {passed}/{len(report.checks)} checks passed for {report.url}", file=sys.stderr)
    for name, result in report.checks.items():
        for error in result.errors:
            print(f"  - {name}: {error.message}", file=sys.stderr)

    return 0 if report.valid else 1


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="festival-contract — festival listing contract checks")
    sub = parser.add_subparsers(dest="command", required=True)
    api_parser = sub.add_parser("api", help="Check the festivals API against its contract")
    api_parser.add_argument("--url", default=None, help="Festivals endpoint (default: from settings)")
    api_parser.add_argument(
        "--threshold-ms", type=float, default=None,
        help="Latency budget in milliseconds (default: 800)",
    )
    api_parser.add_argument(
        "--allow-empty", action="store_true",
        help="Accept an empty festivals array as schema-valid",
    )
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)
    if args.command == "api":
        sys.exit(cmd_api(url=args.url, threshold_ms=args.threshold_ms, allow_empty=args.allow_empty))


if __name__ == "__main__":
    main()
