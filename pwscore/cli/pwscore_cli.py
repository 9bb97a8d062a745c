#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Iterable, List

from pwscore.core.error_dialect import format_error_text
from pwscore.core.matching import Omnimatcher
from pwscore.core.resources import ENV_FREQUENCY_LISTS, ResourceConfig, load_resources
from pwscore.core.strength_service import StrengthRequest, score_request


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate password strength from the cheapest mix of guessable patterns",
    )
    parser.add_argument(
        "passwords",
        nargs="*",
        help="passwords to score (one per line from stdin when omitted)",
    )
    parser.add_argument(
        "-u",
        "--user-input",
        action="append",
        default=[],
        help="context word such as a username or email; repeat for several, earlier ranks as more guessable",
    )
    parser.add_argument(
        "--frequency-lists",
        default=os.environ.get(ENV_FREQUENCY_LISTS, ""),
        help=f"JSON file of named ranked word lists replacing the bundled ones (env: {ENV_FREQUENCY_LISTS})",
    )
    parser.add_argument(
        "--show-matches",
        "--meta",
        action="store_true",
        help="print the chosen match sequence under each score",
    )
    parser.add_argument("--json", action="store_true", help="print one JSON object per password")
    return parser.parse_args(argv)


def _read_passwords(lines: Iterable[str]) -> List[str]:
    return [line.rstrip("\r\n") for line in lines]


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = ResourceConfig.from_env()
        matcher = Omnimatcher(load_resources(args.frequency_lists.strip()))
        passwords = args.passwords if args.passwords else _read_passwords(sys.stdin)
        user_inputs = tuple(args.user_input)
        for password in passwords:
            result = score_request(
                StrengthRequest(password=password, user_inputs=user_inputs),
                matcher=matcher,
                config=config,
            )
            if args.json:
                print(json.dumps(result.as_dict(show_matches=args.show_matches), ensure_ascii=False))
            else:
                for line in result.as_lines(show_matches=args.show_matches):
                    print(line)
    except ValueError as exc:
        print(format_error_text(exc), file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
