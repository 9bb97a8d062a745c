from __future__ import annotations

import argparse
import secrets
import string
import sys
import time
from pathlib import Path

# Allow running as `python tools/bench.py` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pwscore.core.matching import default_omnimatcher
from pwscore.core.strength_service import password_strength

_SAMPLES = (
    "password",
    "P455w0RD",
    "qwertyuiop",
    "correcthorsebatterystaple",
    "Tr0ub4dour&3",
    "dkgit dldig394595 &&(3",
    "mary25-05-1984",
)


def _random_passwords(count: int, length: int) -> list[str]:
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*()-_=+"
    return ["".join(secrets.choice(alphabet) for _ in range(length)) for _ in range(count)]


def _bench(passwords: list[str], label: str) -> None:
    matcher = default_omnimatcher()
    t0 = time.perf_counter()
    for password in passwords:
        password_strength(password, matcher=matcher)
    dt = time.perf_counter() - t0
    rate = (len(passwords) / dt) if dt > 0 else 0.0
    print(f"[{label}] count={len(passwords)} seconds={dt:.4f} rate={rate:.1f}/s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="pwscore scoring throughput benchmark.")
    parser.add_argument("--random", type=int, default=0, help="Number of random passwords to score.")
    parser.add_argument("--length", type=int, default=16, help="Length of the random passwords.")
    parser.add_argument("--rounds", type=int, default=0, help="Rounds over the built-in sample passwords.")
    args = parser.parse_args(argv)

    if args.random <= 0 and args.rounds <= 0:
        parser.error("Set --random and/or --rounds to a value > 0")

    # build the shared resources outside the timed loop
    default_omnimatcher()
    if args.rounds > 0:
        _bench(list(_SAMPLES) * args.rounds, "samples")
    if args.random > 0:
        _bench(_random_passwords(args.random, args.length), f"random length={args.length}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
