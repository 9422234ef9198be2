#!/usr/bin/env python3
"""Validate niche lists against operator data.

Reports every niche list entry (and trash list entry) whose operator id is
missing from the operators-{n}star.json files.

Usage:
    python backend/scripts/validate_niche_lists.py [--data-dir data]

Exits with status 1 when any list references an unknown operator.
"""
import argparse
import sys
from pathlib import Path

from ark_roster.repositories.static_data_repository import StaticDataRepository
from ark_roster.services.niche_resolver import NicheResolver


def validate(data_dir: Path) -> int:
    """Print a report for every niche list and return the number of errors."""
    snapshot = StaticDataRepository(data_dir).snapshot
    print(f"Loaded {len(snapshot.operators)} operators")
    print(f"Found {len(snapshot.niche_lists)} niche lists\n")

    errors = NicheResolver(snapshot).validate_niche_lists()
    for code in snapshot.niche_codes():
        niche_list = snapshot.niche_lists[code]
        unknown = errors.get(code, [])
        print(f"{code}:")
        print(f"   Operators: {len(niche_list.operator_ids())}")
        print(f"   Status: {'Invalid' if unknown else 'Valid'}")
        for op_id in unknown:
            print(f"     - Unknown operator id: {op_id}")

    total = sum(len(ids) for ids in errors.values())
    print(f"\nTotal errors: {total}")
    return total


def main():
    parser = argparse.ArgumentParser(description="Validate niche lists against operator data")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="Static data directory")
    args = parser.parse_args()

    if not args.data_dir.is_dir():
        print(f"Error: Data directory not found: {args.data_dir}")
        sys.exit(1)

    if validate(args.data_dir):
        sys.exit(1)


if __name__ == "__main__":
    main()
