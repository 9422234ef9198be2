#!/usr/bin/env python3
"""Import user rosters from a JSON account export into the DuckDB roster store.

The export maps account keys to their operators:

    {"accounts": {"user@example.com": {"ownedOperators": [...], "wantToUse": [...]}}}

Want-to-use operators that are not owned are added as owned and raised.

Usage:
    python backend/scripts/import_rosters.py accounts.json [--database data/rosters.duckdb]
"""
import argparse
import json
import sys
from pathlib import Path

from ark_roster.models.team import TeamPreferences
from ark_roster.repositories.roster_repository import RosterRepository


def import_rosters(export_path: Path, database_path: Path) -> int:
    """Load every account of the export. Returns the number of imported users."""
    with open(export_path, encoding="utf-8") as f:
        data = json.load(f)

    accounts = data.get("accounts", data) if isinstance(data, dict) else {}
    repo = RosterRepository(database_path)
    imported = 0
    for user_id, account in accounts.items():
        if not isinstance(account, dict):
            print(f"  ✗ {user_id}: not an account object")
            continue
        owned = account.get("ownedOperators") or []
        want_to_use = account.get("wantToUse") or []
        raised = set(want_to_use)
        for operator_id in owned:
            repo.add_operator(user_id, operator_id, raised=operator_id in raised)
        for operator_id in [op for op in want_to_use if op not in owned]:
            repo.add_operator(user_id, operator_id, raised=True)
        if isinstance(account.get("teamPreferences"), dict):
            try:
                repo.save_preferences(user_id, TeamPreferences.from_dict(account["teamPreferences"]))
            except ValueError as e:
                print(f"  ! {user_id}: skipped invalid preferences ({e})")
        print(f"  ✓ {user_id}: {len(repo.get_owned(user_id))} owned, {len(repo.get_raised(user_id))} raised")
        imported += 1
    return imported


def main():
    parser = argparse.ArgumentParser(description="Import user rosters into DuckDB")
    parser.add_argument("export", type=Path, help="JSON account export")
    parser.add_argument("--database", type=Path, default=Path("data/rosters.duckdb"), help="DuckDB file")
    args = parser.parse_args()

    if not args.export.exists():
        print(f"Error: Export not found: {args.export}")
        sys.exit(1)

    count = import_rosters(args.export, args.database)
    print(f"\nDone! Imported {count} users into {args.database}")


if __name__ == "__main__":
    main()
