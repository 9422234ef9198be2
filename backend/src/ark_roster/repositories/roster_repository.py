"""DuckDB-based storage of per-user operator ownership."""
import json
import logging
from pathlib import Path

import duckdb
import pandas as pd

from ark_roster.models.team import TeamPreferences

logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS user_operators (
        user_id VARCHAR NOT NULL,
        operator_id VARCHAR NOT NULL,
        raised BOOLEAN NOT NULL DEFAULT FALSE,
        position INTEGER NOT NULL,
        PRIMARY KEY (user_id, operator_id)
    );
    CREATE TABLE IF NOT EXISTS user_settings (
        user_id VARCHAR PRIMARY KEY,
        preferences VARCHAR,
        hope_cost_edits VARCHAR
    );
"""


class RosterRepository:
    """Owned / raised operators and saved settings per user.

    Owned operators keep the order they were added in; raised operators
    (the "want to use" list) are always a subset of owned ones.
    """

    def __init__(self, database_path: str | Path):
        self._db_path = Path(database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with duckdb.connect(str(self._db_path)) as conn:
            conn.execute(SCHEMA)
        logger.info(f"RosterRepository: Using {self._db_path}")

    def _query(self, sql: str, params: list | None = None) -> list[dict]:
        """Execute a read query and return list of dicts."""
        with duckdb.connect(str(self._db_path), read_only=True) as conn:
            df: pd.DataFrame = conn.execute(sql, params or []).df()
        return df.to_dict(orient="records")

    def _execute(self, sql: str, params: list | None = None) -> None:
        with duckdb.connect(str(self._db_path)) as conn:
            conn.execute(sql, params or [])

    def get_owned(self, user_id: str) -> list[str]:
        rows = self._query(
            "SELECT operator_id FROM user_operators WHERE user_id = ? ORDER BY position",
            [user_id],
        )
        return [row["operator_id"] for row in rows]

    def get_raised(self, user_id: str) -> list[str]:
        rows = self._query(
            "SELECT operator_id FROM user_operators WHERE user_id = ? AND raised ORDER BY position",
            [user_id],
        )
        return [row["operator_id"] for row in rows]

    def add_operator(self, user_id: str, operator_id: str, raised: bool = False) -> None:
        """Mark an operator as owned (optionally raised). Re-adding keeps its position."""
        existing = self._query(
            "SELECT position FROM user_operators WHERE user_id = ? AND operator_id = ?",
            [user_id, operator_id],
        )
        if existing:
            self.set_raised(user_id, operator_id, raised)
            return
        self._execute(
            """
            INSERT INTO user_operators (user_id, operator_id, raised, position)
            SELECT ?, ?, ?, COALESCE(MAX(position), -1) + 1
            FROM user_operators WHERE user_id = ?
            """,
            [user_id, operator_id, raised, user_id],
        )

    def remove_operator(self, user_id: str, operator_id: str) -> bool:
        """Remove ownership. Returns False if the operator was not owned."""
        existing = self._query(
            "SELECT operator_id FROM user_operators WHERE user_id = ? AND operator_id = ?",
            [user_id, operator_id],
        )
        if not existing:
            return False
        self._execute(
            "DELETE FROM user_operators WHERE user_id = ? AND operator_id = ?",
            [user_id, operator_id],
        )
        return True

    def set_raised(self, user_id: str, operator_id: str, raised: bool) -> None:
        self._execute(
            "UPDATE user_operators SET raised = ? WHERE user_id = ? AND operator_id = ?",
            [raised, user_id, operator_id],
        )

    def _get_setting(self, user_id: str, column: str):
        with duckdb.connect(str(self._db_path), read_only=True) as conn:
            row = conn.execute(
                f"SELECT {column} FROM user_settings WHERE user_id = ?", [user_id]
            ).fetchone()
        if row is None or row[0] is None:
            return None
        return json.loads(row[0])

    def _save_setting(self, user_id: str, column: str, value) -> None:
        payload = json.dumps(value)
        with duckdb.connect(str(self._db_path)) as conn:
            exists = conn.execute(
                "SELECT COUNT(*) FROM user_settings WHERE user_id = ?", [user_id]
            ).fetchone()[0]
            if exists:
                conn.execute(f"UPDATE user_settings SET {column} = ? WHERE user_id = ?", [payload, user_id])
            else:
                conn.execute(
                    f"INSERT INTO user_settings (user_id, {column}) VALUES (?, ?)", [user_id, payload]
                )

    def get_preferences(self, user_id: str) -> TeamPreferences | None:
        data = self._get_setting(user_id, "preferences")
        if data is None:
            return None
        try:
            return TeamPreferences.from_dict(data)
        except ValueError as e:
            logger.warning(f"Stored preferences for {user_id} are invalid: {e}")
            return None

    def save_preferences(self, user_id: str, preferences: TeamPreferences) -> None:
        self._save_setting(user_id, "preferences", preferences.to_dict())

    def get_hope_cost_edits(self, user_id: str) -> list[dict]:
        data = self._get_setting(user_id, "hope_cost_edits")
        if isinstance(data, dict):
            data = data.get("edits")
        return data if isinstance(data, list) else []

    def save_hope_cost_edits(self, user_id: str, edits: list[dict]) -> None:
        self._save_setting(user_id, "hope_cost_edits", {"edits": edits})
