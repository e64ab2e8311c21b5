"""Repository layer responsible for all database access."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List, Optional

from backend.domain.models import FoodForecastRecord, HistoricalRecord
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


SAMPLE_HISTORY: tuple[HistoricalRecord, ...] = (
    HistoricalRecord("2024-01-01", "Holiday Party", "Mixed", 150, 200, 180),
    HistoricalRecord("2024-01-15", "Corporate Lunch", "Professionals", 80, 100, 90),
    HistoricalRecord("2024-02-01", "Weekend Brunch", "Families", 120, 150, 140),
    HistoricalRecord("2024-02-10", "Birthday Celebration", "Young Adults", 60, 70, 65),
)


class DataRepository:
    """Encapsulates SQLite access so the forecasting core stays storage-agnostic."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        return connection

    def initialize_database(self) -> None:
        """Create all persistence artifacts before API startup."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS FoodForecasts (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        item_name TEXT NOT NULL,
                        expected_footfall INTEGER NOT NULL,
                        quantity_recommended INTEGER NOT NULL CHECK (quantity_recommended >= 0),
                        date TEXT NOT NULL,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS HistoricalRecords (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        date TEXT NOT NULL,
                        event_type TEXT NOT NULL,
                        audience_profile TEXT NOT NULL,
                        footfall INTEGER NOT NULL,
                        food_prepared INTEGER NOT NULL CHECK (food_prepared >= 0),
                        food_consumed INTEGER NOT NULL CHECK (food_consumed >= 0)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_forecasts_item_date
                    ON FoodForecasts(item_name, date);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Database initialization failed: {exc}") from exc

    def seed_sample_history_if_empty(self) -> int:
        """Insert the sample event history when none is stored; return rows added."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) AS count FROM HistoricalRecords;")
                if int(cursor.fetchone()["count"]) > 0:
                    logger.info("Historical records already present; skipping seed")
                    return 0

                cursor.executemany(
                    """
                    INSERT INTO HistoricalRecords (
                        date, event_type, audience_profile,
                        footfall, food_prepared, food_consumed
                    )
                    VALUES (?, ?, ?, ?, ?, ?);
                    """,
                    [_record_to_row(record) for record in SAMPLE_HISTORY],
                )
                conn.commit()
            logger.info("Seeded %s sample historical records", len(SAMPLE_HISTORY))
            return len(SAMPLE_HISTORY)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Sample history seeding failed: {exc}") from exc

    def list_historical_records(self) -> List[HistoricalRecord]:
        """Return stored event history ordered by date."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT date, event_type, audience_profile,
                       footfall, food_prepared, food_consumed
                FROM HistoricalRecords
                ORDER BY date ASC, id ASC;
                """
            )
            return [
                HistoricalRecord(
                    date=str(row["date"]),
                    event_type=str(row["event_type"]),
                    audience_profile=str(row["audience_profile"]),
                    footfall=int(row["footfall"]),
                    food_prepared=int(row["food_prepared"]),
                    food_consumed=int(row["food_consumed"]),
                )
                for row in cursor.fetchall()
            ]

    def add_historical_record(self, record: HistoricalRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO HistoricalRecords (
                    date, event_type, audience_profile,
                    footfall, food_prepared, food_consumed
                )
                VALUES (?, ?, ?, ?, ?, ?);
                """,
                _record_to_row(record),
            )
            conn.commit()

    def count_historical_records(self) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM HistoricalRecords;")
            return int(cursor.fetchone()["count"])

    def save_forecast(self, record: FoodForecastRecord) -> int:
        """Persist a recommendation and return its row id."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO FoodForecasts (
                    item_name, expected_footfall, quantity_recommended, date
                )
                VALUES (?, ?, ?, ?);
                """,
                (
                    record.item_name,
                    record.expected_footfall,
                    record.quantity_recommended,
                    record.date,
                ),
            )
            conn.commit()
            return int(cursor.lastrowid)

    def find_forecasts_by_item_and_date(
        self,
        item_name: str,
        date: str,
    ) -> List[FoodForecastRecord]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, item_name, expected_footfall, quantity_recommended, date
                FROM FoodForecasts
                WHERE item_name = ? AND date = ?
                ORDER BY id ASC;
                """,
                (item_name, date),
            )
            return [
                FoodForecastRecord(
                    item_name=str(row["item_name"]),
                    expected_footfall=int(row["expected_footfall"]),
                    quantity_recommended=int(row["quantity_recommended"]),
                    date=str(row["date"]),
                    record_id=int(row["id"]),
                )
                for row in cursor.fetchall()
            ]

    def count_forecasts(self) -> int:
        """Return persisted forecast count for diagnostics and tests."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM FoodForecasts;")
            return int(cursor.fetchone()["count"])


def _record_to_row(record: HistoricalRecord) -> tuple[str, str, str, int, int, int]:
    return (
        record.date,
        record.event_type,
        record.audience_profile,
        record.footfall,
        record.food_prepared,
        record.food_consumed,
    )
