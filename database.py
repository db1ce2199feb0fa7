import json
import sqlite3
from datetime import datetime
from typing import List, Optional

from data_store import ReservationStore
from models import Reservation

_COLUMNS = "id, name, email, phone, date, time, guests, requests, created_at"


def init_db(db_file: str):
    """Create table if it doesn’t exist."""
    conn = sqlite3.connect(db_file)
    cur = conn.cursor()
    cur.execute("""
        CREATE TABLE IF NOT EXISTS reservations (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            date TEXT NOT NULL,
            time TEXT NOT NULL,
            guests TEXT NOT NULL,
            requests TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """)
    conn.commit()
    conn.close()


def _row_to_reservation(r) -> Reservation:
    return Reservation(
        id=r[0],
        name=r[1],
        email=r[2],
        phone=r[3],
        date=r[4],
        time=r[5],
        guests=json.loads(r[6]),
        requests=r[7],
        created_at=datetime.fromisoformat(r[8]),
    )


class SqliteReservationStore(ReservationStore):
    """Reservation store kept in a SQLite file; ids continue across restarts."""

    def __init__(self, db_file: str):
        super().__init__()
        self.db_file = db_file
        init_db(db_file)
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COALESCE(MAX(id), 0) + 1 FROM reservations")
            self._next_id = cur.fetchone()[0]
        finally:
            conn.close()

    def _connect(self):
        return sqlite3.connect(self.db_file)

    def next_id(self) -> int:
        with self.lock:
            value = self._next_id
            self._next_id += 1
            return value

    def append(self, reservation: Reservation) -> None:
        with self.lock:
            conn = self._connect()
            try:
                conn.execute(
                    f"INSERT INTO reservations ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        reservation.id,
                        reservation.name,
                        reservation.email,
                        reservation.phone,
                        reservation.date,
                        reservation.time,
                        json.dumps(reservation.guests),
                        reservation.requests,
                        reservation.created_at.isoformat(),
                    ),
                )
                conn.commit()
            finally:
                conn.close()

    def all(self) -> List[Reservation]:
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM reservations ORDER BY id")
            rows = cur.fetchall()
        finally:
            conn.close()
        return [_row_to_reservation(r) for r in rows]

    def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        # ids outside SQLite's 64-bit INTEGER range were never issued
        if not -2**63 <= reservation_id < 2**63:
            return None
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM reservations WHERE id=?", (reservation_id,))
            row = cur.fetchone()
        finally:
            conn.close()
        return _row_to_reservation(row) if row else None
