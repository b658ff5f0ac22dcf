import sqlite3
import os
import json
import uuid
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from utils.errors import StoreUnavailable

# Initialize logger
logger = logging.getLogger(__name__)

# Database file path
DB_PATH = os.environ.get(
    'CAREER_COACH_DB_PATH',
    os.path.join(os.path.dirname(os.path.dirname(__file__)), 'consultations.db')
)

# Collections known to the store: column order plus which columns hold JSON lists
COLLECTIONS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    'consultations': {
        'columns': ('id', 'owner_id', 'topic', 'messages', 'status', 'created_at', 'updated_at'),
        'json_columns': ('messages',),
    },
}


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string, the timestamp format used by every record"""
    return datetime.now(timezone.utc).isoformat()


def _schema(collection: str) -> Dict[str, Tuple[str, ...]]:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}")


def _check_column(collection: str, column: str) -> None:
    if column not in _schema(collection)['columns']:
        raise ValueError(f"Unknown column '{column}' for collection '{collection}'")


def _encode(collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
    json_columns = _schema(collection)['json_columns']
    encoded = {}
    for key, value in record.items():
        if key in json_columns and value is not None:
            value = json.dumps(value, ensure_ascii=False)
        encoded[key] = value
    return encoded


def _decode(collection: str, row: sqlite3.Row) -> Dict[str, Any]:
    json_columns = _schema(collection)['json_columns']
    record = dict(row)
    for key in json_columns:
        value = record.get(key)
        if isinstance(value, str):
            try:
                record[key] = json.loads(value)
            except json.JSONDecodeError as e:
                logger.error(f"Error parsing stored {key} for {collection} row {record.get('id')}: {e}")
                record[key] = []
        elif value is None:
            record[key] = []
    return record


class SQLiteStore:
    """
    Generic record store over SQLite.

    Offers the four collection operations the consultation service consumes:
    find, insert, update and count. List-valued columns are stored as JSON text.
    Any sqlite failure surfaces as StoreUnavailable.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or DB_PATH

    @contextmanager
    def get_db_connection(self):
        """
        Context manager for database connections
        Commits on success, rolls back and raises StoreUnavailable on sqlite errors
        """
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            logger.error(f"Database error: {e}")
            raise StoreUnavailable(str(e)) from e
        finally:
            if conn:
                conn.close()

    def init_db(self) -> None:
        """Create the collection tables if they don't exist"""
        with self.get_db_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS consultations (
                id TEXT PRIMARY KEY,
                owner_id TEXT NOT NULL,
                topic TEXT NOT NULL,
                messages TEXT NOT NULL DEFAULT '[]',
                status TEXT NOT NULL DEFAULT 'active',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            ''')

            cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_consultations_owner_status
            ON consultations(owner_id, status, created_at)
            ''')

        logger.info(f"Database initialized successfully at {self.db_path}")

    def find(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Tuple[str, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return records matching every equality filter.

        Args:
            collection (str): Collection name
            filters (dict): Column -> value equality filters
            order_by (tuple): (column, 'asc' | 'desc')
            limit (int): Maximum number of records

        Returns:
            List[Dict[str, Any]]: Decoded records
        """
        columns = _schema(collection)['columns']
        clauses = []
        params: List[Any] = []
        for key, value in (filters or {}).items():
            _check_column(collection, key)
            clauses.append(f"{key} = ?")
            params.append(value)

        sql = f"SELECT {', '.join(columns)} FROM {collection}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        if order_by:
            column, direction = order_by
            _check_column(collection, column)
            direction = direction.upper()
            if direction not in ('ASC', 'DESC'):
                raise ValueError(f"Invalid sort direction: {direction}")
            # rowid breaks ties between rows stamped with the same timestamp
            sql += f" ORDER BY {column} {direction}, rowid {direction}"

        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))

        with self.get_db_connection() as conn:
            rows = conn.execute(sql, params).fetchall()

        records = [_decode(collection, row) for row in rows]
        logger.debug(f"Found {len(records)} {collection} records for filters {filters}")
        return records

    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record, assigning id and timestamps, and return the stored record"""
        columns = _schema(collection)['columns']
        for key in record:
            _check_column(collection, key)

        timestamp = now_iso()
        stored = {column: None for column in columns}
        stored.update(record)
        stored['id'] = stored.get('id') or str(uuid.uuid4())
        stored['created_at'] = stored.get('created_at') or timestamp
        stored['updated_at'] = stored.get('updated_at') or timestamp

        encoded = _encode(collection, stored)
        placeholders = ', '.join('?' for _ in columns)
        with self.get_db_connection() as conn:
            conn.execute(
                f"INSERT INTO {collection} ({', '.join(columns)}) VALUES ({placeholders})",
                [encoded[column] for column in columns]
            )

        logger.debug(f"Created {collection} record {stored['id']}")
        return stored

    def update(self, collection: str, record_id: str, fields: Dict[str, Any]) -> None:
        """Replace the given columns of one record"""
        if not fields:
            return
        for key in fields:
            _check_column(collection, key)
        if 'id' in fields:
            raise ValueError("Record id cannot be updated")

        encoded = _encode(collection, fields)
        assignments = ', '.join(f"{key} = ?" for key in encoded)
        with self.get_db_connection() as conn:
            cursor = conn.execute(
                f"UPDATE {collection} SET {assignments} WHERE id = ?",
                list(encoded.values()) + [record_id]
            )
            updated = cursor.rowcount

        if not updated:
            logger.warning(f"No {collection} record with id {record_id} to update")
        else:
            logger.debug(f"Updated {collection} record {record_id}: {sorted(fields)}")

    def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching every equality filter"""
        _schema(collection)
        clauses = []
        params: List[Any] = []
        for key, value in (filters or {}).items():
            _check_column(collection, key)
            clauses.append(f"{key} = ?")
            params.append(value)

        sql = f"SELECT COUNT(*) FROM {collection}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        with self.get_db_connection() as conn:
            result = conn.execute(sql, params).fetchone()
        return result[0] if result else 0
