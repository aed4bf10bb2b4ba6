import sqlite3
from pathlib import Path
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence
from time_on_task.config.settings import Settings, SUPPORTED_DIALECTS, settings as default_settings
from time_on_task.models.student_event import StudentEvent
from time_on_task.services.errors import ConfigError, DatabaseError, ServiceError

logger = logging.getLogger(__name__)

MIGRATIONS = [
    """
    -- Client event log
    CREATE TABLE IF NOT EXISTS student_events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        institution_id INTEGER,
        user_id INTEGER,
        class_id INTEGER,
        task_id TEXT,
        action TEXT NOT NULL,
        client_time REAL
    );

    CREATE INDEX IF NOT EXISTS idx_student_events_action ON student_events(action);
    """
]

EVENT_COLUMNS = ("id", "institution_id", "user_id", "class_id", "task_id", "action", "client_time")

class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails"""
    pass

class QueryError(DatabaseError):
    """Exception raised when a database query fails"""
    pass

class DatabaseManager:
    def __init__(self, db_path=None, settings: Optional[Settings] = None):
        """Initialize database manager"""
        self.settings = settings or default_settings
        self.db_path = str(db_path or self.settings.DB_NAME)
        self.conn: Optional[sqlite3.Connection] = None
        logger.info(f"Initialized DatabaseManager with db_path: {self.db_path}")
        self.initialize()

    def initialize(self):
        """Open the connection and create the schema"""
        try:
            if self.conn is None:
                self.conn = self.get_connection()
            for migration in MIGRATIONS:
                self.conn.executescript(migration)
            self.conn.commit()
            logger.info("Database initialization complete")
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise DatabaseError(f"Failed to initialize database: {e}")

    def get_connection(self) -> sqlite3.Connection:
        """Open a connection to the configured database"""
        dialect = self.settings.DB_DIALECT.lower()
        if dialect not in SUPPORTED_DIALECTS:
            raise ConfigError(
                f"Unsupported database dialect {self.settings.DB_DIALECT!r}, "
                f"expected one of: {', '.join(SUPPORTED_DIALECTS)}"
            )

        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            # Calculations hand fetches to worker threads; access stays sequential
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            if self.db_path != ":memory:":
                conn.execute("PRAGMA journal_mode = WAL")
            conn.execute("PRAGMA synchronous = NORMAL")
            return conn
        except Exception as e:
            logger.error(f"Failed to connect to database {self.db_path}: {e}")
            raise DatabaseConnectionError(f"Failed to connect to database: {e}")

    def close(self):
        """Close database connection"""
        if self.conn:
            try:
                self.conn.close()
                logger.info("Database connection closed.")
            except Exception as e:
                logger.error(f"Error closing database: {e}")
            finally:
                self.conn = None

    def store_event(self, event: StudentEvent) -> int:
        """Append one event to the log and return its arrival sequence"""
        try:
            cursor = self.conn.execute("""
                INSERT INTO student_events (
                    institution_id, user_id, class_id,
                    task_id, action, client_time
                ) VALUES (?, ?, ?, ?, ?, ?)
            """, self._event_params(event))
            self.conn.commit()
            return cursor.lastrowid
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Failed to store event: {e}")
            raise QueryError(f"Failed to store event: {e}")

    def store_events(self, events: Iterable[StudentEvent]) -> int:
        """Append events in the given order, returns the number stored"""
        try:
            params = [self._event_params(event) for event in events]
            self.conn.executemany("""
                INSERT INTO student_events (
                    institution_id, user_id, class_id,
                    task_id, action, client_time
                ) VALUES (?, ?, ?, ?, ?, ?)
            """, params)
            self.conn.commit()
            logger.info(f"Stored {len(params)} events")
            return len(params)
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Failed to store events: {e}")
            raise QueryError(f"Failed to store events: {e}")

    def _event_params(self, event: StudentEvent) -> tuple:
        return (
            event.institution_id,
            event.user_id,
            event.class_id,
            event.task_id,
            event.action,
            event.client_time
        )

    def fetch_student_events(self, actions: Sequence[str]) -> List[StudentEvent]:
        """Fetch events eligible for time-on-task, in arrival order.

        Only rows with a task id, a positive client time and one of the
        given actions are returned.
        """
        if not actions:
            return []
        try:
            placeholders = ", ".join("?" for _ in actions)
            cursor = self.conn.execute(f"""
                SELECT {", ".join(EVENT_COLUMNS)}
                FROM student_events
                WHERE task_id IS NOT NULL
                  AND client_time IS NOT NULL
                  AND client_time > 0
                  AND action IN ({placeholders})
                ORDER BY id ASC
            """, list(actions))

            events = [
                StudentEvent(**dict(zip(EVENT_COLUMNS, row)))
                for row in cursor.fetchall()
            ]
            logger.debug(f"Fetched {len(events)} student events")
            return events
        except Exception as e:
            logger.error(f"Failed to fetch student events: {e}")
            raise QueryError(f"Failed to fetch student events: {e}")

    def get_database_stats(self) -> Dict[str, Any]:
        """Get event log statistics"""
        try:
            cursor = self.conn.cursor()
            cursor.execute("""
                SELECT
                    COUNT(*),
                    COUNT(DISTINCT user_id),
                    COUNT(DISTINCT class_id),
                    COUNT(DISTINCT task_id),
                    MIN(client_time),
                    MAX(client_time)
                FROM student_events
            """)
            total, users, classes, tasks, earliest, latest = cursor.fetchone()

            cursor.execute("""
                SELECT action, COUNT(*)
                FROM student_events
                GROUP BY action
                ORDER BY action
            """)
            actions = {action: count for action, count in cursor.fetchall()}

            if self.db_path == ":memory:":
                db_size = 0
            else:
                db_size = Path(self.db_path).stat().st_size / (1024 * 1024)

            return {
                "total_events": total,
                "users": users,
                "classes": classes,
                "tasks": tasks,
                "actions": actions,
                "client_time_range": {
                    "earliest": earliest,
                    "latest": latest
                },
                "database_size_mb": db_size
            }
        except Exception as e:
            logger.error(f"Failed to get database stats: {e}")
            raise DatabaseError(f"Failed to get database stats: {e}")
