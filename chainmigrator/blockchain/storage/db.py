import sqlite3
import threading
import logging
from typing import Optional, Iterator, Iterable, Tuple
from ...protocol.types.common import StorageIOError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000

class KVStore:
    """
    Byte-keyed key-value store on top of sqlite.

    Keys compare as raw bytes (sqlite BLOB ordering is memcmp), so a range
    scan returns records in the same order as the source node's store.
    """

    def __init__(self, db_path: str, readonly: bool = False, page_size: int = DEFAULT_PAGE_SIZE):
        self.db_path = db_path
        self.readonly = readonly
        self.page_size = page_size
        try:
            if readonly:
                self.conn = sqlite3.connect(f"file:{db_path}?mode=ro", uri=True, check_same_thread=False)
            else:
                self.conn = sqlite3.connect(db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageIOError(f"Cannot open store {db_path}: {e}") from e
        self.cursor = self.conn.cursor()
        self._lock = threading.Lock()
        if not readonly:
            self._init_db()

    def _init_db(self):
        with self._lock:
            self.cursor.execute('''
                CREATE TABLE IF NOT EXISTS kv (
                    key BLOB PRIMARY KEY,
                    value BLOB NOT NULL
                )
            ''')
            self.conn.commit()

    def close(self):
        with self._lock:
            self.conn.close()

    def __enter__(self) -> 'KVStore':
        return self

    def __exit__(self, *exc):
        self.close()

    def get(self, key: bytes) -> Optional[bytes]:
        try:
            with self._lock:
                self.cursor.execute('SELECT value FROM kv WHERE key = ?', (key,))
                row = self.cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageIOError(f"Read of {key!r} failed: {e}") from e
        return bytes(row[0]) if row else None

    def put(self, key: bytes, value: bytes):
        self.put_many([(key, value)])

    def put_many(self, items: Iterable[Tuple[bytes, bytes]]):
        try:
            with self._lock:
                self.cursor.executemany('INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)', items)
                self.conn.commit()
        except sqlite3.Error as e:
            raise StorageIOError(f"Write to {self.db_path} failed: {e}") from e

    def iterate(self, gte: bytes, lte: bytes) -> Iterator[Tuple[bytes, bytes]]:
        """
        Yields (key, value) pairs with gte <= key <= lte in ascending key order.

        Rows are fetched a page at a time and the lock is released between
        pages, so callers may issue point lookups while iterating.
        """
        lower, inclusive = gte, True
        while True:
            op = '>=' if inclusive else '>'
            try:
                with self._lock:
                    self.cursor.execute(
                        f'SELECT key, value FROM kv WHERE key {op} ? AND key <= ? ORDER BY key ASC LIMIT ?',
                        (lower, lte, self.page_size)
                    )
                    rows = self.cursor.fetchall()
            except sqlite3.Error as e:
                raise StorageIOError(f"Range scan {gte!r}..{lte!r} failed: {e}") from e

            for key, value in rows:
                yield bytes(key), bytes(value)

            if len(rows) < self.page_size:
                return
            lower, inclusive = bytes(rows[-1][0]), False
