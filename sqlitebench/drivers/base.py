from abc import ABC, abstractmethod
from typing import Any, Sequence, Tuple, Type


class BaseCursor(ABC):
    """Abstract base class for a result cursor."""

    @abstractmethod
    def fetchone(self) -> Any:
        pass

    @abstractmethod
    def close(self):
        pass


class BaseConnection(ABC):
    """Abstract base class for an open database connection.

    Connections are context managers and close on exit, including when the
    block raises.
    """

    def __init__(self, driver: "BaseDriver", raw):
        self.driver = driver
        self.raw = raw
        self.closed = False

    @abstractmethod
    def execute(self, sql: str, params: Sequence = ()):
        """Run a statement that returns no rows."""
        pass

    @abstractmethod
    def query(self, sql: str, params: Sequence = ()) -> BaseCursor:
        """Run a statement and return an open cursor over its rows."""
        pass

    @abstractmethod
    def _close(self):
        pass

    def close(self):
        """Close the connection. Closing twice is a no-op."""
        if self.closed:
            return
        self._close()
        self.closed = True

    def count_rows(self, table_name: str) -> int:
        """
        Returns the number of rows in a table.

        Parameters:
            table_name: str
                The table name
        """
        cursor = self.query(f'SELECT COUNT(*) FROM "{table_name}"')
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
        return row[0]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class BaseDriver(ABC):
    """Abstract base class for database drivers.

    A driver wraps one Python SQLite library behind a common
    connect / execute / query surface.
    """

    label: str = ""
    identifier: str = ""

    @property
    @abstractmethod
    def error_types(self) -> Tuple[Type[BaseException], ...]:
        """Exception types the underlying library raises."""
        pass

    @abstractmethod
    def connect(self, uri: str) -> BaseConnection:
        """Open a connection to a URI filename such as ``file:/sqlitebench?vfs=memdb``."""
        pass

    @abstractmethod
    def version(self) -> str:
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}(label={self.label!r}, identifier={self.identifier!r})"
