"""Error types for tables-cli."""

from typing import Optional, Dict, Any


class TablesError(Exception):
    """Base exception for tables-cli errors."""

    def __init__(self, message: str, code: str = "TABLES_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(TablesError):
    """Error connecting to or authenticating against the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class UnsupportedDatabaseError(TablesError):
    """Configured database type has no registered backend."""

    def __init__(self, db_type: str, supported: Optional[list] = None):
        supported = supported or []
        super().__init__(
            f"Unsupported database type '{db_type}' (supported: {', '.join(supported)})",
            code="UNSUPPORTED_DATABASE",
            details={"db_type": db_type, "supported": supported},
        )


class PrepareError(TablesError):
    """The column metadata statement could not be prepared."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="PREPARE_ERROR", details=details)


class QueryError(TablesError):
    """A catalog query failed at runtime.

    The details carry the scope (schema or owner) and, for column
    fetches, the table name.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="QUERY_ERROR", details=details)

    @property
    def table(self) -> Optional[str]:
        return self.details.get("table")

    @property
    def scope(self) -> Optional[str]:
        return self.details.get("schema") or self.details.get("owner") or self.details.get("db_name")


class UnknownTagGeneratorError(TablesError):
    """Configuration names a tag generator that is not registered."""

    def __init__(self, name: str, available: Optional[list] = None):
        available = available or []
        super().__init__(
            f"Unknown tag generator '{name}' (available: {', '.join(available)})",
            code="UNKNOWN_TAG_GENERATOR",
            details={"name": name, "available": available},
        )


class NameCollisionError(TablesError):
    """Two tables map to the same struct name or output file."""

    def __init__(self, kind: str, name: str, tables: list):
        super().__init__(
            f"Tables {' and '.join(repr(t) for t in tables)} both map to {kind} '{name}'",
            code="NAME_COLLISION",
            details={"kind": kind, "name": name, "tables": tables},
        )
