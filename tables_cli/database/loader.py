"""Schema loading: drives an introspector over every selected table."""

import logging
from typing import Optional, List, Sequence

from .base import DatabaseIntrospector
from .models import Table

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Loads tables and their columns through one introspector.

    The loader owns the introspector's connection for the duration of
    ``load()`` and closes it on every exit path. Any error aborts the
    whole load; no partial schema is returned.
    """

    def __init__(self, introspector: DatabaseIntrospector):
        self.introspector = introspector

    def load(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Load the schema.

        Args:
            tables: Optional table names to restrict the load to

        Returns:
            Tables ordered by name, each with its columns in ordinal order
        """
        try:
            self.introspector.connect()
            result = self.introspector.get_tables(tables)
            logger.debug("Found %d tables", len(result))

            self.introspector.prepare_columns_stmt()
            for table in result:
                self.introspector.get_columns(table)
                logger.debug("Loaded %d columns of %s", len(table.columns), table.name)
        finally:
            self.introspector.close()

        return result
