"""Table repair/optimize/analyze sweep."""

import logging

from dblayer.core.executor import QueryExecutor
from dblayer.models.table import TableDescriptor, column_value

logger = logging.getLogger(__name__)


class MaintenanceRunner:
    """Repairs, optimizes and analyzes tables through a QueryExecutor."""

    # Engines that need an explicit REPAIR before OPTIMIZE
    REPAIR_ENGINES = {"myisam"}

    def __init__(self, executor: QueryExecutor):
        """
        Initialize the maintenance runner.

        Args:
            executor: Query executor bound to the database to maintain
        """
        self.executor = executor

    def table_status(self, force: bool = False) -> list[TableDescriptor]:
        """
        List tables due for optimization.

        Args:
            force: Include every table, not only those with free space

        Returns:
            Table descriptors in the order the server reports them
        """
        if force:
            query = "SHOW TABLE STATUS"
        else:
            query = "SHOW TABLE STATUS WHERE Data_free != 0"

        return [TableDescriptor.from_status_row(row) for row in self.executor.query(query)]

    def corrupt_tables(self) -> list[str]:
        """Names of tables in the configured database with no storage engine."""
        schema = self.executor.escape_string(
            self.executor.connection.config.database
        )
        rows = self.executor.query(
            "SELECT table_name FROM information_schema.TABLES "
            f"WHERE table_schema = {schema} AND engine IS NULL"
        )
        return [str(column_value(row, "table_name")) for row in rows]

    def optimise(self, force: bool = False) -> list[str]:
        """
        Run the maintenance sweep.

        Tables with free space (all tables when forced) are repaired if
        their engine needs it, then optimized and analyzed. Tables without
        a storage engine are repaired on every run.

        Args:
            force: Sweep every table, not only those with free space

        Returns:
            Names of the tables processed, engine sweep first
        """
        adapter = self.executor.adapter
        if not adapter.capabilities.table_maintenance:
            logger.warning(
                f"Table maintenance is not supported for {adapter.dialect.value}"
            )
            return []

        processed: list[str] = []

        for table in self.table_status(force):
            processed.append(table.name)
            name = adapter.quote_identifier(table.name)
            if table.engine and table.engine.lower() in self.REPAIR_ENGINES:
                self._run(f"REPAIR TABLE {name} USE_FRM")
            self._run(f"OPTIMIZE TABLE {name}")
            self._run(f"ANALYZE TABLE {name}")

        for table_name in self.corrupt_tables():
            processed.append(table_name)
            self._run(f"REPAIR TABLE {adapter.quote_identifier(table_name)} USE_FRM")

        logger.info(f"Maintenance sweep processed {len(processed)} tables")
        return processed

    def _run(self, statement: str) -> None:
        handle = self.executor.query_direct(statement)
        if handle is not None:
            handle.close()
