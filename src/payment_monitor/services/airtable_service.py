"""Airtable access for the failed-payments tracking table."""

import logging
from typing import Any, Protocol

from pyairtable import Api, Table

logger = logging.getLogger(__name__)

FAILED_PAYMENTS_TABLE = "Failed Payments"


class RecordTable(Protocol):
    """Subset of pyairtable.Table used by the tracking recorder."""

    def create(self, fields: dict[str, Any]) -> dict[str, Any]: ...


class AirtableConfigError(Exception):
    """Raised when Airtable credentials are not configured."""

    pass


class FailedPaymentsTable:
    """Lazily opened pyairtable Table for the Failed Payments table.

    Missing credentials surface on the first write rather than at startup,
    so they are reported through the recorder's normal error path.
    """

    def __init__(
        self,
        api_key: str | None,
        base_id: str,
        table_name: str = FAILED_PAYMENTS_TABLE,
    ) -> None:
        self._api_key = api_key
        self._base_id = base_id
        self._table_name = table_name
        self._table: Table | None = None

    def _get_table(self) -> Table:
        if self._table is None:
            if not self._api_key:
                raise AirtableConfigError("AIRTABLE_API_KEY is not configured")
            self._table = Api(self._api_key).table(self._base_id, self._table_name)
            logger.info(
                "Airtable table %r opened in base %s", self._table_name, self._base_id
            )
        return self._table

    def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Create one record and return the Airtable response (with ``id``)."""
        return self._get_table().create(fields)
