from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from src.core.errors import NotFoundError
from src.repositories.client_counts_repository import COUNT_TABLES, ClientCountsRepository
from src.schemas.employees import ClientCount

logger = logging.getLogger(__name__)


class ClientCountsService:
    def __init__(self, repository: ClientCountsRepository) -> None:
        self.repository = repository

    def get_count(self, table: str, employee_id: str) -> Optional[ClientCount]:
        record = self.repository.get(_checked(table), employee_id)
        return ClientCount.model_validate(record.model_dump()) if record else None

    def set_count(self, table: str, employee_id: str, total_count: int) -> Tuple[ClientCount, bool]:
        table = _checked(table)
        if self.repository.get(table, employee_id) is None:
            record = self.repository.create(table, employee_id, total_count)
            logger.info("Started %s count for employee %s at %s", table, employee_id, total_count)
            return ClientCount.model_validate(record.model_dump()), True
        updated_at = datetime.now(timezone.utc).isoformat()
        record = self.repository.update(table, employee_id, total_count, updated_at)
        if record is None:
            raise NotFoundError("Count not found")
        return ClientCount.model_validate(record.model_dump()), False


def _checked(table: str) -> str:
    if table not in COUNT_TABLES:
        raise ValueError(f"Unknown count table: {table}")
    return table
