"""Application service: wallet transaction history (query)."""

from __future__ import annotations

import logging

from menuwallet.application.dto import TransactionDTO
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.repository.transaction_repository import TransactionRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import TRANSACTION_FIELDS
from menuwallet.domain.service.sorting import order_records

log = logging.getLogger(__name__)


class ListTransactionsHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        driver_id: str,
        criteria: FilterCriteria | None = None,
    ) -> list[TransactionDTO]:
        """Filter then sort a driver's transactions (newest first by default)."""
        criteria = criteria or FilterCriteria()
        transactions = self._transaction_repo.list_for_driver(driver_id)
        matched = apply_filter(transactions, criteria, TRANSACTION_FIELDS)
        log.debug(
            "Driver %s: %d of %d transactions match %d active filter(s)",
            driver_id, len(matched), len(transactions), criteria.active_count,
        )
        ordered = order_records(matched, criteria, TRANSACTION_FIELDS)
        return [TransactionDTO.from_domain(tx) for tx in ordered]
