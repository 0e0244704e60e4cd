"""Application service: wallet overview totals (query)."""

from __future__ import annotations

from menuwallet.application.dto import WalletSummaryDTO
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.repository.transaction_repository import TransactionRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import TRANSACTION_FIELDS
from menuwallet.domain.service.wallet_summary import summarize


class SummarizeWalletHandler:

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def handle(
        self,
        driver_id: str,
        criteria: FilterCriteria | None = None,
    ) -> WalletSummaryDTO:
        transactions = self._transaction_repo.list_for_driver(driver_id)
        if criteria is not None:
            transactions = apply_filter(transactions, criteria, TRANSACTION_FIELDS)
        return WalletSummaryDTO.from_domain(summarize(transactions))
