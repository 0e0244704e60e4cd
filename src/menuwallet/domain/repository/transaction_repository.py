"""Abstract repository for wallet transactions.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from menuwallet.domain.model.transaction import WalletTransaction


class TransactionRepository(ABC):

    @abstractmethod
    def list_for_driver(self, driver_id: str) -> list[WalletTransaction]:
        """Return every transaction on a driver's wallet, newest first."""

    @abstractmethod
    def get_by_id(self, transaction_id: str) -> WalletTransaction | None:
        """Return a transaction by its ID, or None if not found."""
