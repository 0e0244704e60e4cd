"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from menuwallet.domain.model.menu_item import MenuItem
from menuwallet.domain.model.summary import WalletSummary
from menuwallet.domain.model.template import CustomizationTemplate, TemplatePerformance
from menuwallet.domain.model.transaction import WalletTransaction

_DATE_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class TransactionDTO:
    """Output: one row of the wallet history list."""

    id: str
    type: str
    type_label: str
    amount: str  # formatted, e.g. "-RM 5.00"
    is_credit: bool
    status: str
    created_at: str
    description: str
    reference_id: str

    @staticmethod
    def from_domain(tx: WalletTransaction) -> TransactionDTO:
        return TransactionDTO(
            id=tx.id,
            type=tx.transaction_type.value,
            type_label=tx.transaction_type.display_name,
            amount=str(tx.amount),
            is_credit=tx.is_credit,
            status=tx.status,
            created_at=tx.created_at.strftime(_DATE_FORMAT),
            description=tx.description or "",
            reference_id=tx.reference_id or "",
        )


@dataclass(frozen=True)
class TypeTotalDTO:
    type_label: str
    count: int
    total: str


@dataclass(frozen=True)
class WalletSummaryDTO:
    transaction_count: int
    total_credits: str
    total_debits: str
    net: str
    total_fees: str
    pending_count: int
    by_type: list[TypeTotalDTO]

    @staticmethod
    def from_domain(summary: WalletSummary) -> WalletSummaryDTO:
        return WalletSummaryDTO(
            transaction_count=summary.transaction_count,
            total_credits=str(summary.total_credits),
            total_debits=str(summary.total_debits),
            net=str(summary.net),
            total_fees=str(summary.total_fees),
            pending_count=summary.pending_count,
            by_type=[
                TypeTotalDTO(
                    type_label=t.transaction_type.display_name,
                    count=t.count,
                    total=str(t.total),
                )
                for t in summary.by_type
            ],
        )


@dataclass(frozen=True)
class MenuItemDTO:
    id: str
    name: str
    category: str
    price: str
    is_available: bool
    template_count: int

    @staticmethod
    def from_domain(item: MenuItem) -> MenuItemDTO:
        return MenuItemDTO(
            id=item.id,
            name=item.name,
            category=item.category,
            price=str(item.base_price),
            is_available=item.is_available,
            template_count=len(item.template_ids),
        )


@dataclass(frozen=True)
class TemplateOptionDTO:
    name: str
    additional_price: str
    is_default: bool


@dataclass(frozen=True)
class TemplateDTO:
    id: str
    name: str
    category: str
    selection_mode: str
    is_required: bool
    is_active: bool
    usage_count: int
    options: list[TemplateOptionDTO]

    @staticmethod
    def from_domain(template: CustomizationTemplate) -> TemplateDTO:
        return TemplateDTO(
            id=template.id,
            name=template.name,
            category=template.category,
            selection_mode=template.selection_mode.value,
            is_required=template.is_required,
            is_active=template.is_active,
            usage_count=template.usage_count,
            options=[
                TemplateOptionDTO(
                    name=option.name,
                    additional_price=str(option.additional_price),
                    is_default=option.is_default,
                )
                for option in template.options
            ],
        )


@dataclass(frozen=True)
class TemplatePerformanceDTO:
    template_id: str
    template_name: str
    usage_count: int
    revenue: str
    performance_score: str  # e.g. "87% score"
    last_used_at: str

    @staticmethod
    def from_domain(metric: TemplatePerformance) -> TemplatePerformanceDTO:
        return TemplatePerformanceDTO(
            template_id=metric.template_id,
            template_name=metric.template_name,
            usage_count=metric.usage_count,
            revenue=str(metric.revenue),
            performance_score=f"{metric.performance_score:.0f}% score",
            last_used_at=(
                metric.last_used_at.strftime(_DATE_FORMAT) if metric.last_used_at else "never"
            ),
        )


@dataclass(frozen=True)
class BulkApplyResultDTO:
    """Output: what a bulk template application changed."""

    items_updated: int
    templates_applied: int
    attachments_created: int


@dataclass(frozen=True)
class TemplateOptionSpec:
    """Input: one option row from the template form."""

    name: str
    additional_price: str = "0"
    is_default: bool = False
