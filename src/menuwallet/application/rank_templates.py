"""Application service: template performance ranking (query)."""

from __future__ import annotations

from menuwallet.application.dto import TemplatePerformanceDTO
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.repository.template_repository import TemplateRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import PERFORMANCE_FIELDS
from menuwallet.domain.service.sorting import order_records


class RankTemplatesHandler:

    def __init__(self, template_repo: TemplateRepository) -> None:
        self._template_repo = template_repo

    def handle(self, criteria: FilterCriteria | None = None) -> list[TemplatePerformanceDTO]:
        """Rank templates, best performance score first unless told otherwise."""
        criteria = criteria or FilterCriteria()
        metrics = apply_filter(
            self._template_repo.list_performance(), criteria, PERFORMANCE_FIELDS
        )
        return [
            TemplatePerformanceDTO.from_domain(metric)
            for metric in order_records(metrics, criteria, PERFORMANCE_FIELDS)
        ]
