"""Application service: customization template list (query).

Without an explicit sort the most used templates come first, ties broken
by name.
"""

from __future__ import annotations

from menuwallet.application.dto import TemplateDTO
from menuwallet.domain.model.criteria import FilterCriteria
from menuwallet.domain.repository.template_repository import TemplateRepository
from menuwallet.domain.service.filtering import apply_filter
from menuwallet.domain.service.record_fields import TEMPLATE_FIELDS
from menuwallet.domain.service.sorting import order_records


class ListTemplatesHandler:

    def __init__(self, template_repo: TemplateRepository) -> None:
        self._template_repo = template_repo

    def handle(self, criteria: FilterCriteria | None = None) -> list[TemplateDTO]:
        criteria = criteria or FilterCriteria()
        templates = apply_filter(self._template_repo.list_all(), criteria, TEMPLATE_FIELDS)
        return [
            TemplateDTO.from_domain(template)
            for template in order_records(templates, criteria, TEMPLATE_FIELDS)
        ]
