"""Abstract repository for CustomizationTemplate aggregate and its analytics."""

from __future__ import annotations

from abc import ABC, abstractmethod

from menuwallet.domain.model.template import CustomizationTemplate, TemplatePerformance


class TemplateRepository(ABC):

    @abstractmethod
    def get_by_id(self, template_id: str) -> CustomizationTemplate | None:
        """Return a template by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[CustomizationTemplate]:
        """Return every template owned by the vendor."""

    @abstractmethod
    def save(self, template: CustomizationTemplate) -> None:
        """Persist a new or updated template."""

    @abstractmethod
    def list_performance(self) -> list[TemplatePerformance]:
        """Return the latest analytics snapshot for every template."""
