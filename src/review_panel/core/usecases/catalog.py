from __future__ import annotations

from ..domain.judges import catalog


class CatalogUseCase:
    """Use case for listing judges, presets and models."""

    def __init__(self, *, default_model: str) -> None:
        self._default_model = default_model

    def execute(self) -> dict[str, object]:
        return catalog(self._default_model)
