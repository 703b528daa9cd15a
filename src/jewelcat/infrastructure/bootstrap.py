"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from jewelcat.domain.model.value_objects import Percentage
from jewelcat.infrastructure.config import get_settings
from jewelcat.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work() -> JsonUnitOfWork:
    settings = get_settings()
    return JsonUnitOfWork(settings.catalog_path, lock_timeout=settings.lock_timeout_seconds)


def currency() -> str:
    return get_settings().currency


def default_gst() -> Percentage:
    return Percentage(get_settings().default_gst_percentage)


def default_actor() -> str:
    return get_settings().default_actor
