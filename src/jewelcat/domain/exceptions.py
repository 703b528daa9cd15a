"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated invariant, rejected before mutation."""


class NotFoundError(DomainException):
    """A requested entity does not exist or has been soft-deleted."""


class DuplicateCodeError(DomainException):
    """A material code or name collides with an active catalog entry."""


class IndexOutOfRangeError(DomainException):
    """A variant index does not address a slot of the material."""

    def __init__(self, material_id: str, variant_index: int, variant_count: int) -> None:
        super().__init__(
            f"Variant index {variant_index} out of range for material "
            f"'{material_id}' ({variant_count} variant(s))"
        )
        self.material_id = material_id
        self.variant_index = variant_index
        self.variant_count = variant_count


class ReferencedError(DomainException):
    """Deletion blocked because active products still use the material."""

    def __init__(self, material_id: str, count: int) -> None:
        super().__init__(
            f"Cannot delete material '{material_id}': {count} product(s) "
            f"use it. Remove references first."
        )
        self.material_id = material_id
        self.count = count


class PricingError(DomainException):
    """A composition cannot be priced against the current catalog."""


class DanglingReferenceError(PricingError):
    """A composition line points at a variant slot that no longer resolves."""

    def __init__(self, material_id: str, variant_index: int, reason: str = "") -> None:
        message = f"Dangling reference to material '{material_id}' variant {variant_index}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.material_id = material_id
        self.variant_index = variant_index


class InactiveVariantError(PricingError):
    """A composition line references a disabled variant."""

    def __init__(self, material_id: str, variant_index: int, variant_name: str) -> None:
        super().__init__(
            f"Variant '{variant_name}' (index {variant_index}) of material "
            f"'{material_id}' is inactive"
        )
        self.material_id = material_id
        self.variant_index = variant_index
        self.variant_name = variant_name
