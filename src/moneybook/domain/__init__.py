"""Domain layer for moneybook application.

Services live in their own modules (``moneybook.domain.movement`` etc.) and
are imported from there; this package only re-exports the plain entities so
that the database layer can depend on it without import cycles.
"""

from moneybook.domain.entities import (
    User,
    Account,
    Category,
    SubCategory,
    Tiers,
    Movement,
    MovementType,
    Transfer,
)

__all__ = [
    "User",
    "Account",
    "Category",
    "SubCategory",
    "Tiers",
    "Movement",
    "MovementType",
    "Transfer",
]
