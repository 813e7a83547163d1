"""Category and sub-category domain services."""

import logging
from typing import Any, Optional

from moneybook.database.base import Database
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import Category as CategoryEntity, SubCategory as SubCategoryEntity
from moneybook.domain.errors import (
    DependencyError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
    category_not_found,
    delete_blocked,
    sub_category_not_found,
)

logger = logging.getLogger(__name__)


def clean_name(value: Any, field: str = "name") -> str:
    """Strip a name and reject missing or blank values.

    Raises:
        MissingFieldsError: If the value is None or blank
        ValidationError: If the value is not a string
    """
    if value is None:
        raise MissingFieldsError([field])
    if not isinstance(value, str):
        raise ValidationError(f"Field '{field}' must be a string")
    cleaned = value.strip()
    if not cleaned:
        raise MissingFieldsError([field])
    return cleaned


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database, duplicates: Optional[DuplicateChecker] = None):
        """Initialize category service.

        Args:
            db: Database instance
            duplicates: Duplicate checker (built from db if omitted)
        """
        self.db = db
        self.duplicates = duplicates or DuplicateChecker(db)

    def create_category(self, name: Any) -> CategoryEntity:
        """Create a category.

        Args:
            name: Category name (surrounding whitespace is stripped)

        Returns:
            Created category entity

        Raises:
            MissingFieldsError: If name is missing or blank
            ConflictError: If a category with this name already exists
        """
        name = clean_name(name)
        self.duplicates.check_category(name)
        category_id = self.db.create_category(name=name)
        return self._fetch(category_id)

    def get_category(self, category_id: int) -> CategoryEntity:
        """Get category by ID.

        Raises:
            NotFoundError: If the category does not exist
        """
        return self._fetch(category_id)

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories, ordered by name."""
        return self.db.list_categories()

    def update_category(self, category_id: int, name: Any) -> CategoryEntity:
        """Rename a category.

        Raises:
            MissingFieldsError: If name is missing or blank
            NotFoundError: If the category does not exist
            NotModifiedError: If the name is unchanged
            ConflictError: If another category already uses the name
        """
        name = clean_name(name)
        current = self._fetch(category_id)
        DuplicateChecker.ensure_modified({"name": current.name}, {"name": name})
        self.duplicates.check_category(name, exclude_id=category_id)

        if self.db.update_category(category_id, name) == 0:
            raise NotFoundError(category_not_found(category_id))
        return self._fetch(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that nothing references.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If sub-categories, movements or transfers use it
        """
        self._fetch(category_id)

        dependents = {
            "sub-category": len(self.db.list_sub_categories(category_id=category_id)),
            "movement": self.db.count_movements(category_id=category_id),
            "transfer": self.db.count_transfers(category_id=category_id),
        }
        if any(dependents.values()):
            raise DependencyError(delete_blocked("category", category_id, dependents))

        if self.db.delete_category(category_id) == 0:
            raise NotFoundError(category_not_found(category_id))

    def _fetch(self, category_id: int) -> CategoryEntity:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category


class SubCategoryService:
    """Service for managing sub-categories."""

    def __init__(self, db: Database, duplicates: Optional[DuplicateChecker] = None):
        """Initialize sub-category service.

        Args:
            db: Database instance
            duplicates: Duplicate checker (built from db if omitted)
        """
        self.db = db
        self.duplicates = duplicates or DuplicateChecker(db)

    def create_sub_category(self, name: Any, category_id: Optional[int]) -> SubCategoryEntity:
        """Create a sub-category under an existing category.

        Raises:
            MissingFieldsError: If name or category_id is missing
            NotFoundError: If the parent category does not exist
            ConflictError: If the name is already taken in its scope
        """
        missing = []
        try:
            name = clean_name(name)
        except MissingFieldsError:
            missing.append("name")
        if category_id is None:
            missing.append("category_id")
        if missing:
            raise MissingFieldsError(missing)

        self._require_category(category_id)
        self.duplicates.check_sub_category(name, category_id)

        sub_category_id = self.db.create_sub_category(name=name, category_id=category_id)
        return self._fetch(sub_category_id)

    def get_sub_category(self, sub_category_id: int) -> SubCategoryEntity:
        """Get sub-category by ID.

        Raises:
            NotFoundError: If the sub-category does not exist
        """
        return self._fetch(sub_category_id)

    def list_sub_categories(self, category_id: Optional[int] = None) -> list[SubCategoryEntity]:
        """List sub-categories, optionally only those of one category."""
        return self.db.list_sub_categories(category_id=category_id)

    def update_sub_category(
        self,
        sub_category_id: int,
        name: Any = None,
        category_id: Optional[int] = None,
    ) -> SubCategoryEntity:
        """Rename and/or move a sub-category.

        Omitted fields keep their stored value.

        Raises:
            ValidationError: If neither field is given
            NotFoundError: If the sub-category or the new parent does not exist
            NotModifiedError: If nothing would change
            DependencyError: If the parent changes while movements use the sub-category
            ConflictError: If the name is already taken in its scope
        """
        if name is None and category_id is None:
            raise ValidationError("No fields to update")

        current = self._fetch(sub_category_id)
        new_name = clean_name(name) if name is not None else current.name
        new_category_id = category_id if category_id is not None else current.category_id

        DuplicateChecker.ensure_modified(
            {"name": current.name, "category_id": current.category_id},
            {"name": new_name, "category_id": new_category_id},
        )
        if new_category_id != current.category_id:
            self._require_category(new_category_id)
            # Movements carry the parent category alongside the sub-category
            movement_count = self.db.count_movements(sub_category_id=sub_category_id)
            if movement_count > 0:
                raise DependencyError(
                    f"Cannot move sub-category {sub_category_id} to another category: "
                    f"{movement_count} movement{'s' if movement_count != 1 else ''} use it"
                )
        self.duplicates.check_sub_category(new_name, new_category_id, exclude_id=sub_category_id)

        if self.db.update_sub_category(sub_category_id, new_name, new_category_id) == 0:
            raise NotFoundError(sub_category_not_found(sub_category_id))
        return self._fetch(sub_category_id)

    def delete_sub_category(self, sub_category_id: int) -> None:
        """Delete a sub-category no movement uses.

        Raises:
            NotFoundError: If the sub-category does not exist
            DependencyError: If movements reference it
        """
        self._fetch(sub_category_id)

        movement_count = self.db.count_movements(sub_category_id=sub_category_id)
        if movement_count > 0:
            raise DependencyError(
                delete_blocked("sub-category", sub_category_id, {"movement": movement_count})
            )

        if self.db.delete_sub_category(sub_category_id) == 0:
            raise NotFoundError(sub_category_not_found(sub_category_id))

    def _require_category(self, category_id: int) -> None:
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    def _fetch(self, sub_category_id: int) -> SubCategoryEntity:
        sub_category = self.db.get_sub_category(sub_category_id)
        if sub_category is None:
            raise NotFoundError(sub_category_not_found(sub_category_id))
        return sub_category
