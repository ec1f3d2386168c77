"""Category repository protocol."""

from typing import Protocol, Optional

from finledger.domain.models import Category, CategoryType


class CategoryRepository(Protocol):
    """Interface for category data access."""

    def add(self, category: Category) -> Category:
        ...

    def get(self, owner_id: str, category_id: str) -> Optional[Category]:
        ...

    def get_by_name(
        self,
        owner_id: str,
        name: str,
        category_type: CategoryType,
    ) -> Optional[Category]:
        ...

    def list_by_owner(
        self,
        owner_id: str,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        ...
