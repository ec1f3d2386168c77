"""Category domain model."""

from dataclasses import dataclass
from typing import Optional

from finledger.domain.models.enums import CategoryType


@dataclass
class Category:
    """Income or expense classification owned by a user."""

    category_id: str
    owner_id: str
    name: str
    category_type: CategoryType
    is_default: bool = False
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.category_type, str):
            self.category_type = CategoryType(self.category_type)
