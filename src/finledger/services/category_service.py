"""Category service."""

import logging
import uuid
from typing import Optional

from finledger.core.exceptions import NotFoundError, ValidationError
from finledger.domain.models import Category, CategoryType
from finledger.repositories.protocols import UnitOfWork, UnitOfWorkFactory
from finledger.services.posting import run_atomic, run_read

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50


class CategoryService:
    """Income and expense categories; names are unique per owner and type."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def create_category(
        self,
        owner_id: str,
        name: str,
        category_type: CategoryType,
        color: Optional[str] = None,
        is_default: bool = False,
    ) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Category name cannot exceed {MAX_NAME_LENGTH} characters")
        category_type = CategoryType(category_type)

        def work(uow: UnitOfWork) -> Category:
            if uow.categories.get_by_name(owner_id, name, category_type):
                raise ValidationError(
                    f"A {category_type.value} category named '{name}' already exists"
                )
            return uow.categories.add(
                Category(
                    category_id=str(uuid.uuid4()),
                    owner_id=owner_id,
                    name=name,
                    category_type=category_type,
                    is_default=is_default,
                    color=color,
                )
            )

        category = run_atomic(self._uow_factory, work)
        logger.info("Created %s category %s for owner %s", category_type.value, category.category_id, owner_id)
        return category

    def get_category(self, owner_id: str, category_id: str) -> Category:
        category = run_read(self._uow_factory, lambda uow: uow.categories.get(owner_id, category_id))
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(
        self,
        owner_id: str,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        if category_type is not None:
            category_type = CategoryType(category_type)
        return run_read(
            self._uow_factory,
            lambda uow: uow.categories.list_by_owner(owner_id, category_type),
        )
