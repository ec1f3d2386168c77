"""SQLAlchemy implementation of CategoryRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finledger.domain.models import Category, CategoryType
from finledger.repositories.sqlalchemy.orm_models import CategoryORM


class SqlAlchemyCategoryRepository:
    """SQLAlchemy-backed category repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, category: Category) -> Category:
        orm_category = CategoryORM(
            category_id=category.category_id,
            owner_id=category.owner_id,
            name=category.name,
            category_type=category.category_type,
            is_default=category.is_default,
            color=category.color,
        )
        self._db.add(orm_category)
        self._db.flush()
        return self._to_domain(orm_category)

    def get(self, owner_id: str, category_id: str) -> Optional[Category]:
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category_id,
            CategoryORM.owner_id == owner_id,
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def get_by_name(
        self,
        owner_id: str,
        name: str,
        category_type: CategoryType,
    ) -> Optional[Category]:
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.owner_id == owner_id,
            CategoryORM.name == name,
            CategoryORM.category_type == category_type,
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def list_by_owner(
        self,
        owner_id: str,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        query = self._db.query(CategoryORM).filter(CategoryORM.owner_id == owner_id)
        if category_type is not None:
            query = query.filter(CategoryORM.category_type == category_type)
        query = query.order_by(CategoryORM.category_type, CategoryORM.name)
        return [self._to_domain(c) for c in query.all()]

    @staticmethod
    def _to_domain(orm: CategoryORM) -> Category:
        return Category(
            category_id=orm.category_id,
            owner_id=orm.owner_id,
            name=orm.name,
            category_type=orm.category_type,
            is_default=orm.is_default,
            color=orm.color,
        )
