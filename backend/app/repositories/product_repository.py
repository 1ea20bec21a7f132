from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.sorting import apply_order_by
from app.models.product import Product, ProductCategory
from app.schemas.product import ProductCreate, ProductUpdate


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self, category: ProductCategory | None = None, search: str | None = None
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category.value)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(Product.name.ilike(pattern), Product.description.ilike(pattern))
            )
        return query

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        category: ProductCategory | None = None,
        search: str | None = None,
        order_by: str | None = None,
    ) -> list[Product]:
        query = apply_order_by(self._filtered(category, search), Product, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, category: ProductCategory | None = None, search: str | None = None) -> int:
        return self._filtered(category, search).count()

    def get_by_id(self, product_id: UUID) -> Product | None:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_by_category(self, category: ProductCategory) -> list[Product]:
        """Every product of one category, alphabetically."""
        return (
            self.db.query(Product)
            .filter(Product.category == category.value)
            .order_by(Product.name.asc())
            .all()
        )

    def create(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def create_many(self, items: list[ProductCreate]) -> list[Product]:
        """Insert a batch of products in a single commit."""
        products = [Product(**data.model_dump()) for data in items]
        self.db.add_all(products)
        self.db.commit()
        for product in products:
            self.db.refresh(product)
        return products

    def update(self, product_id: UUID, data: ProductUpdate) -> Product | None:
        product = self.get_by_id(product_id)
        if not product:
            return None
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product_id: UUID) -> bool:
        product = self.get_by_id(product_id)
        if not product:
            return False
        self.db.delete(product)
        self.db.commit()
        return True
