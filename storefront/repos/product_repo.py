# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category: str | None = None) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc())
        if category:
            stmt = stmt.where(ProductModel.category == category)
        return list(self.db.execute(stmt).scalars().all())

    def search_products(self, query: str) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(
                or_(
                    ProductModel.name.icontains(query, autoescape=True),
                    ProductModel.description.icontains(query, autoescape=True),
                )
            )
            .order_by(ProductModel.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
