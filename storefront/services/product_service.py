# storefront/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import ProductIn
from storefront.repos.product_repo import ProductRepo
from storefront.services.storage_client import StorageClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog (menu) - odczyt publiczny, zmiany tylko z panelu admina."""

    def __init__(self, db: Session, storage_client: StorageClient | None = None):
        self.repo = ProductRepo(db)
        self.storage_client = storage_client

    #query
    def list_products(self, category: str | None = None) -> List[ProductModel]:
        return self.repo.list_products(category)

    def search_products(self, query: str | None) -> List[ProductModel]:
        if not query or not query.strip():
            return []
        return self.repo.search_products(query.strip())

    def get_product(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Producto no encontrado")
        return product

    #commands
    def create_product(self, payload: ProductIn) -> ProductModel:
        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Utworzono produkt {created.id} ({created.name})")
        return created

    def update_product(self, product_id: str, payload: ProductIn) -> ProductModel:
        product = self.get_product(product_id)

        for field, value in payload.model_dump().items():
            setattr(product, field, value)

        logger.info(f"Aktualizacja produktu {product_id}")
        return self.repo.save(product)

    def delete_product(self, product_id: str) -> None:
        product = self.get_product(product_id)

        #najpierw zdjecie ze storage, jesli jest nasze
        if self.storage_client and self.storage_client.owns(product.image):
            removed = self.storage_client.remove_image(product.image)
            if not removed.ok:
                logger.warning(f"Nie udalo sie usunac zdjecia produktu {product_id}: {removed.error}")

        self.repo.delete_product(product)
        logger.info(f"Usunieto produkt {product_id}")
