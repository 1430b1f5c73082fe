# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_storage_client, require_admin
from storefront.data.database import get_db
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import ProductIn, ProductOut
from storefront.services.product_service import ProductService
from storefront.services.storage_client import StorageClient

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(category: str | None = Query(None), db: Session = Depends(get_db)):
    return ProductService(db).list_products(category)


@router.get("/search")
def search_products(query: str | None = Query(None), db: Session = Depends(get_db)):
    products = ProductService(db).search_products(query)
    return {"products": [ProductOut.model_validate(p) for p in products]}


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ProductOut, status_code=201, dependencies=[Depends(require_admin)])
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return ProductService(db).create_product(payload)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: str, payload: ProductIn, db: Session = Depends(get_db)):
    try:
        return ProductService(db).update_product(product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    storage_client: StorageClient = Depends(get_storage_client),
):
    try:
        ProductService(db, storage_client=storage_client).delete_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
