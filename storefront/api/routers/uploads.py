# storefront/api/routers/uploads.py
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from storefront.api.deps import get_storage_client, require_admin
from storefront.domain.schemas import UploadOut
from storefront.services.storage_client import StorageClient

router = APIRouter(prefix="/uploads", tags=["uploads"], dependencies=[Depends(require_admin)])


@router.post("/images", response_model=UploadOut)
def upload_image(
    file: UploadFile | None = File(None),
    storage_client: StorageClient = Depends(get_storage_client),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No se proporcionó ningún archivo")

    result = storage_client.upload_image(file.filename, file.file.read(), file.content_type)

    if not result.ok:
        raise HTTPException(status_code=500, detail=result.error)

    return UploadOut(success=True, url=result.value)
