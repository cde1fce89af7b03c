# api/routes/titles.py

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from kushon.exceptions import NotFoundError, ValidationError
from kushon.models.catalog import TitleCreate, TitleUpdate
from kushon.services.catalog_service import CatalogService
from api.dependencies import get_catalog_service
from api.schemas.title import CoverImageUpdate, Title, TitleWithVolumes, Volume

router = APIRouter(prefix="/titles", tags=["titles"])

@router.post("", response_model=TitleWithVolumes, status_code=status.HTTP_201_CREATED)
def create_title(data: TitleCreate, service: CatalogService = Depends(get_catalog_service)):
    try:
        return service.create_title(data)
    except (NotFoundError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("", response_model=List[TitleWithVolumes])
def list_titles(service: CatalogService = Depends(get_catalog_service)):
    return service.list_titles()

@router.get("/{title_id}", response_model=TitleWithVolumes)
def get_title(title_id: int, service: CatalogService = Depends(get_catalog_service)):
    try:
        return service.get_title(title_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{title_id}/volumes", response_model=List[Volume])
def get_title_volumes(title_id: int, service: CatalogService = Depends(get_catalog_service)):
    try:
        return service.get_title_volumes(title_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{title_id}", response_model=TitleWithVolumes)
def update_title(title_id: int, data: TitleUpdate, service: CatalogService = Depends(get_catalog_service)):
    """
    Update a title. Volumes with numbers the title does not have yet are
    created and their subscribers are emailed after the response is sent.
    """
    try:
        return service.update_title(title_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{title_id}/cover", response_model=Title)
def update_title_cover(title_id: int, data: CoverImageUpdate, service: CatalogService = Depends(get_catalog_service)):
    try:
        return service.update_title_cover(title_id, data.cover_image)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{title_id}/volumes/{volume_number}/cover", response_model=Volume)
def update_volume_cover(
    title_id: int,
    volume_number: int,
    data: CoverImageUpdate,
    service: CatalogService = Depends(get_catalog_service)
):
    volume = service.update_volume_cover(title_id, volume_number, data.cover_image)
    if volume is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volume not found")
    return volume

@router.delete("/{title_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_title(title_id: int, service: CatalogService = Depends(get_catalog_service)):
    if not service.delete_title(title_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Title not found")
