# api/routes/publishers.py

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from kushon.exceptions import NotFoundError
from kushon.models.catalog import PublisherCreate
from kushon.services.catalog_service import CatalogService
from api.dependencies import get_catalog_service
from api.schemas.publisher import Publisher, PublisherWithTitles

router = APIRouter(prefix="/publishers", tags=["publishers"])

@router.get("", response_model=List[Publisher])
def list_publishers(service: CatalogService = Depends(get_catalog_service)):
    return service.list_publishers()

@router.post("", response_model=Publisher, status_code=status.HTTP_201_CREATED)
def create_publisher(data: PublisherCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_publisher(data.name, data.country)

@router.get("/{publisher_id}", response_model=PublisherWithTitles)
def get_publisher(publisher_id: int, service: CatalogService = Depends(get_catalog_service)):
    try:
        return service.get_publisher(publisher_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
