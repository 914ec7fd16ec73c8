from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile

from catalog_service.application.services import ItemService
from catalog_service.core.domain.models import Item, ItemCreated, Items, Message

router = APIRouter()


# Dependency Injection Helper
def get_service(request: Request) -> ItemService:
    return request.app.state.item_service


@router.get("/", response_model=Message)
def root():
    return Message(message="Hello, world!!")


@router.post("/items", response_model=ItemCreated)
def add_item(
    name: str = Form(""),
    category: str = Form(""),
    image: Optional[UploadFile] = File(None),
    service: ItemService = Depends(get_service),
):
    data = image.file.read() if image is not None else b""
    item_id = service.submit_item(name, category, data)
    return ItemCreated(message=f"item received: {name}", id=item_id)


@router.get("/items", response_model=Items)
def list_items(service: ItemService = Depends(get_service)):
    return Items(items=service.list_items())


@router.get("/items/{item_id}", response_model=Item)
def read_item(item_id: str, service: ItemService = Depends(get_service)):
    return service.get_item(item_id)


@router.get("/search", response_model=Items)
def search_items(
    keyword: str = Query("", description="Substring to look for in item names"),
    service: ItemService = Depends(get_service),
):
    return Items(items=service.search_items(keyword))


@router.get("/image/{image_filename}")
def get_image(image_filename: str, service: ItemService = Depends(get_service)):
    return Response(content=service.get_image(image_filename), media_type="image/jpeg")
