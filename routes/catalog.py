from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from repositories.catalog_repository import list_categories, list_merchants, upsert_merchant
from routes.deps import get_user_id

router = APIRouter()


class MerchantCreate(BaseModel):
    name: str = Field(..., max_length=200)

    @field_validator("name")
    @classmethod
    def name_required(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("name required")
        return value


@router.get("/categories")
def get_categories(user_id: str = Depends(get_user_id)):
    return list_categories()


@router.get("/merchants")
def get_merchants(user_id: str = Depends(get_user_id)):
    return list_merchants()


@router.post("/merchants")
def add_merchant(merchant: MerchantCreate, user_id: str = Depends(get_user_id)):
    return upsert_merchant(merchant.name)
