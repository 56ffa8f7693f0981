# marketplace/models.py
from pydantic import BaseModel

from .core import Number


class Product(BaseModel):
    id: str
    name: str
    description: str
    price: Number
    quantity: Number
    category: str


class DeletedMessage(BaseModel):
    message: str
