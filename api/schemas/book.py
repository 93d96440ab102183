# api/schemas/book.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

class UserRef(BaseModel):
    id: int
    handle: str

    model_config = ConfigDict(from_attributes=True)

class SharingOptions(BaseModel):
    for_sale: bool = False
    for_exchange: bool = False
    for_borrow: bool = False
    for_discussion: bool = False

class BookCreate(BaseModel):
    title: str
    author: str
    description: str
    sharing_options: SharingOptions = SharingOptions()

class BookUpdate(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    sharing_options: Optional[SharingOptions] = None

class Book(BaseModel):
    id: int
    title: str
    author: str
    description: str
    owner: UserRef
    liked_by: List[UserRef] = []
    sharing_options: SharingOptions
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
