# api/schemas/common.py
from typing import Generic, List, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar('DataT')

class PaginatedResponse(BaseModel, Generic[DataT]):
    """
    Generic schema for paginated API responses.
    """
    page: int
    total_pages: int
    total_items: int
    data: List[DataT]

class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either form on input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
