# api/schemas/auth.py
from pydantic import BaseModel, ConfigDict

class Credentials(BaseModel):
    handle: str
    password: str

class RegisteredUser(BaseModel):
    id: int
    handle: str

    model_config = ConfigDict(from_attributes=True)

class Token(BaseModel):
    token: str
    token_type: str = "bearer"
