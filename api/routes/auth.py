# api/routes/auth.py
from fastapi import APIRouter, Depends, status

from bookshare.auth import IdentityProvider
from api.dependencies import get_identity_provider
from api.schemas.auth import Credentials, RegisteredUser, Token

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=RegisteredUser, status_code=status.HTTP_201_CREATED)
def register(credentials: Credentials, identity_provider: IdentityProvider = Depends(get_identity_provider)):
    user = identity_provider.register(credentials.handle, credentials.password)
    return RegisteredUser.model_validate(user)

@router.post("/login", response_model=Token)
def login(credentials: Credentials, identity_provider: IdentityProvider = Depends(get_identity_provider)):
    return Token(token=identity_provider.login(credentials.handle, credentials.password))
