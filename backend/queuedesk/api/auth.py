"""Manager account endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.database import get_db
from queuedesk.models.user import User
from queuedesk.schemas.auth import LoginRequest, RegisterRequest, Token
from queuedesk.schemas.user import UserResponse
from queuedesk.services.account_service import AccountService
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> User:
    return await AccountService(db).register(request.email, request.password, request.full_name)


@router.post("/login", response_model=Token)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Exchange email and password for a bearer token."""
    return await AccountService(db).login(request.email, request.password)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)) -> User:
    return current_user
