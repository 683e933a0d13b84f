from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ewave.core.db import get_db
from ewave.schemas.user import LoginRequest, RegisterOut, UserDataOut
from ewave.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/user", response_model=UserDataOut)
async def sign_in(req: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate, then return purchase history and recommendations for the user."""
    service = UserService(db)
    user_id = await service.authenticate_core(req.username, req.password)
    return await service.get_user_data_core(user_id)


@router.post("/register", response_model=RegisterOut)
async def register_user(req: LoginRequest, db: AsyncSession = Depends(get_db)):
    user_id = await UserService(db).register_core(req.username, req.password)
    return RegisterOut(userId=user_id)
