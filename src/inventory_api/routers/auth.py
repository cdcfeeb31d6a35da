from fastapi import APIRouter, Depends

from inventory_api.core.errors import ConflictError, ValidationError
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.routers.deps import get_uow
from inventory_api.schemas.user import RegisterIn, LoginIn, AuthOut
from inventory_api.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthOut)
async def register(payload: RegisterIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return await AuthService(uow).register(payload)
    except ConflictError as exc:
        # registration reports duplicates as plain bad input
        raise ValidationError(exc.message) from exc

@router.post("/login", response_model=AuthOut)
async def login(payload: LoginIn, uow: UnitOfWork = Depends(get_uow)):
    return await AuthService(uow).login(payload)
