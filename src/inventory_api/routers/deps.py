# src/inventory_api/routers/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.errors import UnauthorizedError
from inventory_api.core.security import decode_access_token
from inventory_api.db.session import get_session
from inventory_api.db.unit_of_work import UnitOfWork

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_uow(session: AsyncSession = Depends(get_session)) -> UnitOfWork:
    return UnitOfWork(session)

def get_actor_claims(token: str = Depends(oauth2_scheme)) -> dict:
    try:
        payload = decode_access_token(token)
        # token was created with sub=user_id and extra {email, username, user_id}
        return {
            "user_id": int(payload.get("sub")),
            "username": payload.get("username"),
            "email": payload.get("email"),
        }
    except (UnauthorizedError, ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
