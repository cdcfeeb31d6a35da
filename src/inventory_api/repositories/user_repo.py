from sqlalchemy import select, exists
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_api.models.user import User

class UserRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalars().first()

    async def email_exists(self, email: str) -> bool:
        return bool(await self.session.scalar(select(exists().where(User.email == email))))

    async def username_exists(self, username: str) -> bool:
        return bool(await self.session.scalar(select(exists().where(User.username == username))))
