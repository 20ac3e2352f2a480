# ========================================
# app/repositories/users.py
# ========================================

from typing import List, Optional

from pymongo.errors import DuplicateKeyError

from app.models.user import User
from app.repositories.common import to_object_id, utcnow
from app.utils.errors import ConflictError


class UserRepository:
    def __init__(self, database):
        self.collection = database.users

    async def get(self, user_id: str) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return User.from_mongo(await self.collection.find_one({"_id": oid}))

    async def get_by_email(self, email: str) -> Optional[User]:
        return User.from_mongo(await self.collection.find_one({"email": email}))

    async def create(self, user: User) -> User:
        user = user.model_copy(update={"created_at": utcnow()})
        try:
            result = await self.collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            raise ConflictError("User already exists")
        return user.model_copy(update={"id": str(result.inserted_id)})

    async def set_blocked(self, user_id: str, blocked: bool) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await self.collection.update_one({"_id": oid}, {"$set": {"is_blocked": blocked}})
        return result.matched_count == 1

    async def list_all(self, limit: int = 1000) -> List[User]:
        docs = await self.collection.find({}).to_list(limit)
        return [User.from_mongo(doc) for doc in docs]

    async def count(self, role: Optional[str] = None) -> int:
        return await self.collection.count_documents({"role": role} if role else {})
