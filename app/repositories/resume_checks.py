# ========================================
# app/repositories/resume_checks.py
# ========================================

from datetime import datetime
from typing import List

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from app.models.resume_check import ResumeCheck
from app.utils.errors import ConflictError


class ResumeCheckRepository:
    def __init__(self, database):
        self.collection = database.resume_checks

    async def count_between(self, user_id: str, start: datetime, end: datetime) -> int:
        return await self.collection.count_documents(
            {"user_id": user_id, "checked_at": {"$gte": start, "$lt": end}}
        )

    async def create(self, check: ResumeCheck) -> ResumeCheck:
        try:
            result = await self.collection.insert_one(check.to_mongo())
        except DuplicateKeyError:
            raise ConflictError(f"Resume already checked on {check.check_day}")
        return check.model_copy(update={"id": str(result.inserted_id)})

    async def recent(self, user_id: str, limit: int = 10) -> List[ResumeCheck]:
        docs = await self.collection.find({"user_id": user_id}).sort("checked_at", DESCENDING).to_list(limit)
        return [ResumeCheck.from_mongo(doc) for doc in docs]
