# ========================================
# app/repositories/applications.py
# ========================================

from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.models.application import PENDING, SELECTED, Application
from app.repositories.common import to_object_id, utcnow
from app.utils.errors import ConflictError


class ApplicationRepository:
    """Application records; (job_id, applicant_id) is unique at the index level."""

    def __init__(self, database):
        self.collection = database.applications

    async def get(self, application_id: str) -> Optional[Application]:
        oid = to_object_id(application_id)
        if oid is None:
            return None
        return Application.from_mongo(await self.collection.find_one({"_id": oid}))

    async def find_for(self, job_id: str, applicant_id: str) -> Optional[Application]:
        doc = await self.collection.find_one({"job_id": job_id, "applicant_id": applicant_id})
        return Application.from_mongo(doc)

    async def create(self, application: Application) -> Application:
        try:
            result = await self.collection.insert_one(application.to_mongo())
        except DuplicateKeyError:
            raise ConflictError("You have already applied to this job")
        return application.model_copy(update={"id": str(result.inserted_id)})

    async def transition(
        self, application_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> Optional[Application]:
        """Move a pending application to `status`; None if it was no longer pending."""
        doc = await self.collection.find_one_and_update(
            {"_id": to_object_id(application_id), "status": PENDING},
            {"$set": {"status": status, "rejection_reason": rejection_reason, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Application.from_mongo(doc)

    async def revert_to_pending(self, application_id: str) -> None:
        await self.collection.update_one(
            {"_id": to_object_id(application_id), "status": SELECTED},
            {"$set": {"status": PENDING, "rejection_reason": None, "updated_at": utcnow()}},
        )

    async def list_for_applicant(self, applicant_id: str) -> List[Application]:
        docs = await self.collection.find({"applicant_id": applicant_id}).sort("applied_at", DESCENDING).to_list(500)
        return [Application.from_mongo(doc) for doc in docs]

    async def list_for_jobs(self, job_ids: List[str]) -> List[Application]:
        docs = await self.collection.find({"job_id": {"$in": job_ids}}).sort("applied_at", DESCENDING).to_list(1000)
        return [Application.from_mongo(doc) for doc in docs]

    async def count(self) -> int:
        return await self.collection.count_documents({})
