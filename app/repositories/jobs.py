# ========================================
# app/repositories/jobs.py
# ========================================

from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from app.models.job import Job
from app.repositories.common import contains, to_object_id, utcnow


class JobRepository:
    """Job records in the `jobs` collection."""

    def __init__(self, database):
        self.collection = database.jobs

    async def get(self, job_id: str) -> Optional[Job]:
        oid = to_object_id(job_id)
        if oid is None:
            return None
        return Job.from_mongo(await self.collection.find_one({"_id": oid}))

    async def create(self, job: Job) -> Job:
        now = utcnow()
        job = job.model_copy(update={"created_at": now, "updated_at": now})
        result = await self.collection.insert_one(job.to_mongo())
        return job.model_copy(update={"id": str(result.inserted_id)})

    async def update(self, job_id: str, fields: dict) -> Optional[Job]:
        oid = to_object_id(job_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Job.from_mongo(doc)

    async def delete(self, job_id: str) -> bool:
        oid = to_object_id(job_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count == 1

    async def search(
        self,
        title: Optional[str] = None,
        location: Optional[str] = None,
        category: Optional[str] = None,
        job_type: Optional[str] = None,
        limit: int = 100,
    ) -> List[Job]:
        query = {}
        if title:
            query["title"] = contains(title)
        if location:
            query["location"] = contains(location)
        if category:
            query["category"] = category
        # job type (remote, full-time, ...) lives in the free-text constraints
        if job_type:
            query["constraints"] = contains(job_type)

        docs = await self.collection.find(query).sort("created_at", DESCENDING).to_list(limit)
        return [Job.from_mongo(doc) for doc in docs]

    async def list_by_recruiter(self, recruiter_id: str) -> List[Job]:
        docs = await self.collection.find({"recruiter_id": recruiter_id}).sort("created_at", DESCENDING).to_list(1000)
        return [Job.from_mongo(doc) for doc in docs]

    async def list_all(self, limit: int = 1000) -> List[Job]:
        docs = await self.collection.find({}).sort("created_at", DESCENDING).to_list(limit)
        return [Job.from_mongo(doc) for doc in docs]

    async def take_opening(self, job_id: str) -> Optional[Job]:
        """
        Consume one opening if any is left.

        The filter and the decrement run as a single server-side operation,
        so two concurrent callers can never both take the last opening.
        Returns the updated job, or None when no opening was available.
        """
        oid = to_object_id(job_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid, "openings": {"$gt": 0}},
            {"$inc": {"openings": -1}, "$set": {"updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Job.from_mongo(doc)

    async def count(self) -> int:
        return await self.collection.count_documents({})
