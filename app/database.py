import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorGridFSBucket
from pymongo import ASCENDING, DESCENDING

current_dir = Path(__file__).resolve().parent  # app/
backend_dir = current_dir.parent
env_path = backend_dir / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "jobboard")

client = None
db = None
fs_bucket = None


async def connect_to_mongo():
    global client, db, fs_bucket

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(MONGO_URI, tz_aware=True)
    db = client[DATABASE_NAME]
    fs_bucket = AsyncIOMotorGridFSBucket(db, bucket_name="resumes")
    await client.admin.command("ping")

    if "mongodb+srv" in MONGO_URI:
        logger.info(f"Connected to MongoDB Atlas (database={DATABASE_NAME})")
    else:
        logger.info(f"Connected to MongoDB (database={DATABASE_NAME})")

    await ensure_indexes(db)


async def ensure_indexes(database):
    """Unique indexes backing the no-duplicate invariants."""
    await database.users.create_index([("email", ASCENDING)], unique=True)
    await database.applications.create_index(
        [("job_id", ASCENDING), ("applicant_id", ASCENDING)],
        unique=True,
        name="one_application_per_applicant",
    )
    await database.applications.create_index([("applicant_id", ASCENDING), ("applied_at", DESCENDING)])
    await database.resume_checks.create_index(
        [("user_id", ASCENDING), ("check_day", ASCENDING)],
        unique=True,
        name="one_check_per_day",
    )
    await database.resume_checks.create_index([("user_id", ASCENDING), ("checked_at", DESCENDING)])
    logger.debug("MongoDB indexes ensured")


async def close_mongo_connection():
    if client:
        client.close()
        logger.info("MongoDB connection closed")


def get_fs_bucket():
    return fs_bucket


def get_db():
    return db
