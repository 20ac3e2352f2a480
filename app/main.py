# ========================================
# app/main.py
# ========================================

import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.database import connect_to_mongo, close_mongo_connection
from app.utils.errors import JobBoardError
from app.utils.logger import configure_logging

# ===========================
# IMPORT ALL ROUTERS
# ===========================

from app.routes.user import router as user_router
from app.routes.job import router as job_router
from app.routes.application import router as application_router
from app.routes.resume import router as resume_router
from app.routes.admin import router as admin_router

load_dotenv()
configure_logging()

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="Job Board API",
    description="Job postings, applications with openings tracking, and ATS resume scoring",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ===========================
# CORS MIDDLEWARE
# ===========================
raw_origins = os.getenv("ALLOWED_ORIGINS", "")
origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# ERRORS
# ===========================


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code} {exc.category}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB on startup"""
    await connect_to_mongo()


@app.on_event("shutdown")
async def stop_db():
    await close_mongo_connection()

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(user_router)
app.include_router(job_router)
app.include_router(application_router)
app.include_router(resume_router)
app.include_router(admin_router)

# ===========================
# ROOT ENDPOINTS
# ===========================


@app.get("/")
async def root():
    return {
        "status": "Job Board API Running",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "authentication": ["/users/register", "/users/login", "/users/profile"],
            "applicant": [
                "/jobs/{id}/apply",
                "/applications/my-applications",
                "/resume/check",
                "/resume/history",
                "/resume/score",
            ],
            "recruiter": [
                "/jobs (POST/PUT)",
                "/jobs/my-jobs",
                "/jobs/{id}/applications",
                "/applications/all-applications",
                "/applications/{id}/status",
            ],
            "admin": ["/admin/users", "/admin/jobs", "/admin/analytics"],
            "public": ["/jobs (GET with filters)", "/jobs/{job_id}"],
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": "1.0.0"}
