from fastapi import APIRouter
from api.endpoints.sessions import router as sessions_router
from api.endpoints.upload import router as upload_router
from api.endpoints.job_description import router as job_description_router
from api.endpoints.analyze import router as analyze_router
from api.endpoints.result import router as result_router
from api.endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(sessions_router, tags=["sessions"])
api_router.include_router(upload_router, tags=["upload"])
api_router.include_router(job_description_router, tags=["job-description"])
api_router.include_router(analyze_router, tags=["analyze"])
api_router.include_router(result_router, tags=["result"])
api_router.include_router(health_router, tags=["health"])
