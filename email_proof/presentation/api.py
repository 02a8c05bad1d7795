from fastapi import APIRouter

from email_proof.presentation.routers.v1.email import router as email_router
from email_proof.presentation.routes.health import router as health_router

api = APIRouter()
api.include_router(health_router)

# Add all v1 routers here
routers = (email_router,)
for router in routers:
    api.include_router(router, prefix="/v1")
