from fastapi import APIRouter
from salonbook.api.v1.endpoints import analytics, appointments, nail_techs, services, webhooks

api_router = APIRouter()
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(nail_techs.router, prefix="/nail-techs", tags=["nail-techs"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])
