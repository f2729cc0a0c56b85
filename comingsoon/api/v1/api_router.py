from fastapi import APIRouter
from comingsoon.api.v1.endpoints import contact

api_router = APIRouter(prefix="/api")

api_router.include_router(contact.router, tags=["Contact"])
