# app/routes/seed.py

"""Sample data route."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.decorators import timed
from app.dependencies import SeedServiceDep
from app.managers.rate_limiter import limiter
from app.schemas import MessageResponse

router = APIRouter(prefix="/seeddata", tags=["🌱 Seed"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Insert sample portfolio data",
    description="Inserts one portfolio user with projects and skills into an empty store.",
    responses={
        200: {
            "content": {"application/json": {"example": {"message": "Sample data inserted."}}},
        },
        400: {
            "description": "Store already has portfolio users",
            "content": {"application/json": {"example": {"detail": "Sample data already exists."}}},
        },
    },
    operation_id="seed_data",
)
@timed("/seeddata")
@limiter.limit("5/minute")
async def seed_data(request: Request, service: SeedServiceDep) -> MessageResponse:
    return await service.seed()
