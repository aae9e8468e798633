from fastapi import APIRouter

from pizza_pension.api.v1.schemas.dashboard import StatusResponse

router = APIRouter()

@router.get("/health", tags=["Health Check"], response_model=StatusResponse)
async def health_check():
    return StatusResponse(status="ok")
