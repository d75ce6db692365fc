from fastapi import APIRouter

from hr_assistant.core.session_store import session_count

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "active_sessions": session_count()}
