import json

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, Response

from hr_assistant.core.rate_limit import analysis_rate_limit
from hr_assistant.services.forwarding_service import forward_analysis

router = APIRouter()


@router.post(
    "/analyze",
    summary="Forward an analysis request",
    description="Injects the AI provider credential, renders the prompt for `type` and returns the provider's JSON.",
)
@analysis_rate_limit()
async def analyze(request: Request):
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Request body must be valid JSON."},
        )

    result = await forward_analysis(payload)
    return Response(content=result.body, status_code=result.status_code, media_type="application/json")


@router.api_route("/analyze", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def analyze_method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method Not Allowed"},
        headers={"Allow": "POST"},
    )
