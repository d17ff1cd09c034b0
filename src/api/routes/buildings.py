from fastapi import APIRouter, Depends, status

from src.depends import require_building_access
from src.domain.entities import AuthorizationDecision

router = APIRouter(prefix="/buildings", tags=["Buildings"])


@router.get(
    "/{building_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=AuthorizationDecision,
)
async def building_access(decision: AuthorizationDecision = Depends(require_building_access)):
    """
    Building Access Check

    Applies the building authorization guard to {building_id}. Building-scoped
    routes (visitors, pre-approvals, messaging) depend on the same guard.

    Raises:
        - 401 Unauthorized: SESSION_INVALID / SESSION_EXPIRED (re-authenticate)
        - 403 Forbidden: FORBIDDEN (building outside the session scope)
    """
    return decision
