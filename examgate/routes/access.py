"""Access code verification and content endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from examgate.dependencies import get_content_store
from examgate.models import AccessRequest
from examgate.services.content_store import ContentStore
from examgate.services.function_service import handle_access_request

router = APIRouter(prefix="/api/access", tags=["access"])


@router.post("")
def access(
    payload: AccessRequest,
    store: Annotated[ContentStore, Depends(get_content_store)],
) -> dict[str, object]:
    """Verify a code; load or save the test depending on the action."""
    return handle_access_request(payload, store)
