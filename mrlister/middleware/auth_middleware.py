"""
Caller identification dependencies.

Marketplace and account authentication is mocked: the caller identifies
itself with an ``X-User-Id`` header holding a positive integer user id.
Every inventory and export endpoint is scoped to that id.

Usage in endpoints:
    @router.get("/protected")
    async def protected_route(user_id: int = Depends(get_current_user_id)):
        return {"user_id": user_id}
"""

import logging

from fastapi import Header, HTTPException, status

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


def parse_user_id(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        user_id = int(raw.strip())
    except ValueError:
        return None
    return user_id if user_id > 0 else None


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> int:
    """
    FastAPI dependency: the calling user's id.

    Raises:
        HTTPException 401 if the header is missing or not a positive integer.
    """
    user_id = parse_user_id(x_user_id)
    if user_id is None:
        logger.warning(f"Rejected request with {USER_ID_HEADER}={x_user_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing or invalid {USER_ID_HEADER} header",
        )
    return user_id

