from typing import Optional

import structlog

from app.core.errors import forbidden
from app.core.messages import ErrorMessageKeys

logger = structlog.get_logger(__name__)

def ensure_owner(owner_id: Optional[int], actor_id: int, key: ErrorMessageKeys, resource: str = "") -> None:
    """Raise 403 unless ``actor_id`` is the resource's single authority.

    Callers look the resource up first, so a missing resource is a 404 and
    never reaches this check.
    """
    if owner_id is None or owner_id != actor_id:
        logger.info("ownership_check_failed", resource=resource, owner_id=owner_id, actor_id=actor_id)
        raise forbidden(key)
