from typing import Any, Dict, Optional

from app.core.messages import SuccessMessageKeys

def success(data: Any = None, key: Optional[SuccessMessageKeys] = None, params: Optional[Dict[str, Any]] = None) -> dict:
    """Wrap ``data`` in the ``{success, message, data}`` envelope."""
    body: Dict[str, Any] = {"success": True, "data": data}
    if key is not None:
        body["message"] = {"key": key.value, "params": params or {}}
    return body
