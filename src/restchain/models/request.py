from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class RequestDescriptor(BaseModel):
    """Plain description of a request, accepted by ``restchain.request``."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    method: Optional[str] = None
    url: Optional[str] = None
    body: Any = None
    headers: Optional[Dict[str, str]] = None
    query: Optional[Dict[str, Any]] = None
    type: Optional[str] = None
    charset: Optional[str] = None
