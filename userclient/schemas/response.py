from pydantic import BaseModel
from typing import Optional, Any


class RequestFailure(BaseModel):
    """
    Structured description of a failed call to the users API.
    """
    method: Optional[str] = None
    url: Optional[str] = None
    status_code: Optional[int] = None
    response_body: Optional[Any] = None
    cause_type: str
    cause_message: str
