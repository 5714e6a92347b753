from typing import Any, Dict, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

FilterValue = Union[str, int, float, bool, None, Sequence[Union[str, int]]]
Filters = Dict[str, FilterValue]


class AuthUser(BaseModel):
    """User returned by the Supabase Auth ``/user`` endpoint."""

    id: str = Field(description="Auth user UUID")
    email: Optional[str] = None
    role: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")
