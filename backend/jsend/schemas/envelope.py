from typing import Any, Literal

from pydantic import BaseModel, Field


class JSendBody(BaseModel):
    code: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    message: str | None = None
    status: Literal["success", "fail", "error"]
