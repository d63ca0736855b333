from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool = True
    data: Any = None
    message: Optional[str] = None
    warning: Optional[str] = None


class CheckoutIn(BaseModel):
    # checked against the plan table in the handler
    plan: Any = None
