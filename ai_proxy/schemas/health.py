"""Health and permission-echo schemas."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    service: str
    status: str
    project: str
    timestamp: str
    note: str


class PermissionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    project: str
    service_account: str = Field(..., alias="serviceAccount")
    timestamp: str
