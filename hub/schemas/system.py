"""Pydantic schemas for host status endpoints."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SystemInfoResponse(BaseModel):
    """Snapshot of host vitals."""
    model_config = ConfigDict(populate_by_name=True)

    ip_address: str = Field(alias="ipAddress")
    cpu_usage: float = Field(alias="cpuUsage")
    memory_usage: float = Field(alias="memoryUsage")
    disk_usage: float = Field(alias="diskUsage")
    temperature: float
    uptime: str
    timestamp: int
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for the health check."""
    status: str = "ok"
    timestamp: str
