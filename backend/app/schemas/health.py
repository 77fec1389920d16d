"""Health check schema"""
from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    status: str  # 'ok' or 'degraded'
    db_ok: bool
