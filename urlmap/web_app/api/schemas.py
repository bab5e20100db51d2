"""Pydantic schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    original_url: str = Field(..., description="The URL to shorten")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"original_url": "https://example.com/very/long/path/to/resource"}
            ]
        }
    }


class MappingResponse(BaseModel):
    """A short code and its statistics."""
    
    code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    visit_count: int = Field(..., description="Number of redirects served")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "Ax7Qp2",
                    "short_url": "http://localhost:8080/Ax7Qp2",
                    "original_url": "https://example.com/a",
                    "created_at": "2024-03-20T12:00:00Z",
                    "visit_count": 0
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human readable message")
    status: int = Field(..., description="HTTP status code")
