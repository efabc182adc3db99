"""Request and response schemas for the API."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Request to analyze one deposit dispute."""
    intake: dict[str, Any] = Field(..., description="Intake form payload (nested or flat)")
    today: Optional[date] = Field(
        default=None,
        description="Civil date to analyze as of (YYYY-MM-DD); defaults to today",
    )
    lease_text: Optional[str] = Field(default=None, description="Raw lease text, if ingested")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "intake": {
                        "case_id": "DD-2024-0042",
                        "move_out_information": {
                            "move_out_date": "2024-01-01",
                            "forwarding_address_provided": "yes",
                        },
                        "security_deposit_information": {
                            "deposit_amount": "1500",
                            "deposit_returned": "no",
                        },
                        "post_move_out_communications": {
                            "itemized_deductions_received": "no",
                        },
                    },
                    "today": "2024-03-15",
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    engine_version: str
    reference_pack: str
    reference_data_hash: str


class ErrorResponse(BaseModel):
    """Structured error response."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    case_id: Optional[str] = None
    request_id: Optional[str] = None
