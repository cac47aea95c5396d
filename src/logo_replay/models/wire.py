"""
History Wire Schema
===================

Pydantic models for the response body of the history service.

Input Contract (GET /api/v1/history):
    [
        {"time": "2019-09-12T10:00:00Z", "logo": "<base64 PNG>"},
        {"time": "2019-09-12T10:00:01Z", "logo": "<base64 PNG>"}
    ]

Guarantees (from the history service):
    - elements are in chronological order
    - the full history is returned on every call
"""

from typing import List

from pydantic import BaseModel, Field, RootModel


class HistoryEntry(BaseModel):
    """
    Schema for one element of the history response.

    Attributes:
        time: Timestamp label of the snapshot
        logo: Base64-encoded PNG image
    """

    time: str = Field(..., description="Timestamp label of the snapshot")
    logo: str = Field(..., description="Base64-encoded PNG image")

    model_config = {
        "json_schema_extra": {
            "example": {
                "time": "2019-09-12T10:00:00.000000Z",
                "logo": "iVBORw0KGgoAAAANSUhEUg...",
            }
        }
    }


class HistoryPayload(RootModel[List[HistoryEntry]]):
    """The full response body: a JSON array of entries."""
