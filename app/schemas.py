"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    """Envelope returned by every user-facing operation instead of raising."""

    success: bool
    canceled: bool = Field(
        default=False, description="True when the user dismissed a file dialog."
    )
    message: Optional[str] = None
    data: Optional[List[Dict[str, Any]]] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None


class LoadLogRequest(BaseModel):
    """Database file chosen by the client; ``null`` means the picker was canceled."""

    file_path: Optional[str] = Field(default=None, description="Path to a .db log backup.")


class ExportCsvRequest(BaseModel):
    """Records to export and where to save them."""

    records: Optional[List[Dict[str, Any]]] = None
    destination: Optional[str] = Field(
        default=None,
        description="Target file or directory; ``null`` means the save dialog was canceled.",
    )


class BackupPathResponse(BaseModel):
    path: str
