"""HTTP route definitions for the service."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, status

from app.schemas import BackupPathResponse, ExportCsvRequest, LoadLogRequest, OperationResult
from services.dashboard import DashboardService, build_default_dashboard
from services.pickers import FixedPathPicker

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def _picker_for(raw_path: str | None) -> FixedPathPicker:
    if raw_path is None or not raw_path.strip():
        return FixedPathPicker(None)
    return FixedPathPicker(Path(raw_path.strip()).expanduser())


@router.post(
    "/logs/load",
    response_model=OperationResult,
    summary="Load the temp_logs table of a database file.",
)
def load_database_log(
    request: LoadLogRequest,
    dashboard: DashboardService = Depends(get_dashboard),
) -> OperationResult:
    return dashboard.load_database_log(_picker_for(request.file_path))


@router.post(
    "/logs/export",
    response_model=OperationResult,
    summary="Export log records to a CSV file.",
)
def export_to_csv(
    request: ExportCsvRequest,
    dashboard: DashboardService = Depends(get_dashboard),
) -> OperationResult:
    return dashboard.export_to_csv(request.records, _picker_for(request.destination))


@router.get(
    "/backup-path",
    response_model=BackupPathResponse,
    summary="Default directory hint for log backups.",
)
async def get_initial_backup_path(
    dashboard: DashboardService = Depends(get_dashboard),
) -> BackupPathResponse:
    return BackupPathResponse(path=str(dashboard.get_initial_backup_path()))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
