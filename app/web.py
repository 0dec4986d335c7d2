from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api import get_dashboard
from services.dashboard import DashboardService
from services.exporter import header_label
from services.pickers import FixedPathPicker


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
def ui_index(
    request: Request,
    file_path: Optional[str] = Query(default=None),
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    result = None
    columns: list[str] = []
    if file_path:
        result = dashboard.load_database_log(FixedPathPicker(Path(file_path).expanduser()))
        if result.success and result.data:
            columns = list(result.data[0].keys())

    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "result": result,
            "columns": columns,
            "labels": {name: header_label(name) for name in columns},
            "file_path": file_path or "",
            "backup_path": dashboard.get_initial_backup_path(),
        },
    )
