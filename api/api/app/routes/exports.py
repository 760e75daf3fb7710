from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..dependencies import WindowQueryParams
from ..services.dashboard_store import DashboardStore, get_store

router = APIRouter(prefix="/api/v1/export", tags=["exports"])


@router.get("/performance")
async def export_performance(
    params: WindowQueryParams = Depends(WindowQueryParams),
    store: DashboardStore = Depends(get_store),
) -> Response:
    window, as_of = params()
    filename, body = store.export_csv(window, as_of)
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
