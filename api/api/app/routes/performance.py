from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import WindowQueryParams
from ..schemas import PerformanceResponse, SummaryResponse, WindowInfo
from ..services.dashboard_store import DashboardStore, get_store

router = APIRouter(prefix="/api/v1", tags=["performance"])


@router.get("/windows", response_model=list[WindowInfo])
async def windows(store: DashboardStore = Depends(get_store)) -> list[WindowInfo]:
    return store.windows()


@router.get("/performance", response_model=PerformanceResponse)
async def performance(
    params: WindowQueryParams = Depends(WindowQueryParams),
    store: DashboardStore = Depends(get_store),
) -> PerformanceResponse:
    window, as_of = params()
    return store.performance(window, as_of)


@router.get("/summary", response_model=SummaryResponse)
async def summary(
    params: WindowQueryParams = Depends(WindowQueryParams),
    store: DashboardStore = Depends(get_store),
) -> SummaryResponse:
    window, as_of = params()
    return store.summary(window, as_of)
