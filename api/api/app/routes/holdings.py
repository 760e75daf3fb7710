from __future__ import annotations

from fastapi import APIRouter, Depends

from ..schemas import HoldingRow
from ..services.dashboard_store import DashboardStore, get_store

router = APIRouter(prefix="/api/v1", tags=["holdings"])


@router.get("/holdings", response_model=list[HoldingRow])
async def holdings(store: DashboardStore = Depends(get_store)) -> list[HoldingRow]:
    return store.holdings()
