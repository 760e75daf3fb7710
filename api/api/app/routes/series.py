from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..schemas import SeriesMeta
from ..services.dashboard_store import DashboardStore, get_store

router = APIRouter(prefix="/api/v1", tags=["series"])


@router.get("/series/meta", response_model=SeriesMeta)
async def series_meta(store: DashboardStore = Depends(get_store)) -> SeriesMeta:
    return store.series_meta()


@router.post("/refresh", response_model=SeriesMeta)
async def refresh(
    seed: Optional[int] = Query(default=None, description="New generator seed; omit to keep the current one"),
    store: DashboardStore = Depends(get_store),
) -> SeriesMeta:
    if seed is None:
        return store.refresh()
    return store.refresh(seed=seed)
