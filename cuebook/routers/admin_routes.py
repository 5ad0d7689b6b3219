# cuebook/routers/admin_routes.py

from datetime import date

from fastapi import APIRouter, Depends

from cuebook.auth import get_current_admin
from cuebook.deps import get_aggregator
from cuebook.overview import OverviewAggregator
from cuebook.schemas import DailyOverview

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/bookings/daily-overview", response_model=DailyOverview)
def daily_overview(
    date: date,
    aggregator: OverviewAggregator = Depends(get_aggregator),
):
    return aggregator.daily_overview(date)
