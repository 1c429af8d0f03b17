from fastapi import Request

from app.services.stats_service import FocusStatsTracker


def get_stats_tracker(request: Request) -> FocusStatsTracker:
    return request.app.state.stats_tracker
