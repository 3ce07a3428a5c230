from artist_insights.routes.auth import router as auth_router
from artist_insights.routes.dashboard import router as dashboard_router
from artist_insights.routes.export import router as export_router
from artist_insights.routes.platforms import router as platforms_router

__all__ = ["auth_router", "dashboard_router", "export_router", "platforms_router"]
