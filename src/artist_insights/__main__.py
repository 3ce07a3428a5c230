"""Serve the dashboard API with uvicorn (``python -m artist_insights``)."""
import os

import uvicorn

from artist_insights.api import app
from artist_insights.dependencies import get_settings

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, log_level=get_settings().log_level.lower())
