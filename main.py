# main.py
# Role: Application entry point for the expense tracker.
#       Configures logging, creates database tables, mounts static assets,
#       registers error handlers and all route modules.

"""
Main FastAPI app for the personal expense tracker.

Here we only:
- configure logging
- create the FastAPI app
- set up static files
- create DB tables
- register error handlers
- include route modules
"""

import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from config import LOG_LEVEL, STATIC_DIR
from db import Base, engine
import models  # noqa: F401  (registers the Expense table on Base)
from app.errors import register_error_handlers
from app.routes_root import router as root_router
from app.routes_expenses import router as expenses_router


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# App & DB setup
# -------------------------------------------------------------------

# Create database tables (only if they don't exist yet).
Base.metadata.create_all(bind=engine)
logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

# FastAPI application instance
app = FastAPI(title="Expense Tracker")

# Serve static files (CSS/JS) from /static
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# JSON bodies for ValidationError / NotFoundError / StoreError and friends
register_error_handlers(app)

# -------------------------------------------------------------------
# Include routers
# -------------------------------------------------------------------

# Page + health check
app.include_router(root_router)

# Expense CRUD, listings, summary, CSV import, categories
app.include_router(expenses_router)
