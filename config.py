# config.py
# Role: Runtime configuration for the expense tracker.
#       Loads an optional .env file and exposes the settings read from the
#       environment (database URL, log level, CSV import limits).

"""
Configuration for the expense tracker.

Every setting can be overridden through an environment variable or a
`.env` file in the project root.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Folder for the default SQLite DB
DB_DIR = os.path.join(BASE_DIR, "database")

# Default: <project_root>/database/expenses.db
DEFAULT_DATABASE_URL = f"sqlite:///{os.path.join(DB_DIR, 'expenses.db')}"

DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upper bound on data rows accepted by one CSV import
MAX_UPLOAD_ROWS = int(os.getenv("EXPENSES_MAX_UPLOAD_ROWS", "5000"))

# Template and static asset folders (served by main.py / app/deps.py)
TEMPLATES_DIR = os.path.join(BASE_DIR, "app", "templates")
STATIC_DIR = os.path.join(BASE_DIR, "app", "static")
