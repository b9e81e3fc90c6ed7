#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and default connection settings for entrybox.

The project structure:
    ROOT/
    ├── entrybox/   # Package code
    ├── data/       # Local SQLite database
    └── logs/       # Application logs

The only setting the data layer consumes is the connection descriptor.
DEFAULT_DATABASE_URL points at a SQLite file under data/; the CLI lets
ENTRYBOX_DATABASE_URL or --database-url override it.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# ----- Project directory -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
ROOT: Path = PACKAGE_DIR.parent
DATA_DIR = ROOT / "data"

# ---- Database ----
DB_PATH = DATA_DIR / "entrybox.db"
DEFAULT_DATABASE_URL = f"sqlite:///{DB_PATH}"
MIGRATIONS_DIR = PACKAGE_DIR / "database" / "migrations"

# ---- Logs ----
LOG_DIR = ROOT / "logs"

# ---- Environment variables read by the CLI ----
DATABASE_URL_ENV = "ENTRYBOX_DATABASE_URL"
LOG_DIR_ENV = "ENTRYBOX_LOG_DIR"
