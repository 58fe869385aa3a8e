from __future__ import annotations

"""Centralized path utilities for the project.

These provide absolute `Path` objects to key directories, avoiding
hard-coded relative paths throughout the codebase.
"""

from pathlib import Path


# The `crm` directory is one level below the project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Canonical directories used throughout the project
OUTPUT_DIR = PROJECT_ROOT / "output"
PLOTS_DIR = OUTPUT_DIR / "plots"
EXPORTS_DIR = OUTPUT_DIR / "exports"
LOGS_DIR = PROJECT_ROOT / "logs"

# Optional settings file read by `crm.config.load_settings`
CONFIG_FILE = PROJECT_ROOT / "crm.yaml"
