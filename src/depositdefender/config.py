"""
Deposit Defender Configuration

Process-wide settings read once from the environment.
"""
from __future__ import annotations

import os
from pathlib import Path

ENGINE_VERSION = "1.0.0"

DD_LOG_LEVEL = os.getenv("DD_LOG_LEVEL", "INFO")
DD_TIMEZONE = os.getenv("DD_TIMEZONE", "America/Chicago")
DD_JURISDICTION = os.getenv("DD_JURISDICTION", "TX")
DD_DOCS_ENABLED = os.getenv("DD_DOCS_ENABLED", "true").lower() == "true"

DEFAULT_REFERENCE_PACK = Path(__file__).parent / "packs" / "data" / "texas_security_deposit.yaml"
DD_REFERENCE_PACK = Path(os.getenv("DD_REFERENCE_PACK", str(DEFAULT_REFERENCE_PACK)))
