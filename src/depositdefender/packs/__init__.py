"""
Deposit Defender Reference Packs

Schema validation and loading for reference data packs.

A reference pack is a YAML file holding the static tables the engine
runs on for one statutory regime: score bands, recovery bands, statutes
and per-action content. The bundled pack covers Texas Property Code
chapter 92, subchapter C.

Usage:
    from depositdefender.packs import load_reference_data, load_reference_pack

    # Cached, process-wide default pack
    reference = load_reference_data()

    # An explicit file (not cached)
    reference = load_reference_pack("path/to/pack.yaml")
"""
from __future__ import annotations

from .loader import (
    build_reference_data,
    load_reference_data,
    load_reference_pack,
    load_reference_pack_from_string,
    validate_reference_integrity,
)
from .schema import (
    SCHEMA_VERSION,
    ActionContentSchema,
    JurisdictionSchema,
    RecoveryBandSchema,
    ReferencePackSchema,
    ScoreBandSchema,
    StatuteSchema,
    check_schema_version,
    validate_reference_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "build_reference_data",
    "load_reference_data",
    "load_reference_pack",
    "load_reference_pack_from_string",
    # Validation
    "validate_reference_pack",
    "validate_reference_integrity",
    "check_schema_version",
    # Schemas
    "ReferencePackSchema",
    "JurisdictionSchema",
    "ScoreBandSchema",
    "RecoveryBandSchema",
    "StatuteSchema",
    "ActionContentSchema",
]
