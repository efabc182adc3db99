"""Report Shape Validation.

Runs AFTER every report is assembled, on its dict form. Failures are
advisory: they are logged as warnings and returned, never raised, so a
caller always gets the report.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from ..models import ReportValidation

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = (
    "report_metadata",
    "timeline",
    "compliance_checklist",
    "case_strength",
    "recovery_estimate",
    "strategy",
)

LIST_SECTIONS = (
    "leverage_points",
    "procedural_steps",
    "statutory_references",
)


# ── Checks ─────────────────────────────────────────────────────────────────

def _check_required_sections(report: Mapping[str, Any]) -> list[str]:
    return [f"Missing {name}" for name in REQUIRED_SECTIONS if not report.get(name)]


def _check_list_sections(report: Mapping[str, Any]) -> list[str]:
    return [
        f"{name} must be an array"
        for name in LIST_SECTIONS
        if not isinstance(report.get(name), list)
    ]


def _check_disclaimer(report: Mapping[str, Any]) -> list[str]:
    disclaimers = report.get("disclaimers")
    if not isinstance(disclaimers, Mapping) or not disclaimers.get("primary"):
        return ["Missing disclaimers.primary"]
    return []


# ── Main entry point ──────────────────────────────────────────────────────

def validate_report(report: Any) -> ReportValidation:
    """Check a report dict for required sections and list-typed fields."""
    if not isinstance(report, Mapping):
        errors = ["Report is null or not an object"]
    else:
        errors = (
            _check_required_sections(report)
            + _check_list_sections(report)
            + _check_disclaimer(report)
        )

    if errors:
        case_id = None
        if isinstance(report, Mapping):
            case_id = (report.get("report_metadata") or {}).get("case_id")
        logger.warning(
            "Report failed shape validation",
            extra={"case_id": case_id, "validation_errors": errors},
        )
    return ReportValidation(valid=not errors, errors=tuple(errors))
