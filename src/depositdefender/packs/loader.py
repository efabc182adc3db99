"""
Deposit Defender Reference Pack Loader

Loads and validates the reference data pack from YAML.

Converts Pydantic schema models to Deposit Defender domain models and
checks cross-table integrity (every band action has content, every
always-cited statute exists).
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..canon import compute_reference_pack_hash
from ..config import DD_REFERENCE_PACK
from ..exceptions import ReferenceDataLoadError, ReferenceDataValidationError
from ..models import (
    ActionContent,
    ActionStep,
    Grade,
    JurisdictionRules,
    RecommendedAction,
    RecoveryBandEntry,
    ReferenceData,
    ScoreBandEntry,
    StatuteReference,
    StrategicPosition,
    Urgency,
)
from .schema import (
    SCHEMA_VERSION,
    ActionContentSchema,
    RecoveryBandSchema,
    ReferencePackSchema,
    ScoreBandSchema,
    StatuteSchema,
    check_schema_version,
    validate_reference_pack,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(reference: ReferenceData, path: str = "") -> None:
    """
    Validate cross-table references are consistent.

    Catches:
    - Score bands whose action has no content block
    - Duplicate statute ids
    - Always-cited statutes missing from the statute table

    Raises:
        ValueError: If reference integrity errors are found
    """
    errors = []

    content_actions = {c.action for c in reference.actions}
    for band in reference.score_bands:
        if band.action not in content_actions:
            errors.append(
                f"Score band at {band.min_score} uses action '{band.action.value}' with no content block"
            )

    seen: set[str] = set()
    for statute in reference.statutes:
        if statute.id in seen:
            errors.append(f"Duplicate statute ID: '{statute.id}'")
        seen.add(statute.id)

    for statute_id in reference.jurisdiction.always_cited_statutes:
        if statute_id not in seen:
            errors.append(f"Always-cited statute '{statute_id}' is not defined")

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_score_band(schema: ScoreBandSchema) -> ScoreBandEntry:
    return ScoreBandEntry(
        min_score=schema.min_score,
        grade=Grade(schema.grade),
        position=StrategicPosition(schema.position),
        action=RecommendedAction(schema.action),
        urgency=Urgency(schema.urgency),
    )


def _convert_recovery_band(schema: RecoveryBandSchema) -> RecoveryBandEntry:
    return RecoveryBandEntry(
        min_score=schema.min_score,
        likely_mult=schema.likely_mult,
        likely_adds_penalty=schema.likely_adds_penalty,
        worst_mult=schema.worst_mult,
        prob_full=schema.prob_full,
        prob_partial=schema.prob_partial,
        prob_none=schema.prob_none,
        confidence_note=schema.confidence_note.strip(),
    )


def _convert_statute(schema: StatuteSchema) -> StatuteReference:
    return StatuteReference(
        id=schema.id,
        citation=schema.citation,
        title=schema.title,
        summary=schema.summary.strip(),
        url=schema.url,
    )


def _convert_action_content(schema: ActionContentSchema) -> ActionContent:
    return ActionContent(
        action=RecommendedAction(schema.action),
        label=schema.label,
        rationale=schema.rationale.strip(),
        success_rate_note=schema.success_rate_note.strip(),
        timeline=schema.timeline,
        cost_estimate=schema.cost_estimate,
        next_steps=tuple(
            ActionStep(step=s.step, action=s.action, deadline=s.deadline, notes=s.notes.strip())
            for s in schema.next_steps
        ),
        if_no_response=schema.if_no_response.strip(),
        escalation_path=tuple(sorted(schema.escalation_path.items())),
    )


def _convert_reference_pack(schema: ReferencePackSchema, pack_hash: str) -> ReferenceData:
    j = schema.jurisdiction
    return ReferenceData(
        pack_id=schema.pack_id,
        version=schema.version,
        jurisdiction=JurisdictionRules(
            code=j.code,
            name=j.name,
            deadline_days=j.deadline_days,
            statutory_penalty=j.statutory_penalty,
            penalty_score_threshold=j.penalty_score_threshold,
            always_cited_statutes=tuple(j.always_cited_statutes),
        ),
        score_bands=tuple(_convert_score_band(b) for b in schema.score_bands),
        recovery_bands=tuple(_convert_recovery_band(b) for b in schema.recovery_bands),
        statutes=tuple(_convert_statute(s) for s in schema.statutes),
        actions=tuple(_convert_action_content(a) for a in schema.actions),
        disclaimers=tuple((k, v.strip()) for k, v in schema.disclaimers.items()),
        content_hash=pack_hash,
    )


# =============================================================================
# Loading
# =============================================================================

def build_reference_data(data: Any, path: str = "") -> ReferenceData:
    """
    Validate a raw pack dictionary and convert it to ReferenceData.

    Raises:
        ReferenceDataValidationError: On schema, version or integrity failure
    """
    if not isinstance(data, dict):
        raise ReferenceDataValidationError(
            message="Reference pack must be a mapping at the top level",
            details={"path": path, "received_type": type(data).__name__},
        )

    if not check_schema_version(data):
        pack_version = data.get("schema_version", "unknown")
        raise ReferenceDataValidationError(
            message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
            details={"pack_version": pack_version, "expected_version": SCHEMA_VERSION},
        )

    try:
        schema = validate_reference_pack(data)
    except ValidationError as e:
        raise ReferenceDataValidationError(
            message=f"Reference pack validation failed: {e.error_count()} errors",
            details={
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
                "path": path,
            },
        ) from e

    reference = _convert_reference_pack(schema, compute_reference_pack_hash(data))

    try:
        validate_reference_integrity(reference, path)
    except ValueError as e:
        raise ReferenceDataValidationError(
            message="Reference integrity validation failed",
            details={"errors": str(e), "path": path},
        ) from e

    return reference


def load_reference_pack(path: Union[str, Path]) -> ReferenceData:
    """
    Load a reference pack from a YAML file.

    Raises:
        ReferenceDataLoadError: If the file cannot be read or parsed
        ReferenceDataValidationError: If the content is invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ReferenceDataLoadError(
            message=f"Failed to load reference pack: {e}",
            details={"path": str(path), "error": str(e)},
        ) from e

    reference = build_reference_data(data, str(path))
    logger.info(
        "Loaded reference pack %s v%s (%s)",
        reference.pack_id,
        reference.version,
        reference.content_hash[:12],
    )
    return reference


def load_reference_pack_from_string(content: str) -> ReferenceData:
    """Load a reference pack from a YAML string."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ReferenceDataLoadError(
            message=f"Failed to parse reference pack: {e}",
            details={"error": str(e)},
        ) from e
    return build_reference_data(data)


@lru_cache(maxsize=8)
def load_reference_data(path: Optional[str] = None) -> ReferenceData:
    """
    Process-wide cached reference data.

    With no argument, loads the pack named by DD_REFERENCE_PACK.
    """
    return load_reference_pack(path or DD_REFERENCE_PACK)
