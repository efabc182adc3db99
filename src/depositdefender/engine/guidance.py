"""
Deposit Defender Guidance Builders

Turns ranked findings into the report's presentation lists:
leverage points with resolved citations, the numbered procedural step
list, and the applicable statute list.
"""
from __future__ import annotations

from typing import Sequence

from ..models import (
    CitedStatute,
    DetectedIssue,
    LeveragePoint,
    ProceduralStep,
    ReferenceData,
    Resource,
    StatuteReference,
)

ACTION_TITLES = {
    "send_written_demand": "Send a Written Demand Letter",
    "document_timeline": "Document Your Timeline",
    "request_itemization_letter": "Request Itemization in Writing",
    "gather_move_out_evidence": "Collect Move-Out Evidence",
    "send_forwarding_address_now": "Send Your Forwarding Address",
    "note_30_day_start": "Mark the 30-Day Start Date",
    "compare_photos": "Compare Move-In and Move-Out Photos",
    "research_normal_wear": "Learn About Normal Wear vs. Damage",
    "confirm_forwarding_address": "Confirm Your Forwarding Address",
}

ACTION_CATEGORIES = {
    "send_written_demand": "communication",
    "document_timeline": "documentation",
    "request_itemization_letter": "communication",
    "gather_move_out_evidence": "documentation",
    "send_forwarding_address_now": "communication",
    "note_30_day_start": "planning",
    "compare_photos": "documentation",
    "research_normal_wear": "review",
    "confirm_forwarding_address": "communication",
}

GATHER_DOCUMENTS_STEP = ProceduralStep(
    step_number=1,
    title="Gather Your Documents",
    description=(
        "Put everything about the rental in one place: the signed lease, the move-in "
        "condition report or photos, move-out photos, the deposit receipt, every email, "
        "text or letter with the landlord, and proof that you sent a forwarding address."
    ),
    category="documentation",
    checklist=(
        "Lease agreement",
        "Move-in photos or condition report",
        "Move-out photos",
        "Deposit payment receipt",
        "All landlord communications (emails, texts, letters)",
        "Forwarding address proof (certified mail receipt if applicable)",
    ),
)

OPTIONS_STEP = ProceduralStep(
    step_number=0,
    title="Learn About Your Options",
    description=(
        "If a written demand does not resolve things, Texas Justice of the Peace courts hear "
        "small claims up to $20,000, with filing fees usually around $50-100. A licensed Texas "
        "attorney can advise on your specific case."
    ),
    category="next_steps",
    resources=(
        Resource(
            title="TexasLawHelp.org: Security Deposits",
            url="https://texaslawhelp.org/article/security-deposits",
            description="Free guide to Texas security deposit rights",
        ),
        Resource(
            title="Texas JP Courts (Small Claims)",
            url="https://www.txcourts.gov/about-texas-courts/trial-courts/justice-of-the-peace-courts/",
            description="Find your local Justice of the Peace court",
        ),
    ),
)


def format_action_title(action: str) -> str:
    return ACTION_TITLES.get(action) or action.replace("_", " ").title()


# =============================================================================
# Leverage Points
# =============================================================================

def cite(statute_id: str, reference: ReferenceData) -> CitedStatute:
    statute = reference.get_statute(statute_id)
    if statute is None:
        return CitedStatute(rule_id=statute_id, citation=f"Tex. Prop. Code § {statute_id}")
    return CitedStatute(rule_id=statute_id, citation=statute.citation, title=statute.title)


def build_leverage_points(
    issues: Sequence[DetectedIssue],
    reference: ReferenceData,
) -> tuple[LeveragePoint, ...]:
    """Ranked leverage points; a single placeholder when nothing fired."""
    if not issues:
        return (LeveragePoint.no_issues(),)
    return tuple(
        LeveragePoint.from_issue(
            rank=rank,
            issue=issue,
            citations=tuple(cite(sid, reference) for sid in issue.statute_citations),
        )
        for rank, issue in enumerate(issues, start=1)
    )


# =============================================================================
# Procedural Steps
# =============================================================================

def derive_procedural_steps(issues: Sequence[DetectedIssue]) -> tuple[ProceduralStep, ...]:
    """
    Numbered step list: gather documents first, then each distinct
    recommended action in rank order, then a resources step when any
    HIGH issue fired.
    """
    steps = [GATHER_DOCUMENTS_STEP]
    seen_actions = {"organize_records"}

    for issue in issues:
        for step in issue.recommended_steps:
            if step.action in seen_actions:
                continue
            seen_actions.add(step.action)
            steps.append(
                ProceduralStep(
                    step_number=0,
                    title=format_action_title(step.action),
                    description=step.description,
                    category=ACTION_CATEGORIES.get(step.action, "documentation"),
                )
            )

    if any(i.is_high for i in issues):
        steps.append(OPTIONS_STEP)

    return tuple(
        ProceduralStep(
            step_number=n,
            title=s.title,
            description=s.description,
            category=s.category,
            checklist=s.checklist,
            resources=s.resources,
        )
        for n, s in enumerate(steps, start=1)
    )


# =============================================================================
# Statutes
# =============================================================================

def applicable_statutes(
    issues: Sequence[DetectedIssue],
    reference: ReferenceData,
) -> tuple[StatuteReference, ...]:
    """Always-cited statutes plus every statute a finding cites, in first-seen order."""
    ids: list[str] = list(reference.jurisdiction.always_cited_statutes)
    for issue in issues:
        for sid in issue.statute_citations:
            if sid not in ids:
                ids.append(sid)
    resolved = (reference.get_statute(sid) for sid in ids)
    return tuple(s for s in resolved if s is not None)
