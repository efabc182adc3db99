"""
Deposit Defender Damage Defense

Keyword checks over the tenant's notes that surface talking points
against likely deduction claims. Matching is plain substring/regex
presence; there is no language understanding.

The burden-of-proof defense is always included: whatever the landlord
claims, § 92.104 puts the itemization and its support on the landlord.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import DamageDefenseAnalysis, DefensePoint, DefenseStrength


@dataclass(frozen=True)
class _ClaimPattern:
    pattern: re.Pattern
    defense: DefensePoint


CLAIM_PATTERNS: tuple[_ClaimPattern, ...] = (
    _ClaimPattern(
        pattern=re.compile(r"carpet|floor|stain|hardwood|tile|rug", re.IGNORECASE),
        defense=DefensePoint(
            claim_type="flooring_or_carpet",
            title="Carpet / Flooring Claim",
            defense_strength=DefenseStrength.MODERATE,
            statute="Tex. Prop. Code § 92.104(a)",
            key_point=(
                "Wear paths, light fading and small stains from everyday living are generally "
                "normal wear and tear under § 92.104. Only damage beyond ordinary use can be "
                "charged."
            ),
            what_to_ask_landlord=(
                "When was the carpet installed? Carpet usually lasts 5-7 years.",
                "What exact damage is claimed: general wear, or burns, tears and heavy staining?",
                "What is the cost for the carpet's remaining useful life only?",
            ),
            evidence_helpful=(
                "Move-in condition report or photos of the flooring",
                "Move-out photos of the flooring",
            ),
        ),
    ),
    _ClaimPattern(
        pattern=re.compile(r"paint|wall|scuff|mark|hole|patch|crayon|permanent marker", re.IGNORECASE),
        defense=DefensePoint(
            claim_type="paint_or_walls",
            title="Paint / Wall Claim",
            defense_strength=DefenseStrength.MODERATE,
            statute="Tex. Prop. Code § 92.104(a)",
            key_point=(
                "Light scuffs, minor discoloration and small picture-hanging holes are generally "
                "normal wear. Repainting between tenants is routine turnover, so a full repaint "
                "after a year or more of occupancy is hard to justify as damage unless large "
                "holes, stains or deliberate damage are documented."
            ),
            what_to_ask_landlord=(
                "When was the unit last painted before you moved in?",
                "Which walls are claimed and what is the damage on each?",
                "Is this a full repaint or a targeted touch-up?",
            ),
            evidence_helpful=(
                "Move-in photos of the walls",
                "Move-out photos of the walls",
            ),
        ),
    ),
    _ClaimPattern(
        pattern=re.compile(r"clean|dirty|maid|smell|odor", re.IGNORECASE),
        defense=DefensePoint(
            claim_type="cleaning",
            title="Cleaning Charge",
            defense_strength=DefenseStrength.MODERATE,
            statute="Tex. Prop. Code § 92.104",
            key_point=(
                "Only cleaning beyond what is reasonably expected can be charged. A "
                "\"professional cleaning\" fee for a unit left in reasonable condition may not "
                "be justified, although the lease may set basic move-out cleaning duties."
            ),
            what_to_ask_landlord=(
                "What condition required professional cleaning?",
                "What does the lease require for move-out cleaning?",
                "Are there photos of the claimed condition?",
            ),
            evidence_helpful=(
                "Move-out photos showing the unit clean",
                "The lease's cleaning provisions",
            ),
        ),
    ),
    _ClaimPattern(
        pattern=re.compile(
            r"appliance|refrigerator|stove|oven|dishwasher|faucet|fixture|blinds|window",
            re.IGNORECASE,
        ),
        defense=DefensePoint(
            claim_type="appliances_fixtures",
            title="Appliance / Fixture Claim",
            defense_strength=DefenseStrength.MODERATE,
            statute="Tex. Prop. Code § 92.104",
            key_point=(
                "Appliances and fixtures wear out over their useful life, and wear from regular "
                "use is generally not the tenant's cost. Ask for proof the damage went beyond "
                "ordinary use and for the repair or replacement receipt."
            ),
            what_to_ask_landlord=(
                "How old was the appliance or fixture?",
                "What damage is claimed beyond normal wear?",
                "Please provide the repair or replacement receipt.",
            ),
            evidence_helpful=(
                "Move-out photos of the appliance or fixture",
                "Move-in condition report noting existing problems",
            ),
        ),
    ),
)

_BURDEN_KEY_POINT = (
    "A landlord who keeps any part of a deposit must give a written, itemized list of "
    "deductions (§ 92.104) and must be able to support each charge. Vague claims without an "
    "itemization or receipts are hard to enforce."
)

_BURDEN_LATE_SUFFIX = (
    " Because the 30-day deadline has already passed, a late itemization may also be viewed "
    "less favorably under § 92.109."
)

DEFENSE_DISCLAIMER = (
    "These talking points are informational and based on general principles. Discuss any "
    "specific legal strategy with a licensed Texas attorney."
)


def _burden_of_proof(past_deadline: bool) -> DefensePoint:
    return DefensePoint(
        claim_type="burden_of_proof",
        title="Landlord Must Prove Claims",
        defense_strength=DefenseStrength.STRONG,
        statute="Tex. Prop. Code §§ 92.104, 92.109",
        key_point=_BURDEN_KEY_POINT + (_BURDEN_LATE_SUFFIX if past_deadline else ""),
        what_to_ask_landlord=(
            "Please provide a written, itemized list of all deductions with amounts.",
            "Please provide receipts for every repair or service charged.",
            "Please provide before and after photos of any claimed damage.",
        ),
        evidence_helpful=(
            "Anything showing you left the unit in reasonable condition",
            "The lease you signed",
        ),
    )


def _overall_strength(defenses: tuple[DefensePoint, ...]) -> DefenseStrength:
    strong = sum(1 for d in defenses if d.defense_strength == DefenseStrength.STRONG)
    moderate = sum(1 for d in defenses if d.defense_strength == DefenseStrength.MODERATE)
    if strong >= 1 and len(defenses) >= 2:
        return DefenseStrength.STRONG
    if moderate >= 2:
        return DefenseStrength.MODERATE
    return DefenseStrength.LIMITED


def analyze_damage_defenses(tenant_notes: str, past_deadline: bool) -> DamageDefenseAnalysis:
    """Build defense talking points from the tenant's notes."""
    notes = (tenant_notes or "").lower()
    matched = [p.defense for p in CLAIM_PATTERNS if p.pattern.search(notes)]
    defenses = tuple(matched) + (_burden_of_proof(past_deadline),)
    claims_detected = bool(matched)

    if claims_detected:
        note = (
            "Your notes suggest the landlord may claim damage. The key response is to ask for "
            "a detailed written itemization with receipts for every charge; vague or "
            "undocumented claims are hard to enforce."
        )
    else:
        note = (
            "Your notes do not point to a specific damage dispute. The burden-of-proof defense "
            "applies to any deduction the landlord claims."
        )

    return DamageDefenseAnalysis(
        potential_claims_detected=claims_detected,
        overall_defense_strength=_overall_strength(defenses),
        defenses=defenses,
        strategic_note=note,
        disclaimer=DEFENSE_DISCLAIMER,
    )
