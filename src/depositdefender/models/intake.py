"""
Deposit Defender Intake Model

The IntakeRecord is the engine's only input besides the clock. It is
frozen: the engine is a pure function of it and never writes back.

Two construction paths exist:
- IntakeRecord(...) with flat keyword arguments
- IntakeRecord.from_dict(...) for the nested intake form payload
  (move_out_information, security_deposit_information, ...)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..exceptions import IntakeError
from .enums import CommunicationMethod, DepositReturnStatus, TriState


@dataclass(frozen=True)
class IntakeRecord:
    """
    A tenant's submitted deposit-dispute facts.

    Attributes:
        case_id: Case identifier assigned at intake
        jurisdiction: Statutory regime code (only "TX" is encoded)
        tenant_name / landlord_name / property_address: Identifiers
        lease_start_date / lease_end_date: Raw date strings
        move_out_date: Raw move-out date string (may be unparsable)
        deposit_amount / pet_deposit_amount / amount_returned: Raw money strings
        deposit_return_status: none | partial | full
        itemization_received: yes | no | unknown
        forwarding_address_provided: yes | no | unknown
        forwarding_address_date: Raw date string
        communication_methods: Channels used after move-out
        communication_channels: Distinct raw channel tags as entered (lower-cased)
        tenant_notes: Free text
        lease_text: Raw lease text supplied by document ingestion
    """
    case_id: Optional[str] = None
    jurisdiction: str = "TX"

    tenant_name: Optional[str] = None
    landlord_name: Optional[str] = None
    property_address: Optional[str] = None

    lease_start_date: Optional[str] = None
    lease_end_date: Optional[str] = None
    move_out_date: Optional[str] = None

    deposit_amount: Optional[str] = None
    pet_deposit_amount: Optional[str] = None
    deposit_return_status: DepositReturnStatus = DepositReturnStatus.NONE
    amount_returned: Optional[str] = None

    itemization_received: TriState = TriState.UNKNOWN
    forwarding_address_provided: TriState = TriState.UNKNOWN
    forwarding_address_date: Optional[str] = None

    communication_methods: frozenset[CommunicationMethod] = field(default_factory=frozenset)
    communication_channels: frozenset[str] = field(default_factory=frozenset)
    tenant_notes: str = ""
    lease_text: Optional[str] = None

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        lease_text: Optional[str] = None,
    ) -> IntakeRecord:
        """
        Build an IntakeRecord from the nested intake form payload.

        Field names follow the intake schema. A flat payload (keys matching
        the dataclass fields) is accepted too.

        Raises:
            IntakeError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise IntakeError(
                message="Intake must be a JSON object",
                details={"received_type": type(data).__name__},
            )

        if "security_deposit_information" not in data and "move_out_information" not in data:
            return cls._from_flat(data, lease_text)

        tenant = _section(data, "tenant_information")
        landlord = _section(data, "landlord_information")
        prop = _section(data, "property_information")
        lease = _section(data, "lease_information")
        move_out = _section(data, "move_out_information")
        deposit = _section(data, "security_deposit_information")
        comms = _section(data, "post_move_out_communications")
        notes = _section(data, "additional_notes")

        return cls(
            case_id=_opt_str(data.get("case_id")),
            jurisdiction=_opt_str(data.get("jurisdiction")) or "TX",
            tenant_name=_opt_str(tenant.get("full_name")),
            landlord_name=_opt_str(landlord.get("landlord_name") or landlord.get("full_name")),
            property_address=_opt_str(prop.get("property_address")),
            lease_start_date=_opt_str(lease.get("lease_start_date")),
            lease_end_date=_opt_str(lease.get("lease_end_date")),
            move_out_date=_opt_str(move_out.get("move_out_date")),
            deposit_amount=_opt_str(deposit.get("deposit_amount")),
            pet_deposit_amount=_opt_str(deposit.get("pet_deposit_amount")),
            deposit_return_status=DepositReturnStatus.parse(deposit.get("deposit_returned")),
            amount_returned=_opt_str(deposit.get("amount_returned")),
            itemization_received=TriState.parse(comms.get("itemized_deductions_received")),
            forwarding_address_provided=TriState.parse(move_out.get("forwarding_address_provided")),
            forwarding_address_date=_opt_str(move_out.get("forwarding_address_date")),
            communication_methods=_methods(comms.get("communication_methods_used")),
            communication_channels=_channels(comms.get("communication_methods_used")),
            tenant_notes=str(notes.get("tenant_notes") or ""),
            lease_text=lease_text if lease_text is not None else _opt_str(data.get("lease_text")),
        )

    @classmethod
    def _from_flat(cls, data: Mapping[str, Any], lease_text: Optional[str]) -> IntakeRecord:
        return cls(
            case_id=_opt_str(data.get("case_id")),
            jurisdiction=_opt_str(data.get("jurisdiction")) or "TX",
            tenant_name=_opt_str(data.get("tenant_name")),
            landlord_name=_opt_str(data.get("landlord_name")),
            property_address=_opt_str(data.get("property_address")),
            lease_start_date=_opt_str(data.get("lease_start_date")),
            lease_end_date=_opt_str(data.get("lease_end_date")),
            move_out_date=_opt_str(data.get("move_out_date")),
            deposit_amount=_opt_str(data.get("deposit_amount")),
            pet_deposit_amount=_opt_str(data.get("pet_deposit_amount")),
            deposit_return_status=DepositReturnStatus.parse(data.get("deposit_return_status")),
            amount_returned=_opt_str(data.get("amount_returned")),
            itemization_received=TriState.parse(data.get("itemization_received")),
            forwarding_address_provided=TriState.parse(data.get("forwarding_address_provided")),
            forwarding_address_date=_opt_str(data.get("forwarding_address_date")),
            communication_methods=_methods(data.get("communication_methods")),
            communication_channels=_channels(data.get("communication_methods")),
            tenant_notes=str(data.get("tenant_notes") or ""),
            lease_text=lease_text if lease_text is not None else _opt_str(data.get("lease_text")),
        )

    @property
    def has_lease_text(self) -> bool:
        return bool(self.lease_text and self.lease_text.strip())

    @property
    def communication_count(self) -> int:
        """Distinct channels used. Unrecognised tags each count once."""
        return max(len(self.communication_channels), len(self.communication_methods))


# =============================================================================
# Helpers
# =============================================================================

def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _raw_list(raw: Any) -> list[Any]:
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return []
    return list(raw)


def _methods(raw: Any) -> frozenset[CommunicationMethod]:
    parsed = (CommunicationMethod.parse(item) for item in _raw_list(raw))
    return frozenset(m for m in parsed if m is not None)


def _channels(raw: Any) -> frozenset[str]:
    tags = (
        item.strip().lower().replace("_", " ")
        for item in _raw_list(raw)
        if isinstance(item, str)
    )
    return frozenset(t for t in tags if t)
