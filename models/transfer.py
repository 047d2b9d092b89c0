"""
Transfer offer DTO for Football Career Mode.
Offer terms never change after creation; only status moves, and only out of PENDING.
"""
from dataclasses import dataclass
from typing import Dict, Any

from .enums import Division, OfferStatus


@dataclass
class TransferOffer:
    offer_id: str = ""
    from_team_id: str = ""
    from_team_name: str = ""
    from_team_division: Division = Division.FIFTH
    to_player_id: str = ""
    transfer_fee: int = 0
    offered_wage: int = 0
    contract_length_years: int = 1  # 1-3
    signing_bonus: int = 0
    status: OfferStatus = OfferStatus.PENDING_PLAYER_RESPONSE
    offer_date_season: int = 1
    offer_date_week: int = 1
    expires_on_season: int = 1
    expires_on_week: int = 1

    @property
    def is_pending(self) -> bool:
        return self.status == OfferStatus.PENDING_PLAYER_RESPONSE

    @property
    def total_cost(self) -> int:
        return self.transfer_fee + self.signing_bonus

    def is_expired_at(self, season: int, week: int) -> bool:
        return season > self.expires_on_season or (
            season == self.expires_on_season and week >= self.expires_on_week
        )

    def close(self, status: OfferStatus) -> None:
        """Move a pending offer into a terminal status. Terminal offers are left alone."""
        if not self.is_pending or status == OfferStatus.PENDING_PLAYER_RESPONSE:
            return
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        d = {k: getattr(self, k) for k in self.__dataclass_fields__}
        d["from_team_division"] = self.from_team_division.value
        d["status"] = self.status.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferOffer":
        offer = cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})
        offer.from_team_division = Division(offer.from_team_division)
        offer.status = OfferStatus(offer.status)
        return offer
