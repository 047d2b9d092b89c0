"""
Interaction DTOs for Football Career Mode (media interviews, manager talks).
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .enums import Attr, EffectTarget, InteractionStatus, InteractionType


@dataclass
class InteractionEffect:
    target: EffectTarget = EffectTarget.PLAYER_ATTRIBUTE
    change: int = 0
    stat: Attr | None = None  # only for PLAYER_ATTRIBUTE
    log_public: str | None = None
    log_private: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target.value,
            "change": self.change,
            "stat": self.stat.value if self.stat else None,
            "log_public": self.log_public,
            "log_private": self.log_private,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InteractionEffect":
        stat = data.get("stat")
        return cls(
            target=EffectTarget(data["target"]),
            change=data.get("change", 0),
            stat=Attr(stat) if stat else None,
            log_public=data.get("log_public"),
            log_private=data.get("log_private"),
        )


@dataclass
class InteractionOption:
    id: str = ""
    text: str = ""
    effects: List[InteractionEffect] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "effects": [e.to_dict() for e in self.effects]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InteractionOption":
        return cls(
            id=data["id"],
            text=data.get("text", ""),
            effects=[InteractionEffect.from_dict(e) for e in data.get("effects", [])],
        )


@dataclass
class Interaction:
    """A one-shot prompt. Only the first response is ever applied."""

    interaction_id: str = ""
    type: InteractionType = InteractionType.MANAGER_TALK_FORM
    prompt_text: str = ""
    options: List[InteractionOption] = field(default_factory=list)
    status: InteractionStatus = InteractionStatus.PENDING
    trigger_season: int = 1
    trigger_week: int = 1
    expires_on_week: int = 1
    related_match_id: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == InteractionStatus.PENDING

    def find_option(self, option_id: str) -> InteractionOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interaction_id": self.interaction_id,
            "type": self.type.value,
            "prompt_text": self.prompt_text,
            "options": [o.to_dict() for o in self.options],
            "status": self.status.value,
            "trigger_season": self.trigger_season,
            "trigger_week": self.trigger_week,
            "expires_on_week": self.expires_on_week,
            "related_match_id": self.related_match_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interaction":
        return cls(
            interaction_id=data["interaction_id"],
            type=InteractionType(data["type"]),
            prompt_text=data.get("prompt_text", ""),
            options=[InteractionOption.from_dict(o) for o in data.get("options", [])],
            status=InteractionStatus(data.get("status", InteractionStatus.PENDING.value)),
            trigger_season=data.get("trigger_season", 1),
            trigger_week=data.get("trigger_week", 1),
            expires_on_week=data.get("expires_on_week", 1),
            related_match_id=data.get("related_match_id"),
        )
