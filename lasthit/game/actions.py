"""What a party can do on its turn."""

import json
from dataclasses import dataclass
from typing import Any, Optional, Self

from lasthit.core.exceptions import ValidationError
from lasthit.core.shared_types import ActionKind, Direction
from lasthit.game.position import Position


@dataclass(frozen=True)
class Action:
    """
    A single action
    ---

    * move: step one cell along `direction`
    * attack: fire a ray along `direction`
    * defend: pass (direction is ignored)

    `target` is part of the shape (and of the move log) but resolution does not use it.
    """

    kind: ActionKind
    direction: Optional[Direction] = None
    target: Optional[Position] = None

    @classmethod
    def move(cls, direction: Direction) -> Self:
        return cls(ActionKind.MOVE, direction)

    @classmethod
    def attack(cls, direction: Direction) -> Self:
        return cls(ActionKind.ATTACK, direction)

    @classmethod
    def defend(cls) -> Self:
        return cls(ActionKind.DEFEND)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.kind.value,
            "direction": self.direction.value if self.direction else "",
        }
        if self.target is not None:
            data["target"] = self.target.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        try:
            kind = ActionKind(data["type"])
            direction = Direction(data["direction"]) if data.get("direction") else None
            target = Position.from_dict(data["target"]) if data.get("target") else None
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Cannot interpret action data: {data!r}") from e
        return cls(kind, direction, target)

    def to_json(self) -> str:
        """Serialized form stored in the move log"""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Self:
        return cls.from_dict(json.loads(text))
