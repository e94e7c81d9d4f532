"""Who plays a side: a human, an external AI program, or a built-in COM opponent."""

from dataclasses import dataclass
from typing import Optional, Self

from lasthit.core.exceptions import ValidationError
from lasthit.core.shared_types import COM_LEVELS, PartyKind


@dataclass(frozen=True)
class PartySpec:
    """
    Kind and reference of one side, validated together.
    ----

    * human: no reference
    * ai: reference is the (non-empty) id of the AI model
    * com: reference is the difficulty level "1" - "4"
    """

    kind: PartyKind
    reference: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == PartyKind.HUMAN:
            if self.reference:
                raise ValidationError(
                    f"A human party takes no reference, got {self.reference!r}."
                )
        elif self.kind == PartyKind.AI:
            if not self.reference:
                raise ValidationError("AI ID is required when party type is ai.")
        elif self.kind == PartyKind.COM:
            if self.reference not in COM_LEVELS:
                raise ValidationError(
                    f"Invalid COM level {self.reference!r}. Pick one from {','.join(COM_LEVELS)}."
                )

    @classmethod
    def from_values(cls, kind: str, reference: Optional[str]) -> Self:
        """Parse the raw strings stored in the boundary model."""
        try:
            party_kind = PartyKind(kind)
        except ValueError as e:
            raise ValidationError(
                f"Invalid party type {kind!r}. Pick one from {','.join(k.value for k in PartyKind)}."
            ) from e
        return cls(party_kind, reference or None)

    @classmethod
    def human(cls) -> Self:
        return cls(PartyKind.HUMAN)

    @classmethod
    def com(cls, level: str) -> Self:
        return cls(PartyKind.COM, level)

    @property
    def is_com(self) -> bool:
        return self.kind == PartyKind.COM
