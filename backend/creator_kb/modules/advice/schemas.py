from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _coerce_chunk_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


class AdviceRequest(BaseModel):
    """Chunk ids the caller has already shown; they are excluded from the pick."""

    model_config = ConfigDict(populate_by_name=True)

    used_ids: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("used_ids", "usedIds"),
        description="Chunk ids to exclude; entries that are not numeric are ignored",
    )

    @field_validator("used_ids", mode="before")
    @classmethod
    def parse_used_ids(cls, value: Any) -> List[int]:
        if not isinstance(value, (list, tuple)):
            return []
        ids = [_coerce_chunk_id(entry) for entry in value]
        return [chunk_id for chunk_id in ids if chunk_id is not None]


class AdviceRead(BaseModel):
    id: int
    text: str
