"""Shared base for FiveStar Support payload models."""

from pydantic import BaseModel, ConfigDict


class FiveStarModel(BaseModel):
    """Immutable value record mirroring one JSON payload shape.

    Attributes use snake_case; JSON keys use the camelCase aliases declared on
    each field. Unknown keys in server payloads are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_json_dict(self) -> dict:
        """Dump using the wire (camelCase) field names."""
        return self.model_dump(by_alias=True)
