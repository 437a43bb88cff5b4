"""Data models for stored policy rows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from policystore.core.types import PTYPE_MAX_LENGTH, VALUE_MAX_LENGTH


class CasbinRule(BaseModel):
    """One row of the policy table.

    Empty string marks an absent field, so ``v0``..``v5`` are always set.
    """

    model_config = ConfigDict(frozen=True)

    p_type: str = Field(min_length=1, max_length=PTYPE_MAX_LENGTH)
    v0: str = Field(default="", max_length=VALUE_MAX_LENGTH)
    v1: str = Field(default="", max_length=VALUE_MAX_LENGTH)
    v2: str = Field(default="", max_length=VALUE_MAX_LENGTH)
    v3: str = Field(default="", max_length=VALUE_MAX_LENGTH)
    v4: str = Field(default="", max_length=VALUE_MAX_LENGTH)
    v5: str = Field(default="", max_length=VALUE_MAX_LENGTH)

    @property
    def value_columns(self) -> tuple[str, ...]:
        """The six value columns in column order."""
        return (self.v0, self.v1, self.v2, self.v3, self.v4, self.v5)

    @property
    def rule_fields(self) -> list[str]:
        """The rule fields with absent (empty) columns dropped."""
        return [v for v in self.value_columns if v != ""]

    def as_params(self) -> tuple[str, ...]:
        """Positional SQL parameters: ``p_type`` followed by the values."""
        return (self.p_type, *self.value_columns)
