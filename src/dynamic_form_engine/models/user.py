from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

ROLL_NUMBER_REQUIRED = "Roll Number is required"
NAME_REQUIRED = "Name is required"


class UserCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    roll_number: str = Field(alias="rollNumber")
    name: str

    def to_payload(self) -> dict[str, str]:
        return {"rollNumber": self.roll_number, "name": self.name}


def validate_login(roll_number: str, name: str) -> dict[str, str]:
    """Return login errors keyed by input name; empty when both are filled in."""
    errors: dict[str, str] = {}
    if not roll_number.strip():
        errors["rollNumber"] = ROLL_NUMBER_REQUIRED
    if not name.strip():
        errors["name"] = NAME_REQUIRED
    return errors


__all__ = ["UserCredentials", "validate_login", "ROLL_NUMBER_REQUIRED", "NAME_REQUIRED"]
