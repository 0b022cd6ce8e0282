"""Authentication schemas."""

from pydantic import BaseModel, Field


class SteamPrincipal(BaseModel):
    """Verified Steam account returned to the application after login."""

    steam_id: str = Field(pattern=r"^76561[0-9]{12}$")


class ValidatedAssertion(BaseModel):
    """Assertion fields that passed every structural check."""

    fields: dict[str, str]
    steam_id: str


class LoginRedirect(BaseModel):
    url: str
    form_fields: dict[str, str]
