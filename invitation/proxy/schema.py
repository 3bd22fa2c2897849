from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProxyRsvpFields(BaseModel):
    """Fields the proxy checks before contacting the backend. Everything else passes through."""

    model_config = ConfigDict(extra="allow")

    name: str
    attending: str
    guests: float = Field(allow_inf_nan=False)

    @field_validator("name", "attending")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ProxyRsvpBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    rsvp: ProxyRsvpFields
