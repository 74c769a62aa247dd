"""Model provider configuration."""

from pydantic import BaseModel, Field


class ProvidersConfig(BaseModel):
    """Configuration applied to model providers added to the runtime."""

    instrument: bool = Field(
        default=True,
        description="Wrap providers so capability calls publish monitor events",
    )
