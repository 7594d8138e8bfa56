from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Environment = Literal["development", "production"]


class ShortenerRules(BaseModel):
    api_url: str = "https://api-ssl.bitly.com/v4"
    # Branded short domain used outside development
    branded_domain: str = "bit.ly"
    development_domain: str = "bit.ly"
    token_env: str = "BITLY_ACCESS_TOKEN"
    timeout_seconds: float = Field(default=10.0, gt=0)


class SharingRules(BaseModel):
    providers: list[str] = Field(
        default_factory=lambda: ["twitter", "linkedin", "facebook", "native"]
    )
    utm_medium: str = "social"
    utm_source_map: dict[str, str] = Field(default_factory=dict)

    @field_validator("providers")
    @classmethod
    def _providers_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one sharing provider is required")
        if len(set(value)) != len(value):
            raise ValueError("sharing providers must be unique")
        return value


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Only this site (blog) registers the feature
    site_id: int = 2
    environment: Environment = "production"
    site_url: str = "http://localhost:8000"

    meta_prefix: str = ""
    rest_namespace: str = "undisclosed/v1"
    asset_prefix: str = "social-share"

    shortener: ShortenerRules = Field(default_factory=ShortenerRules)
    sharing: SharingRules = Field(default_factory=SharingRules)
    ops: OpsRules = Field(default_factory=OpsRules)

    @field_validator("rest_namespace")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/")
