"""Configuration contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class GatewayConfig(BaseModel):
    timeout: float = Field(default=10.0, gt=0)
    auth: str = "none"
    token: str | None = None
    token_env: str = Field(default="GITHUB_TOKEN", min_length=1)
    user_agent: str = "ghgateway"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_token(self) -> GatewayConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"none", "env", "token"}:
            raise ValueError("auth must be one of: none, env, token")
        return self
