from pydantic import BaseModel, Field
from typing import Literal

from accessgate_core.interfaces.access import RelationKind


class KesselConfig(BaseModel):
    base_url: str = "http://localhost:8000"
    check_path: str = "/api/access/v1/check"
    token_env: str = "ACCESSGATE_TOKEN"
    timeout: float = Field(default=10.0, gt=0)


class IdentityConfig(BaseModel):
    base_url: str = "http://localhost:8000"
    access_path: str = "/api/rbac/v1/access/"
    application: str = "rbac"
    page_limit: int = Field(default=1000, gt=0)
    token_env: str = "ACCESSGATE_TOKEN"
    timeout: float = Field(default=10.0, gt=0)


class CacheConfig(BaseModel):
    ttl_seconds: float = Field(default=300.0, gt=0)


class RoutesConfig(BaseModel):
    definitions_path: str | None = None


class PluginsConfig(BaseModel):
    access_check: str | None = None
    identity: str | None = None


class AccessGateConfig(BaseModel):
    kessel: KesselConfig = Field(default_factory=KesselConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    relations: list[RelationKind] = Field(default_factory=lambda: list(RelationKind))
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
