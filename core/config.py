"""Configuration models and loading."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

API_KEY_ENV = "airtable_key"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8888
    timeout: float | None = 30.0


class AirtableSettings(BaseModel):
    api_key: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    airtable: AirtableSettings = Field(default_factory=AirtableSettings)


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build configuration from the process environment.

    Only the ``airtable_key`` variable is consumed; server settings keep
    their defaults and are overridden from the command line.
    """
    env = os.environ if environ is None else environ
    return Config(airtable=AirtableSettings(api_key=env.get(API_KEY_ENV, "")))
