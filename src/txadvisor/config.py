"""
Configuration management using pydantic-settings.

Protocol limits are only overridable here; the engine receives them as a
``ProtocolLimits`` value and never hardcodes them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from txadvisor.constants import MAX_INPUTS, MAX_OUTPUTS, MERGE_CAP_PER_CURRENCY


class ProtocolLimits(BaseModel):
    """Transaction slot limits and the stealth merge cap."""

    model_config = ConfigDict(frozen=True)

    max_inputs: int = Field(default=MAX_INPUTS, ge=1)
    max_outputs: int = Field(default=MAX_OUTPUTS, ge=1)
    merge_cap_per_currency: int = Field(default=MERGE_CAP_PER_CURRENCY, ge=0)


DEFAULT_LIMITS = ProtocolLimits()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TXADVISOR_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    log_level: str = "INFO"

    max_inputs: int = Field(default=MAX_INPUTS, ge=1)
    max_outputs: int = Field(default=MAX_OUTPUTS, ge=1)
    merge_cap_per_currency: int = Field(default=MERGE_CAP_PER_CURRENCY, ge=0)

    # Typed-data signing domain
    domain_name: str = "OMG Network"
    domain_version: str = "1"
    verifying_contract: str = "0x" + "00" * 20
    domain_salt: str = "0x" + "00" * 32

    def limits(self) -> ProtocolLimits:
        return ProtocolLimits(
            max_inputs=self.max_inputs,
            max_outputs=self.max_outputs,
            merge_cap_per_currency=self.merge_cap_per_currency,
        )

    def typed_data_domain(self) -> dict[str, str]:
        return {
            "name": self.domain_name,
            "version": self.domain_version,
            "verifyingContract": self.verifying_contract,
            "salt": self.domain_salt,
        }


def get_settings() -> Settings:
    return Settings()
