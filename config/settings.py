from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants.constants import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_MINT_AMOUNT,
    DEFAULT_OWNER_INDEX,
    DEFAULT_PROPOSAL_DESCRIPTION,
    DEFAULT_PROPOSAL_VALUE,
    DEFAULT_PROVIDER_URI,
    DEFAULT_VOTER_INDICES,
    DEFAULT_VOTING_DELAY_BLOCKS,
    DEFAULT_VOTING_PERIOD_BLOCKS,
)

_ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = _ENV_CONFIG

    name: str = Field("Governance Simulation", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class LedgerSettings(BaseSettings):
    """Settings related to the local test node and compiled contracts."""

    model_config = _ENV_CONFIG

    provider_uri: str = Field(
        default=DEFAULT_PROVIDER_URI,
        validation_alias="PROVIDER_URI",
        description="Local test node JSON-RPC URL (Ganache, Hardhat, Anvil)",
    )
    # Timeout for a single RPC call (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    # How long to wait for a transaction to be mined (seconds)
    receipt_timeout: int = Field(default=120, gt=0, validation_alias="RECEIPT_TIMEOUT")
    artifacts_dir: str = Field(
        default=DEFAULT_ARTIFACTS_DIR,
        validation_alias="ARTIFACTS_DIR",
        description="Directory holding Truffle, Hardhat or Foundry build artifacts",
    )


class SimulationSettings(BaseSettings):
    """Parameters of the governance scenario."""

    model_config = _ENV_CONFIG

    mint_amount: int = Field(default=DEFAULT_MINT_AMOUNT, gt=0, validation_alias="MINT_AMOUNT")
    proposal_value: int = Field(default=DEFAULT_PROPOSAL_VALUE, ge=0, validation_alias="PROPOSAL_VALUE")
    proposal_description: str = Field(default=DEFAULT_PROPOSAL_DESCRIPTION, validation_alias="PROPOSAL_DESCRIPTION")
    voting_delay_blocks: int = Field(default=DEFAULT_VOTING_DELAY_BLOCKS, ge=0, validation_alias="VOTING_DELAY_BLOCKS")
    voting_period_blocks: int = Field(default=DEFAULT_VOTING_PERIOD_BLOCKS, ge=0, validation_alias="VOTING_PERIOD_BLOCKS")
    owner_index: int = Field(default=DEFAULT_OWNER_INDEX, ge=0, validation_alias="OWNER_INDEX")
    # Comma-separated signer indices of the accounts that vote For
    voter_indices: str = Field(default=DEFAULT_VOTER_INDICES, validation_alias="VOTER_INDICES")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each sub-settings object reads its own flat env vars, so `PROVIDER_URI`
    lands in `settings.ledger.provider_uri`.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    # Config to load from .env file
    model_config = _ENV_CONFIG


# Singleton instance
settings = Settings()
