from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ConfirmationLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "log"
    log_index: int | None = None
    transaction_hash: str | None = None
    block_number: int | None = None
    address: str | None = None
    data: str | None = None
    topics: List[str] = Field(default_factory=list)


class DecodedEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    name: str
    address: str | None = None
    log_index: int | None = None
    args: Dict[str, Any] = Field(default_factory=dict)


class TransactionConfirmation(BaseModel):
    """A mined transaction together with the events the target contract emitted."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "confirmation"
    function_name: str | None = None
    transaction_hash: str | None = None
    block_number: int | None = None
    from_address: str | None = None
    to_address: str | None = None
    contract_address: str | None = None
    gas_used: int | None = None
    status: int | None = None
    logs: List[ConfirmationLog] = Field(default_factory=list)
    events: List[DecodedEvent] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status is None or self.status == 1

    def events_named(self, name: str) -> List[DecodedEvent]:
        return [event for event in self.events if event.name == name]
