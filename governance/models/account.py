from pydantic import BaseModel, ConfigDict


class VotingAccount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "account"
    label: str
    index: int
    address: str
    minted: int = 0
    delegate: str | None = None
    votes: int | None = None

    @property
    def is_self_delegated(self) -> bool:
        return self.delegate is not None and self.delegate.lower() == self.address.lower()
