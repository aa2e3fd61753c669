from enum import IntEnum


class ProposalState(IntEnum):
    # Order matches the OpenZeppelin/Compound Governor `state()` return value
    PENDING = 0
    ACTIVE = 1
    CANCELED = 2
    DEFEATED = 3
    SUCCEEDED = 4
    QUEUED = 5
    EXPIRED = 6
    EXECUTED = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def is_executable(self) -> bool:
        return self in (ProposalState.SUCCEEDED, ProposalState.QUEUED)
