from enum import IntEnum


class VoteType(IntEnum):
    # GovernorCountingSimple support codes
    AGAINST = 0
    FOR = 1
    ABSTAIN = 2
