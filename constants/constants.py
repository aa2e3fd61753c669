# constants/constants.py

# Local test node (Ganache / Hardhat) JSON-RPC endpoint
DEFAULT_PROVIDER_URI = "http://localhost:8545"

# Compiled contract names as they appear in the build artifacts
GOV_TOKEN_CONTRACT_NAME = "GovToken"
GOVERNOR_CONTRACT_NAME = "DaoGovernor"
DAO_CONTRACT_NAME = "Dao"

# Truffle writes artifacts here by default
DEFAULT_ARTIFACTS_DIR = "build/contracts"

# Bootstrap parameters
DEFAULT_MINT_AMOUNT = 100
DEFAULT_OWNER_INDEX = 0
DEFAULT_VOTER_INDICES = "1,2"

# Proposal parameters
DEFAULT_PROPOSAL_VALUE = 42
DEFAULT_PROPOSAL_DESCRIPTION = "Updating DAO value to 42"

# Governor timing, in blocks
DEFAULT_VOTING_DELAY_BLOCKS = 1
DEFAULT_VOTING_PERIOD_BLOCKS = 5

# Target contract read-back and mutation
DAO_UPDATE_FUNCTION = "updateValue"
DAO_VALUE_FUNCTION = "daoVal"

# Governor event names
PROPOSAL_CREATED_EVENT = "ProposalCreated"
VOTE_CAST_EVENT = "VoteCast"
PROPOSAL_EXECUTED_EVENT = "ProposalExecuted"

# Test-node only RPC method used to produce an empty block
EVM_MINE_METHOD = "evm_mine"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
