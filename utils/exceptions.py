from typing import List, Optional


class GovernanceSimulationError(Exception):
    """Base class for every fatal error raised while driving the simulation."""


class NodeConnectionError(GovernanceSimulationError, ConnectionError):
    """The JSON-RPC node could not be reached."""

    def __init__(self, provider_uri: str, message: Optional[str] = None):
        self.provider_uri = provider_uri
        super().__init__(message or f"Could not connect to node at {provider_uri}")


class ArtifactNotFound(GovernanceSimulationError):
    """A compiled contract artifact is missing or does not carry an ABI/bytecode."""


class DeploymentRejected(GovernanceSimulationError):
    """A constructor reverted or ran out of gas.

    `orphaned` lists the addresses of contracts already deployed earlier in
    the same run; they stay on-chain and are not reused.
    """

    def __init__(self, contract_name: str, reason: str, orphaned: Optional[List[str]] = None):
        self.contract_name = contract_name
        self.reason = reason
        self.orphaned = list(orphaned or [])
        super().__init__(f"Deployment of {contract_name} rejected: {reason}")


class TransactionReverted(GovernanceSimulationError):
    """A state-changing call was rejected by the contract or the node."""

    def __init__(self, function_name: str, reason: str, transaction_hash: Optional[str] = None):
        self.function_name = function_name
        self.reason = reason
        self.transaction_hash = transaction_hash
        super().__init__(f"Transaction {function_name} reverted: {reason}")


class EventNotFound(GovernanceSimulationError):
    """A confirmation record does not contain the requested event."""


class RpcRequestError(GovernanceSimulationError):
    """A raw JSON-RPC request answered with an error object."""


class StateMismatch(GovernanceSimulationError):
    """An observed on-chain value differs from the expected one."""

    def __init__(self, what: str, expected, actual):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected {expected!r}, got {actual!r}")
