from typing import Any, Dict, List, Optional

from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract
from web3.exceptions import ContractLogicError, TimeExhausted, Web3RPCError
from web3.logs import DISCARD
from web3.types import RPCEndpoint

from constants.constants import EVM_MINE_METHOD
from governance.mappers.confirmation_mapper import TransactionConfirmationMapper
from governance.models.confirmation import DecodedEvent, TransactionConfirmation
from governance.models.contract import ContractArtifact, DeployedContract
from governance.providers.provider_factory import get_async_provider_from_uri
from utils.exceptions import DeploymentRejected, NodeConnectionError, TransactionReverted
from utils.formatter_utils import to_hex_str, to_normalized_address
from utils.logger_utils import get_logger
from utils.rpc_utils import rpc_response_to_result
from utils.validation_utils import validate_block_count

logger = get_logger("Ledger Client")


class LedgerClient(object):
    """
    Thin asynchronous wrapper over a local test node.

    Every state-changing call waits for its receipt before returning, so
    callers always observe confirmed state. Nothing is retried: reverts and
    timeouts surface as TransactionReverted / DeploymentRejected.
    """

    def __init__(
        self,
        provider_uri: str,
        rpc_timeout: int = 60,
        receipt_timeout: int = 120,
        web3: Optional[AsyncWeb3] = None,
    ):
        self.provider_uri = provider_uri
        self.receipt_timeout = receipt_timeout
        if web3 is None:
            web3 = AsyncWeb3(get_async_provider_from_uri(provider_uri, timeout=rpc_timeout))
        self.web3 = web3
        self.confirmation_mapper = TransactionConfirmationMapper()
        self._contracts: Dict[str, AsyncContract] = {}

    async def connect(self) -> int:
        """Checks the node is reachable and returns its chain id."""
        try:
            connected = await self.web3.is_connected()
        except Exception as e:
            raise NodeConnectionError(self.provider_uri, f"Could not connect to node at {self.provider_uri}: {e}") from e

        if not connected:
            raise NodeConnectionError(self.provider_uri)

        chain_id = await self.web3.eth.chain_id
        logger.info(f"Connected to {self.provider_uri} (chain id {chain_id})")
        return chain_id

    async def close(self) -> None:
        disconnect = getattr(self.web3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()

    async def get_accounts(self) -> List[str]:
        accounts = await self.web3.eth.accounts
        return [to_normalized_address(account) for account in accounts]

    async def get_block_number(self) -> int:
        return await self.web3.eth.block_number

    async def mine_blocks(self, count: int) -> int:
        """
        Advances the chain by `count` empty blocks with evm_mine. Only local
        test nodes support this; a real network has to be waited on.
        """
        validate_block_count(count)
        for _ in range(count):
            response = await self.web3.provider.make_request(RPCEndpoint(EVM_MINE_METHOD), [])
            rpc_response_to_result(response, EVM_MINE_METHOD)

        block_number = await self.get_block_number()
        logger.info(f"Moved {count} blocks, now at block {block_number}")
        return block_number

    async def deploy(self, artifact: ContractArtifact, *constructor_args: Any, sender: str) -> DeployedContract:
        factory = self.web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

        tx_hash = None
        try:
            tx_hash = await factory.constructor(*constructor_args).transact({"from": sender})
            receipt = await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except (ContractLogicError, Web3RPCError) as e:
            raise DeploymentRejected(artifact.name, str(e)) from e
        except TimeExhausted as e:
            raise DeploymentRejected(
                artifact.name, f"transaction {to_hex_str(tx_hash)} not mined within {self.receipt_timeout}s"
            ) from e

        if receipt.get("status") == 0:
            raise DeploymentRejected(artifact.name, f"constructor reverted in transaction {to_hex_str(tx_hash)}")

        address = to_normalized_address(receipt.get("contractAddress"))
        if address is None:
            raise DeploymentRejected(artifact.name, "receipt carries no contract address")

        return DeployedContract(
            name=artifact.name,
            address=address,
            abi=artifact.abi,
            transaction_hash=to_hex_str(tx_hash),
            block_number=receipt.get("blockNumber"),
        )

    def attach(self, name: str, address: str, abi: List[Dict[str, Any]]) -> DeployedContract:
        """Wraps an already deployed contract."""
        return DeployedContract(name=name, address=to_normalized_address(address), abi=abi)

    async def transact(
        self, contract: DeployedContract, function_name: str, *args: Any, sender: str
    ) -> TransactionConfirmation:
        web3_contract = self._get_web3_contract(contract)
        contract_function = getattr(web3_contract.functions, function_name)(*args)

        tx_hash = None
        try:
            tx_hash = await contract_function.transact({"from": sender})
            receipt = await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except (ContractLogicError, Web3RPCError) as e:
            raise TransactionReverted(function_name, str(e), to_hex_str(tx_hash)) from e
        except TimeExhausted as e:
            raise TransactionReverted(
                function_name, f"not mined within {self.receipt_timeout}s", to_hex_str(tx_hash)
            ) from e

        confirmation = self.confirmation_mapper.web3_receipt_to_confirmation(
            receipt,
            function_name=function_name,
            events=self._decode_events(web3_contract, receipt),
        )
        if not confirmation.succeeded:
            raise TransactionReverted(function_name, "receipt status 0", confirmation.transaction_hash)

        logger.debug(
            f"{contract.name}.{function_name} mined in block {confirmation.block_number} "
            f"(gas used {confirmation.gas_used})"
        )
        return confirmation

    async def call(self, contract: DeployedContract, function_name: str, *args: Any) -> Any:
        web3_contract = self._get_web3_contract(contract)
        try:
            return await getattr(web3_contract.functions, function_name)(*args).call()
        except ContractLogicError as e:
            raise TransactionReverted(function_name, str(e)) from e

    def encode_call(self, contract: DeployedContract, function_name: str, *args: Any) -> str:
        encoded = self._get_web3_contract(contract).encode_abi(function_name, args=list(args))
        return to_hex_str(encoded)

    @staticmethod
    def keccak_text(text: str) -> bytes:
        return bytes(Web3.keccak(text=text))

    def _get_web3_contract(self, contract: DeployedContract) -> AsyncContract:
        if contract.address not in self._contracts:
            self._contracts[contract.address] = self.web3.eth.contract(address=contract.address, abi=contract.abi)
        return self._contracts[contract.address]

    def _decode_events(self, web3_contract: AsyncContract, receipt: Dict[str, Any]) -> List[DecodedEvent]:
        events = []
        for abi_entry in web3_contract.abi:
            if abi_entry.get("type") != "event":
                continue
            contract_event = getattr(web3_contract.events, abi_entry["name"])()
            for web3_event in contract_event.process_receipt(receipt, errors=DISCARD):
                events.append(self.confirmation_mapper.web3_event_to_decoded_event(web3_event))
        return events
