# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified By: Cuong CT, 6/12/2025
# Change Description: Refactored to use Pydantic models.

from typing import Any, Dict, List, Optional

from governance.models.confirmation import ConfirmationLog, DecodedEvent, TransactionConfirmation
from utils.formatter_utils import hex_to_dec, to_hex_str, to_normalized_address


class ConfirmationLogMapper(object):
    @staticmethod
    def web3_dict_to_log(web3_dict: Dict[str, Any]) -> ConfirmationLog:
        return ConfirmationLog(
            log_index=hex_to_dec(web3_dict.get("logIndex")),
            transaction_hash=to_hex_str(web3_dict.get("transactionHash")),
            block_number=hex_to_dec(web3_dict.get("blockNumber")),
            address=to_normalized_address(web3_dict.get("address")),
            data=to_hex_str(web3_dict.get("data")),
            topics=[to_hex_str(topic) for topic in web3_dict.get("topics", [])],
        )


class TransactionConfirmationMapper(object):
    def __init__(self, log_mapper=None):
        if log_mapper is None:
            self.log_mapper = ConfirmationLogMapper()
        else:
            self.log_mapper = log_mapper

    def web3_receipt_to_confirmation(
        self,
        receipt: Dict[str, Any],
        function_name: Optional[str] = None,
        events: Optional[List[DecodedEvent]] = None,
    ) -> TransactionConfirmation:
        confirmation = TransactionConfirmation(
            function_name=function_name,
            transaction_hash=to_hex_str(receipt.get("transactionHash")),
            block_number=hex_to_dec(receipt.get("blockNumber")),
            from_address=to_normalized_address(receipt.get("from")),
            to_address=to_normalized_address(receipt.get("to")),
            contract_address=to_normalized_address(receipt.get("contractAddress")),
            gas_used=hex_to_dec(receipt.get("gasUsed")),
            status=hex_to_dec(receipt.get("status")),
        )

        if "logs" in receipt:
            confirmation.logs = [self.log_mapper.web3_dict_to_log(log) for log in receipt["logs"]]

        if events:
            confirmation.events = sorted(events, key=lambda event: event.log_index or 0)

        return confirmation

    @staticmethod
    def web3_event_to_decoded_event(web3_event: Dict[str, Any]) -> DecodedEvent:
        return DecodedEvent(
            name=web3_event.get("event"),
            address=to_normalized_address(web3_event.get("address")),
            log_index=hex_to_dec(web3_event.get("logIndex")),
            args=dict(web3_event.get("args", {})),
        )
