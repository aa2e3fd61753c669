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
# Change Description: Refactored for performance, readability, and type safety.

from typing import Any, Dict, Union

from utils.exceptions import RpcRequestError
from utils.logger_utils import get_logger

logger = get_logger(__name__)

JSON_RPC_METHOD_NOT_FOUND = -32601
JSON_RPC_INTERNAL_ERROR = -32603
JSON_RPC_SERVER_ERROR_MIN = -32099
JSON_RPC_SERVER_ERROR_MAX = -32000


def rpc_response_to_result(response: Dict[str, Any], method: str = "request") -> Any:
    """
    Unwraps a raw JSON-RPC response. Test-node methods such as evm_mine
    legitimately answer with a null or "0x0" result, so only an error object
    is treated as a failure.
    """
    error = response.get("error")
    if error is None:
        return response.get("result")

    code = error.get("code") if isinstance(error, dict) else None
    message = error.get("message") if isinstance(error, dict) else str(error)

    if code == JSON_RPC_METHOD_NOT_FOUND:
        raise RpcRequestError(f"{method} is not supported by this node. Is it a local test node? ({message})")

    if is_server_error(code):
        raise RpcRequestError(f"Node failed to serve {method}: {message} (code {code})")

    raise RpcRequestError(f"{method} rejected: {message} (code {code})")


def is_server_error(error_code: Union[int, str, None]) -> bool:
    if error_code is None or not isinstance(error_code, int):
        return False

    # https://www.jsonrpc.org/specification#error_object
    if error_code == JSON_RPC_INTERNAL_ERROR or (JSON_RPC_SERVER_ERROR_MAX >= error_code >= JSON_RPC_SERVER_ERROR_MIN):
        return True

    return False
