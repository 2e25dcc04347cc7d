"""
RPC client factory and response helpers.

get_connection() opens a solana-py Client for one gateway call. The helpers
below read values out of solana-py/solders response objects and also accept
the equivalent plain-dict JSON shapes (camelCase keys), so shaping code works
the same on both.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException

from solana_connect.config.settings import DEFAULT_COMMITMENT, DEFAULT_TIMEOUT_SEC, MAINNET_RPC_URL
from solana_connect.core.exceptions import RequestFailed
from solana_connect.logging import get_logger

logger = get_logger(__name__)

TOKEN_PROGRAM_ID_STR = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


def get_connection(
    rpc_url: str = MAINNET_RPC_URL,
    commitment: str = DEFAULT_COMMITMENT,
    timeout: float = DEFAULT_TIMEOUT_SEC,
) -> Client:
    """Return a new blocking RPC client for rpc_url at the given commitment."""
    return Client(rpc_url, commitment=Commitment(commitment), timeout=timeout)


@contextmanager
def rpc_errors(method: str, error_cls: type[RequestFailed] = RequestFailed) -> Iterator[None]:
    """
    Re-raise RPC, transport and response-shape errors as error_cls.

    The original exception is kept as __cause__ and its message is carried over.
    """
    try:
        yield
    except (RPCException, SolanaRpcException) as e:
        # SolanaRpcException keeps its text in error_msg, not args
        message = getattr(e, "error_msg", None) or str(e)
        logger.warning("rpc_request_failed", method=method, error=message)
        raise error_cls(f"{method} failed: {message}", method=method) from e
    except (AttributeError, KeyError, TypeError, IndexError) as e:
        logger.warning("rpc_response_malformed", method=method, error=str(e))
        raise error_cls(f"{method} returned an unexpected response: {e}", method=method) from e


def get_resp_value(resp: Any) -> Any:
    """The .value of an RPC response (solders response or dict with result.value)."""
    if resp is None:
        return None
    if isinstance(resp, dict):
        result = resp.get("result", resp)
        return result.get("value") if isinstance(result, dict) else None
    if hasattr(resp, "value"):
        return resp.value
    return getattr(getattr(resp, "result", None), "value", None)


def _field(obj: Any, snake: str, camel: str | None = None) -> Any:
    """Read snake_case attribute or dict key, falling back to camelCase."""
    if isinstance(obj, dict):
        if snake in obj:
            return obj[snake]
        return obj.get(camel) if camel else None
    value = getattr(obj, snake, None)
    if value is None and camel:
        value = getattr(obj, camel, None)
    return value


def parsed_info(acct: Any) -> dict[str, Any]:
    """
    account.data.parsed.info of a jsonParsed keyed account (token account or mint).

    Raises KeyError when the account was not returned in jsonParsed form.
    """
    account = _field(acct, "account")
    if account is None:
        # get_account_info_json_parsed returns the account itself, not a keyed account
        account = acct
    data = _field(account, "data")
    parsed = _field(data, "parsed")
    if isinstance(parsed, dict):
        info = parsed.get("info")
    else:
        info = getattr(parsed, "info", None)
    if not isinstance(info, dict):
        raise KeyError("parsed.info missing from account data")
    return info


def keyed_account_pubkey(acct: Any) -> str:
    return str(_field(acct, "pubkey"))


def signature_fields(entry: Any) -> tuple[str, int, int | None, Any]:
    """(signature, slot, block_time, err) from one getSignaturesForAddress entry."""
    signature = _field(entry, "signature")
    slot = _field(entry, "slot")
    block_time = _field(entry, "block_time", "blockTime")
    err = _field(entry, "err")
    return (
        str(signature),
        int(slot),
        int(block_time) if block_time is not None else None,
        err,
    )
