"""
Dataclasses encoding response data from the Histori API,
and the errors raised by the client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from dataclasses_json import DataClassJsonMixin, config
from dateutil.parser import parse

if TYPE_CHECKING:
    from datetime import datetime

log = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "An unexpected error occurred while contacting the Histori API"
NETWORK_ERROR_KIND = "Network Error"


class HistoriError(Exception):
    """
    The single error shape raised by the client.

    status: upstream HTTP status, or 500 when no response was received
    message: upstream error message, or a description of the failure
    error_kind: upstream error kind (e.g. "Not Found"), or "Network Error"
    """

    def __init__(
        self,
        message: str = FALLBACK_ERROR_MESSAGE,
        status: int = 500,
        error_kind: str = NETWORK_ERROR_KIND,
    ):
        self.message = message or FALLBACK_ERROR_MESSAGE
        self.status = status
        self.error_kind = error_kind
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_kind} ({self.status}): {self.message}"

    def __repr__(self) -> str:
        return (
            f"HistoriError(message={self.message!r}, status={self.status}, "
            f"error_kind={self.error_kind!r})"
        )


class HistoriResponseError(HistoriError):
    """Raised when a successful response can't be shaped into the expected dataclass"""

    def __init__(self, data: Any, response_class: str, err: Exception):
        error_message = f"Can't build {response_class} from {data}"
        log.error(f"{error_message} due to {type(err).__name__}: {err}")
        super().__init__(message=error_message, status=500, error_kind="Response Error")


class CheckedAtMixin:
    """Point-in-time responses carry the timestamp of the block they were read at"""

    checked_at_timestamp: str | None

    @property
    def checked_at(self) -> datetime | None:
        """Parsed `checked_at_timestamp`"""
        if self.checked_at_timestamp is None:
            return None
        return parse(self.checked_at_timestamp)


@dataclass
class BalanceResponse(CheckedAtMixin, DataClassJsonMixin):
    """Response from GET /{version}/{network}/balance/single"""

    network_name: str
    chain_id: int
    token_address: str
    holder: str
    balance: str
    token_name: str | None = None
    token_symbol: str | None = None
    token_type: str | None = None
    checked_at_block: int | None = None
    checked_at_timestamp: str | None = None


@dataclass
class AllowanceResponse(CheckedAtMixin, DataClassJsonMixin):
    """Response from GET /{version}/{network}/allowance/single"""

    network_name: str
    chain_id: int
    token_address: str
    owner: str
    spender: str
    allowance: str
    token_name: str | None = None
    token_symbol: str | None = None
    token_type: str | None = None
    checked_at_block: int | None = None
    checked_at_timestamp: str | None = None


@dataclass
class TokenResponse(DataClassJsonMixin):
    """A single token as returned by /tokens/single and inside /tokens listings"""

    token_address: str
    token_type: str
    name: str
    symbol: str
    network_name: str | None = None
    chain_id: int | None = None
    block_height: int | None = None
    decimals: int | None = None
    granularity: str | None = None


@dataclass
class PaginatedTokensResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/tokens"""

    tokens: list[TokenResponse]
    network_name: str | None = None
    chain_id: int | None = None
    page: int | None = None
    limit: int | None = None
    next: str | None = None
    previous: str | None = None


@dataclass
class ContractTypeResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/contract/is-of-type"""

    token_address: str
    type_checked: str
    is_of_type: bool
    network_name: str | None = None
    chain_id: int | None = None


@dataclass
class BlockHeightResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/chain/block-height"""

    network_name: str
    chain_id: int
    block_height: int


@dataclass
class GasPriceResponse(DataClassJsonMixin):  # pylint: disable=too-many-instance-attributes
    """
    Response from GET /{version}/{network}/chain/gas-price
    All amounts are decimal strings.
    """

    network_name: str
    chain_id: int
    gas_cost_wei: str
    currency: str | None = None
    event_type: str | None = None
    gas_required: str | None = None
    total_cost_dollars: str | None = None
    gas_cost_gwei: str | None = None
    gas_cost_eth: str | None = None
    fee_dollars: str | None = None
    fee_wei: str | None = None
    fee_gwei: str | None = None
    fee_eth: str | None = None
    tip_dollars: str | None = None
    tip_wei: str | None = None
    tip_gwei: str | None = None
    tip_eth: str | None = None


@dataclass
class BlockResponse(DataClassJsonMixin):  # pylint: disable=too-many-instance-attributes
    """Response from GET /{version}/{network}/chain/block"""

    network_name: str
    chain_id: int
    block_hash: str
    block_height: int
    signed_at: str | None = None
    signed_at_timestamp: int | None = None
    block_parent_hash: str | None = None
    extra_data: str | None = None
    miner_address: str | None = None
    gas_used: int | None = None
    gas_limit: int | None = None
    block_gas_cost: str | None = None


@dataclass
class LogEvent(DataClassJsonMixin):
    """A log emitted while executing a transaction"""

    log_index: int
    sender_address: str
    raw_log_topics: list[str] = field(default_factory=list)
    raw_log_data: str | None = None


@dataclass
class TransactionRecord(DataClassJsonMixin):  # pylint: disable=too-many-instance-attributes
    """
    Transaction details. `from` is a keyword in python,
    so the sender lives in `from_address`.
    """

    tx_hash: str
    block_height: int
    from_address: str = field(metadata=config(field_name="from"))
    # None for contract creation
    to: str | None = None
    block_signed_at: str | None = None
    block_hash: str | None = None
    tx_index: int | None = None
    successful: bool | None = None
    value: str | None = None
    gas_offered: str | None = None
    gas_spent: str | None = None
    gas_price: str | None = None
    fees_paid: str | None = None
    input_data: str | None = None
    explorer_url: str | None = None
    log_events: list[LogEvent] = field(default_factory=list)


@dataclass
class TransactionDetailsResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/transaction"""

    network_name: str
    chain_id: int
    transaction: TransactionRecord


@dataclass
class TokenUriResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/nft/token-uri"""

    token_id: int
    token_uri: str
    network_name: str | None = None
    chain_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class NFTOwnershipResponse(CheckedAtMixin, DataClassJsonMixin):
    """Response from GET /{version}/{network}/nft/is-owner"""

    is_owner: bool
    owner: str
    token_id: int
    network_name: str | None = None
    chain_id: int | None = None
    checked_at_block: int | None = None
    checked_at_timestamp: str | None = None


@dataclass
class TokenSupplyResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/token-supply"""

    token_address: str
    total_supply: str
    network_name: str | None = None
    chain_id: int | None = None
    checked_at_block: int | None = None
    checked_at_timestamp: str | None = None


@dataclass
class UniswapPriceResponse(DataClassJsonMixin):
    """Response from GET /{version}/{network}/uniswap/eth-usd-price"""

    chain_id: int
    network: str
    block_height: int
    price: str
