"""
Configuration, per-call options and request objects for the Histori API.

Request objects are plain dataclasses. Each one knows how to render itself
into an ordered mapping of query parameters; `None` values in that mapping
are dropped by the router before serialization.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from dateutil.parser import parse

DEFAULT_BASE_URL = "https://api.histori.xyz"
DEFAULT_VERSION = "v1"
DEFAULT_NETWORK = "eth-mainnet"

QueryParameters = dict[str, Any]
# A point-in-time selector: block height or calendar date/time
Tag = int | datetime | date | str


@dataclass(frozen=True)
class ClientConfig:  # pylint: disable=too-many-instance-attributes
    """Client wide settings, fixed for the lifetime of a client instance"""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    network: str = DEFAULT_NETWORK
    debug: bool = False
    enable_retry: bool = True
    max_retries: int = 2
    # milliseconds
    retry_delay_ms: int = 2000
    # seconds
    request_timeout: float = 10
    source: str = ""


@dataclass(frozen=True)
class RequestOptions:
    """
    Overrides for a single call. Fields left as None fall back to the
    client's ClientConfig; the config itself is never changed.
    """

    version: str | None = None
    network: str | int | None = None
    debug: bool | None = None
    enable_retry: bool | None = None
    max_retries: int | None = None
    retry_delay_ms: int | None = None

    def __post_init__(self) -> None:
        if (self.max_retries is not None and self.max_retries < 0) or (
            self.retry_delay_ms is not None and self.retry_delay_ms < 0
        ):
            raise ValueError("max_retries and retry_delay_ms must not be negative")


class GasPriceType(str, Enum):
    """Transaction kinds for which a gas price can be estimated"""

    NATIVE_TRANSFER = "native_transfer"
    ERC_TRANSFER = "erc_transfer"
    SWAP = "swap"


class TokenType(str, Enum):
    """Token standards a contract can be checked against"""

    ERC20 = "erc20"
    ERC721 = "erc721"
    ERC777 = "erc777"
    ERC1155 = "erc1155"


def iso_timestamp(moment: datetime) -> str:
    """
    Renders `moment` as an ISO-8601 UTC string with millisecond precision,
    e.g. 2024-10-01T12:00:00.000Z. Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def tag_parameters(tag: Tag | None) -> QueryParameters:
    """
    Encodes a tag as query parameters:
        block height (int) -> {"block_height": height}
        datetime or date   -> {"date": iso string}
        None               -> {}
    Strings are accepted too: all digits means a block height,
    anything else is parsed as a date.
    """
    if tag is None:
        return {}
    if isinstance(tag, bool):
        raise ValueError(f"Invalid tag {tag!r}. Must be a block height or a date.")
    if isinstance(tag, int):
        if tag < 0:
            raise ValueError(f"Invalid block height {tag}")
        return {"block_height": tag}
    if isinstance(tag, datetime):
        return {"date": iso_timestamp(tag)}
    if isinstance(tag, date):
        return {"date": tag.isoformat()}
    if isinstance(tag, str):
        if tag.isdigit():
            return {"block_height": int(tag)}
        return {"date": iso_timestamp(parse(tag))}
    raise ValueError(f"Invalid tag {tag!r}. Must be a block height or a date.")


@dataclass
class GetBalanceRequest:
    """Balance of `holder` for the token at `token_address`"""

    holder: str | None = None
    token_address: str | None = None
    tag: Tag | None = None

    def query_params(self) -> QueryParameters:
        return {
            "holder": self.holder,
            "token_address": self.token_address,
            **tag_parameters(self.tag),
        }


@dataclass
class GetAllowanceRequest:
    """Amount `spender` may transfer on behalf of `owner`"""

    owner: str | None = None
    spender: str | None = None
    token_address: str | None = None
    tag: Tag | None = None

    def query_params(self) -> QueryParameters:
        return {
            "owner": self.owner,
            "spender": self.spender,
            "token_address": self.token_address,
            **tag_parameters(self.tag),
        }


@dataclass
class GetTokensRequest:
    """Pagination and filtering for the token listing"""

    token_type: TokenType | str | None = None
    page: int | None = None
    limit: int | None = None

    def query_params(self) -> QueryParameters:
        token_type = self.token_type or None
        return {
            "token_type": TokenType(token_type).value if token_type is not None else None,
            "page": self.page,
            "limit": self.limit,
        }


@dataclass
class GetTokenRequest:
    token_address: str

    def query_params(self) -> QueryParameters:
        return {"token_address": self.token_address}


@dataclass
class GetContractTypeRequest:
    """Does the contract at `token_address` implement `token_type`?"""

    token_address: str
    token_type: TokenType | str

    def query_params(self) -> QueryParameters:
        return {
            "token_address": self.token_address,
            "token_type": TokenType(self.token_type).value,
        }


@dataclass
class GetGasPriceRequest:
    type: GasPriceType | str

    def query_params(self) -> QueryParameters:
        return {"type": GasPriceType(self.type).value}


@dataclass
class GetBlockRequest:
    """
    Selects a block by hash or by tag. When both are given the hash wins.
    """

    block_hash: str | None = None
    tag: Tag | None = None

    def query_params(self) -> QueryParameters:
        if self.block_hash:
            return {"block_hash": self.block_hash}
        return tag_parameters(self.tag)


@dataclass
class GetTransactionRequest:
    tx_hash: str

    def query_params(self) -> QueryParameters:
        return {"tx_hash": self.tx_hash}


@dataclass
class GetTokenUriRequest:
    token_address: str
    token_id: int

    def query_params(self) -> QueryParameters:
        return {"token_address": self.token_address, "token_id": self.token_id}


@dataclass
class GetNFTOwnerRequest:
    """Ownership check of `token_id` at `token_address` for `owner`"""

    token_address: str
    owner: str
    token_id: int
    tag: Tag | None = None

    def query_params(self) -> QueryParameters:
        return {
            "token_address": self.token_address,
            "owner": self.owner,
            "token_id": self.token_id,
            **tag_parameters(self.tag),
        }


@dataclass
class GetTokenSupplyRequest:
    token_address: str
    tag: Tag | None = None

    def query_params(self) -> QueryParameters:
        return {"token_address": self.token_address, **tag_parameters(self.tag)}
