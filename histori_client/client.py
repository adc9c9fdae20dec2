"""
Histori Client: a single entry point to every Histori API resource.
Framework built on Histori's API Documentation
https://docs.histori.xyz
"""

from __future__ import annotations

from typing import Any

from deprecated import deprecated

from histori_client.api.allowance import AllowanceAPI
from histori_client.api.balance import BalanceAPI
from histori_client.api.base import BaseRouter
from histori_client.api.chain import ChainAPI
from histori_client.api.contract import ContractAPI
from histori_client.api.nft import NFTAPI
from histori_client.api.token import TokenAPI
from histori_client.api.token_supply import TokenSupplyAPI
from histori_client.api.transaction import TransactionAPI
from histori_client.api.uniswap import UniswapAPI
from histori_client.models import PaginatedTokensResponse
from histori_client.types import GetTokensRequest, RequestOptions


class HistoriClient(BaseRouter):  # pylint: disable=too-many-instance-attributes
    """
    An interface for the Histori API.

    The client holds the configuration and the request dispatcher,
    and hands itself to every resource service:

        HistoriClient
        |
        |--- BaseRouter
        |       - `get`: authenticated GET with retry on rate limiting
        |
        |--- balance, allowance, tokens, contract, chain,
             transaction, nft, token_supply, uniswap
                - build routes from request objects and shape the responses

    Usage:
        client = HistoriClient(api_key="histori_...", network="eth-mainnet")
        balance = client.balance.get_balance(
            GetBalanceRequest(holder="vitalik.eth", token_address="0x...", tag=20853281)
        )
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.balance = BalanceAPI(self)
        self.allowance = AllowanceAPI(self)
        self.tokens = TokenAPI(self)
        self.contract = ContractAPI(self)
        self.chain = ChainAPI(self)
        self.transaction = TransactionAPI(self)
        self.nft = NFTAPI(self)
        self.token_supply = TokenSupplyAPI(self)
        self.uniswap = UniswapAPI(self)

    @deprecated(
        version="0.2.0",
        reason="Use client.tokens.get_tokens(GetTokensRequest(...)) instead",
    )
    def get_tokens(
        self, page: int, limit: int, options: RequestOptions | None = None
    ) -> PaginatedTokensResponse:
        """Paginated token listing on the client's default network"""
        return self.tokens.get_tokens(GetTokensRequest(page=page, limit=limit), options)
