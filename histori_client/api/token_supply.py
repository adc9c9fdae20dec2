"""
Token supply endpoint.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import TokenSupplyResponse
from histori_client.types import GetTokenSupplyRequest, RequestOptions


class TokenSupplyAPI(ResourceAPI):
    """
    Implementation of Token Supply endpoints
    """

    def get_token_supply_response(
        self, dto: GetTokenSupplyRequest, options: RequestOptions | None = None
    ) -> TokenSupplyResponse:
        """
        GET /{version}/{network}/token-supply

        Total supply of the token at `dto.token_address`,
        optionally at a given block height or date.
        """
        return self._fetch("/token-supply", TokenSupplyResponse, dto.query_params(), options)

    def get_token_supply(
        self, dto: GetTokenSupplyRequest, options: RequestOptions | None = None
    ) -> str:
        return self.get_token_supply_response(dto, options).total_supply
