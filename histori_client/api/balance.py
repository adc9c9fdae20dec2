"""
Balance endpoint: the amount of a token held by an address,
optionally at a given block height or date.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import BalanceResponse
from histori_client.types import GetBalanceRequest, RequestOptions


class BalanceAPI(ResourceAPI):
    """
    Implementation of Balance endpoints
    """

    def get_balance_response(
        self, dto: GetBalanceRequest, options: RequestOptions | None = None
    ) -> BalanceResponse:
        """
        GET /{version}/{network}/balance/single

        Args:
            dto: holder, token address and an optional tag (block height or date)
            options: per-call overrides of the client settings

        Returns:
            BalanceResponse with token details and the checked block
        """
        return self._fetch("/balance/single", BalanceResponse, dto.query_params(), options)

    def get_balance(self, dto: GetBalanceRequest, options: RequestOptions | None = None) -> str:
        """Returns just the raw balance (a decimal string in the token's smallest unit)"""
        return self.get_balance_response(dto, options).balance
