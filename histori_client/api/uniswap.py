"""
Uniswap V3 price endpoint.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import UniswapPriceResponse
from histori_client.types import RequestOptions


class UniswapAPI(ResourceAPI):
    """
    Implementation of Uniswap endpoints
    """

    def get_eth_to_usd_response(
        self, options: RequestOptions | None = None
    ) -> UniswapPriceResponse:
        """
        GET /{version}/{network}/uniswap/eth-usd-price

        ETH price in USD as quoted by the Uniswap V3 pool on the network.
        """
        return self._fetch("/uniswap/eth-usd-price", UniswapPriceResponse, options=options)

    def get_eth_to_usd_price(self, options: RequestOptions | None = None) -> str:
        """Returns just the price string"""
        return self.get_eth_to_usd_response(options).price
