"""
Chain endpoints: block height, gas prices and blocks.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import BlockHeightResponse, BlockResponse, GasPriceResponse
from histori_client.types import GetBlockRequest, GetGasPriceRequest, RequestOptions


class ChainAPI(ResourceAPI):
    """
    Implementation of Chain endpoints
    """

    def get_block_height_response(
        self, options: RequestOptions | None = None
    ) -> BlockHeightResponse:
        """GET /{version}/{network}/chain/block-height"""
        return self._fetch("/chain/block-height", BlockHeightResponse, options=options)

    def get_block_height(self, options: RequestOptions | None = None) -> int:
        """Returns the current block height of the network"""
        return self.get_block_height_response(options).block_height

    def get_gas_info(
        self, dto: GetGasPriceRequest, options: RequestOptions | None = None
    ) -> GasPriceResponse:
        """
        GET /{version}/{network}/chain/gas-price

        Current gas price estimate for a native transfer,
        an erc transfer or a swap (see GasPriceType).
        """
        return self._fetch("/chain/gas-price", GasPriceResponse, dto.query_params(), options)

    def get_block(
        self, dto: GetBlockRequest | None = None, options: RequestOptions | None = None
    ) -> BlockResponse:
        """
        GET /{version}/{network}/chain/block

        Fetches a block by hash, by block height or by date.
        When `dto.block_hash` is set the tag is ignored.
        Without any selector the API answers with the latest block.
        """
        params = dto.query_params() if dto is not None else None
        return self._fetch("/chain/block", BlockResponse, params, options)
