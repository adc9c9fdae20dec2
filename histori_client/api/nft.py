"""
NFT endpoints for ERC721 and ERC1155 tokens: token uri, metadata and ownership.
"""

from __future__ import annotations

from typing import Any

from histori_client.api.base import ResourceAPI
from histori_client.models import NFTOwnershipResponse, TokenUriResponse
from histori_client.types import GetNFTOwnerRequest, GetTokenUriRequest, RequestOptions


class NFTAPI(ResourceAPI):
    """
    Implementation of NFT endpoints
    Methods:
        get_token_info(): token uri and metadata of a token
        check_owner_of_token(): ownership of a token by an address
    The remaining methods project a single field out of those two.
    """

    def get_token_info(
        self, dto: GetTokenUriRequest, options: RequestOptions | None = None
    ) -> TokenUriResponse:
        """GET /{version}/{network}/nft/token-uri"""
        return self._fetch("/nft/token-uri", TokenUriResponse, dto.query_params(), options)

    def get_token_metadata(
        self, dto: GetTokenUriRequest, options: RequestOptions | None = None
    ) -> dict[str, Any]:
        return self.get_token_info(dto, options).metadata

    def get_token_uri(self, dto: GetTokenUriRequest, options: RequestOptions | None = None) -> str:
        return self.get_token_info(dto, options).token_uri

    def check_owner_of_token(
        self, dto: GetNFTOwnerRequest, options: RequestOptions | None = None
    ) -> NFTOwnershipResponse:
        """
        GET /{version}/{network}/nft/is-owner

        Checks if `dto.owner` owns `dto.token_id`. Either a block height
        or a date can be passed as `dto.tag` to check at a point in time.
        """
        return self._fetch("/nft/is-owner", NFTOwnershipResponse, dto.query_params(), options)

    def is_owner_of_token(
        self, dto: GetNFTOwnerRequest, options: RequestOptions | None = None
    ) -> bool:
        return self.check_owner_of_token(dto, options).is_owner
