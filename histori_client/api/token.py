"""
Token endpoints: paginated token listing and single token lookup.
"""

from __future__ import annotations

from deprecated import deprecated

from histori_client.api.base import ResourceAPI
from histori_client.models import PaginatedTokensResponse, TokenResponse
from histori_client.types import GetTokenRequest, GetTokensRequest, RequestOptions


class TokenAPI(ResourceAPI):
    """
    Implementation of Token endpoints
    """

    def get_tokens(
        self, dto: GetTokensRequest | None = None, options: RequestOptions | None = None
    ) -> PaginatedTokensResponse:
        """
        GET /{version}/{network}/tokens

        Args:
            dto: optional token type filter, page and limit.
                Omitted fields are left out of the query entirely.
            options: per-call overrides of the client settings

        Returns:
            PaginatedTokensResponse, holding the page of tokens
            and links to the next and previous pages
        """
        dto = dto or GetTokensRequest()
        return self._fetch("/tokens", PaginatedTokensResponse, dto.query_params(), options)

    def get_token(
        self, dto: GetTokenRequest, options: RequestOptions | None = None
    ) -> TokenResponse:
        """GET /{version}/{network}/tokens/single"""
        return self._fetch("/tokens/single", TokenResponse, dto.query_params(), options)

    @deprecated(
        version="0.2.0",
        reason="Use get_token(GetTokenRequest(token_address=...)) instead",
    )
    def get_token_by_address(
        self, token_address: str, options: RequestOptions | None = None
    ) -> TokenResponse:
        """Retrieves details of a specific token by its contract address."""
        return self.get_token(GetTokenRequest(token_address=token_address), options)
