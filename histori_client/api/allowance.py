"""
Allowance endpoint: how much of an owner's tokens a spender is approved to move.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import AllowanceResponse
from histori_client.types import GetAllowanceRequest, RequestOptions


class AllowanceAPI(ResourceAPI):
    """
    Implementation of Allowance endpoints
    """

    def get_allowance_response(
        self, dto: GetAllowanceRequest, options: RequestOptions | None = None
    ) -> AllowanceResponse:
        """GET /{version}/{network}/allowance/single"""
        return self._fetch("/allowance/single", AllowanceResponse, dto.query_params(), options)

    def get_allowance(
        self, dto: GetAllowanceRequest, options: RequestOptions | None = None
    ) -> str:
        """
        Same request as `get_allowance_response`,
        but only the allowance string is returned.
        """
        return self.get_allowance_response(dto, options).allowance
