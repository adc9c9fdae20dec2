"""
Transaction endpoint.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import TransactionDetailsResponse
from histori_client.types import GetTransactionRequest, RequestOptions


class TransactionAPI(ResourceAPI):
    """
    Implementation of Transaction endpoints
    """

    def get_transaction_details(
        self, dto: GetTransactionRequest, options: RequestOptions | None = None
    ) -> TransactionDetailsResponse:
        """GET /{version}/{network}/transaction, including the emitted log events"""
        return self._fetch("/transaction", TransactionDetailsResponse, dto.query_params(), options)
