"""
Contract endpoint: checks whether a contract implements a token standard.
"""

from __future__ import annotations

from histori_client.api.base import ResourceAPI
from histori_client.models import ContractTypeResponse
from histori_client.types import GetContractTypeRequest, RequestOptions


class ContractAPI(ResourceAPI):
    """
    Implementation of Contract endpoints
    """

    def check_contract_type(
        self, dto: GetContractTypeRequest, options: RequestOptions | None = None
    ) -> ContractTypeResponse:
        """
        GET /{version}/{network}/contract/is-of-type

        Checks if the contract at `dto.token_address` implements `dto.token_type`
        (one of erc20, erc721, erc777, erc1155).
        """
        return self._fetch(
            "/contract/is-of-type", ContractTypeResponse, dto.query_params(), options
        )

    def is_contract_of_type(
        self, dto: GetContractTypeRequest, options: RequestOptions | None = None
    ) -> bool:
        return self.check_contract_type(dto, options).is_of_type
