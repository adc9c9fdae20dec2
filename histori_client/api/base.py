"""
Basic Histori Client Classes: configuration, request dispatch and
the shared plumbing of every resource service.
Framework built on Histori's API Documentation
https://docs.histori.xyz
"""

from __future__ import annotations

import logging
import os
import time
import urllib.parse
from typing import Any, TypeVar

from dataclasses_json import DataClassJsonMixin
from requests import RequestException, Response, Session

from histori_client.models import (
    FALLBACK_ERROR_MESSAGE,
    NETWORK_ERROR_KIND,
    HistoriError,
    HistoriResponseError,
)
from histori_client.types import (
    DEFAULT_BASE_URL,
    DEFAULT_NETWORK,
    DEFAULT_VERSION,
    ClientConfig,
    QueryParameters,
    RequestOptions,
)
from histori_client.util import get_package_version, is_valid_api_key, normalize_chain_input

RATE_LIMITED_STATUS = 429

ResponseT = TypeVar("ResponseT", bound=DataClassJsonMixin)


class BaseHistoriClient:
    """
    A Base Client for Histori which sets up default values
    and provides some convenient functions to use in other clients
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        version: str = DEFAULT_VERSION,
        network: str | int = DEFAULT_NETWORK,
        debug: bool = False,
        enable_retry: bool = True,
        max_retries: int = 2,
        retry_delay_ms: int = 2000,
        request_timeout: float | None = None,
        source: str = "",
    ):
        # Read from environment variables if not provided
        api_key = api_key or os.environ["HISTORI_API_KEY"]
        base_url = base_url or os.environ.get("HISTORI_API_BASE_URL", DEFAULT_BASE_URL)
        request_timeout = request_timeout or float(
            os.environ.get("HISTORI_API_REQUEST_TIMEOUT", "10")
        )
        if max_retries < 0 or retry_delay_ms < 0:
            raise ValueError("max_retries and retry_delay_ms must not be negative")

        self.config = ClientConfig(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            version=version,
            network=normalize_chain_input(network),
            debug=debug,
            enable_retry=enable_retry,
            max_retries=max_retries,
            retry_delay_ms=retry_delay_ms,
            request_timeout=request_timeout,
            source=source,
        )
        self.logger = logging.getLogger(__name__)
        if not is_valid_api_key(api_key):
            self.logger.warning("API key does not look like a Histori key (histori_...)")

    @property
    def version(self) -> str:
        """Default API version, e.g. v1"""
        return self.config.version

    @property
    def network(self) -> str:
        """Default network, e.g. eth-mainnet"""
        return self.config.network

    def default_headers(self) -> dict[str, str]:
        """Return default headers containing Histori Api key"""
        client_version = get_package_version("histori-client") or "0.1.0"
        return {
            "x-api-key": self.config.api_key,
            "User-Agent": (
                f"histori-client/{client_version} (https://pypi.org/project/histori-client/)"
            ),
        }

    ############
    # Utilities:
    ############

    def route_prefix(self, options: RequestOptions | None = None) -> str:
        """`/{version}/{network}` where per-call options win over the client defaults"""
        version = self.config.version
        network = self.config.network
        if options is not None:
            if options.version is not None:
                version = options.version
            if options.network is not None:
                network = normalize_chain_input(options.network)
        return f"/{version}/{network}"

    def build_query(self, params: QueryParameters | None = None) -> str:
        """
        Serializes `params` in order, dropping keys without a value.
        The configured `source` is appended last. Returns "" when nothing remains.
        """
        result = {key: value for key, value in (params or {}).items() if value is not None}
        if self.config.source:
            result["source"] = self.config.source
        if not result:
            return ""
        return "?" + urllib.parse.urlencode(result)


class BaseRouter(BaseHistoriClient):
    """Extending the Base Client with the request dispatcher"""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.http = Session()

    def get(self, route: str, options: RequestOptions | None = None) -> Any:
        """
        GET `route` (server relative, query string included) and return the decoded body.

        Rate limited requests (429) are retried sequentially, at most
        `max_retries` times and `retry_delay_ms` apart. Every other failure is
        raised immediately as a HistoriError.
        """
        debug = self._effective(options, "debug")
        enable_retry = self._effective(options, "enable_retry")
        retry_delay_ms = self._effective(options, "retry_delay_ms")
        retries = self._effective(options, "max_retries")

        url = f"{self.config.base_url}{route}"
        self.logger.debug(f"GET received input url={url}")
        while True:
            try:
                response = self.http.get(
                    url=url,
                    headers=self.default_headers(),
                    timeout=self.config.request_timeout,
                )
                response.raise_for_status()
                response_json = response.json()
            except RequestException as err:
                status = _status_of(err)
                if enable_retry and retries > 0 and status == RATE_LIMITED_STATUS:
                    if debug:
                        self.logger.warning(
                            f"Rate limit hit on GET {route}, retrying in {retry_delay_ms}ms "
                            f"({retries} retries left)"
                        )
                    time.sleep(retry_delay_ms / 1000)
                    retries -= 1
                    continue
                if debug:
                    self.logger.error(f"Error in GET {route} options={options} error={err!r}")
                raise _normalize(err) from err

            if debug:
                self.logger.info(
                    f"GET {route} status={response.status_code} data={response_json}"
                )
            return response_json

    def _effective(self, options: RequestOptions | None, name: str) -> Any:
        if options is not None and getattr(options, name) is not None:
            return getattr(options, name)
        return getattr(self.config, name)


class ResourceAPI:
    """
    Shared plumbing for resource services: path building, dispatching
    and shaping the response. Services keep no state of their own.
    """

    def __init__(self, router: BaseRouter):
        self._router = router

    def _route(
        self,
        resource: str,
        params: QueryParameters | None = None,
        options: RequestOptions | None = None,
    ) -> str:
        return (
            f"{self._router.route_prefix(options)}{resource}"
            f"{self._router.build_query(params)}"
        )

    def _fetch(
        self,
        resource: str,
        response_class: type[ResponseT],
        params: QueryParameters | None = None,
        options: RequestOptions | None = None,
    ) -> ResponseT:
        """GET `resource` and build `response_class` from the body"""
        response_json = self._router.get(self._route(resource, params, options), options)
        if not isinstance(response_json, dict):
            err = TypeError(f"expected a JSON object, got {type(response_json).__name__}")
            raise HistoriResponseError(response_json, response_class.__name__, err)
        try:
            return response_class.from_dict(response_json)
        except (AttributeError, KeyError, TypeError, ValueError) as err:
            raise HistoriResponseError(response_json, response_class.__name__, err) from err


def _status_of(err: RequestException) -> int | None:
    response: Response | None = err.response
    return response.status_code if response is not None else None


def _normalize(err: RequestException) -> HistoriError:
    """Collapse any transport or upstream failure into a HistoriError"""
    response: Response | None = err.response
    if response is None:
        return HistoriError(
            message=str(err) or FALLBACK_ERROR_MESSAGE,
            status=500,
            error_kind=NETWORK_ERROR_KIND,
        )

    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or body.get("error_message")
    if isinstance(message, list):
        message = "; ".join(str(part) for part in message)
    error_kind = body.get("error")
    return HistoriError(
        message=str(message) if message else str(err) or FALLBACK_ERROR_MESSAGE,
        status=response.status_code,
        error_kind=str(error_kind) if error_kind else NETWORK_ERROR_KIND,
    )
