"""Utility methods for package."""

import importlib.metadata
import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum, IntEnum

API_KEY_PATTERN = re.compile(r"^histori_[a-zA-Z0-9]{8,}$")


class ChainName(str, Enum):
    """Network names understood by the Histori API"""

    ETH_MAINNET = "eth-mainnet"
    ETH_ROPSTEN = "eth-ropsten"


class ChainId(IntEnum):
    """Numeric chain ids matching ChainName"""

    ETH_MAINNET = 1
    ETH_ROPSTEN = 3


def normalize_chain_input(chain: str | int) -> str:
    """
    Returns the network name for `chain`, which may already be a name
    or a numeric chain id (e.g. 1 -> "eth-mainnet").
    """
    if isinstance(chain, bool):
        raise ValueError(f"Unsupported chain {chain!r}")
    if isinstance(chain, int):
        try:
            return ChainName[ChainId(chain).name].value
        except ValueError as err:
            raise ValueError(f"Unsupported chain ID {chain}") from err
    if isinstance(chain, ChainName):
        return chain.value
    return chain


def is_valid_api_key(api_key: str) -> bool:
    """Histori keys look like `histori_` followed by at least 8 alphanumerics"""
    return API_KEY_PATTERN.match(api_key) is not None


def calculate_pretty_balance(value: int | str, decimals: int, precision: int = 4) -> str:
    """
    Converts a raw on-chain integer amount into a human readable decimal string,
    e.g. calculate_pretty_balance("1500000000000000000", 18, 2) -> "1.50"
    """
    amount = Decimal(int(value)).scaleb(-decimals)
    return str(amount.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP))


# symbol and minor digits for currencies with a dedicated sign
CURRENCY_FORMATS = {
    "USD": ("$", 2),
    "EUR": ("€", 2),
    "GBP": ("£", 2),
    "JPY": ("¥", 0),
}


def prettify_currency(value: int | str, decimals: int, currency: str = "USD") -> str:
    """
    Scales a raw on-chain amount by `decimals` and formats it as money,
    e.g. prettify_currency(1234567890, 6, "USD") -> "$1,234.57"
    Currencies without a known sign are prefixed with their code: "CHF 1,234.57"
    """
    code = currency.upper()
    symbol, digits = CURRENCY_FORMATS.get(code, (f"{code} ", 2))
    amount = Decimal(calculate_pretty_balance(value, decimals, digits))
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{digits}f}"


def get_package_version(package_name: str) -> str | None:
    """
    Returns the package version by `package_name` using the importlib.metadata module
    """
    try:
        return importlib.metadata.version(package_name)
    except importlib.metadata.PackageNotFoundError:
        return None
