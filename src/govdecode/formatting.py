"""Display helpers for amounts (presentation layer).

Nothing here feeds back into classification or aggregation: these helpers
only turn exact integer amounts into human strings and USD estimates.
Conversions use integer arithmetic or `decimal.Decimal` with enough
precision for uint256 values; floats are never involved.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext

from govdecode.constants import NATIVE_DECIMALS, STABLECOIN_DECIMALS
from govdecode.core.config import TokenDecimals
from govdecode.core.models import FundingTotals

# uint256 has 78 decimal digits; leave headroom for price multiplication
_PRECISION = 200


def format_units(amount: int, decimals: int) -> str:
    """Exact decimal string of `amount / 10**decimals` without trailing zeros.

    >>> format_units(1_500_000, 6)
    '1.5'
    """
    if decimals < 0:
        raise ValueError("decimals must be non-negative")
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)
    if decimals == 0 or frac == 0:
        return f"{sign}{whole}"
    frac_s = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{sign}{whole}.{frac_s}"


def format_ether(amount_wei: int) -> str:
    return format_units(amount_wei, NATIVE_DECIMALS)


def format_token_amount(target: str | None, amount: int, decimals: TokenDecimals) -> str:
    """Format an ERC-20 amount with the token's display decimals (default 18)."""
    return format_units(amount, decimals.for_token(target))


def royalty_percent(bps: int) -> str:
    """'500' bps → '5%'."""
    return f"{format_units(bps, 2)}%"


def to_decimal(amount: int, decimals: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(amount).scaleb(-decimals)


def _safe_price(price: Decimal | int | str | float | None) -> Decimal:
    """Non-positive, non-finite or unparsable prices count as zero."""
    if price is None:
        return Decimal(0)
    try:
        d = Decimal(str(price)) if isinstance(price, float) else Decimal(price)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal(0)
    if not d.is_finite() or d <= 0:
        return Decimal(0)
    return d


def requested_usd_total(
    totals: FundingTotals,
    eth_price_usd: Decimal | int | str | float | None,
    *,
    stablecoin_decimals: int = STABLECOIN_DECIMALS,
) -> Decimal:
    """USD estimate of a proposal's ask: stablecoin at par plus native at `eth_price_usd`."""
    price = _safe_price(eth_price_usd)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        stable = to_decimal(totals.total_stablecoin_minor_units, stablecoin_decimals)
        native = to_decimal(totals.total_native_wei, NATIVE_DECIMALS)
        return stable + native * price
