"""Constant product (x * y = k) swap math.

All amounts are integers in token base units, rounded the way the
UniswapV2 router rounds them.
"""

from ecorouter.errors import InsufficientLiquidityError

# Fee multiplier denominator: amount_in_with_fee = amount_in * fee_multiplier / 10000
FEE_DENOMINATOR = 10000


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = 9970,
) -> int:
    """Calculate output amount using constant product formula.

    Formula: amount_out = (in * fee * res_out) / (res_in * 10000 + in * fee)

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee_multiplier: Fee multiplier (default 9970 for 0.3% fee, 9975 for 0.25%)

    Returns:
        Output token amount (floored)

    Raises:
        InsufficientLiquidityError: If either reserve is empty
    """
    if amount_in <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError("Pool has no reserves")

    amount_in_with_fee = amount_in * fee_multiplier
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee

    return numerator // denominator


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = 9970,
) -> int:
    """Calculate required input for desired output.

    Formula: amount_in = (res_in * out * 10000) / ((res_out - out) * fee) + 1

    Raises:
        InsufficientLiquidityError: If either reserve is empty or amount_out
            would drain the output reserve
    """
    if amount_out <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError("Pool has no reserves")
    if amount_out >= reserve_out:
        raise InsufficientLiquidityError(
            f"Requested output {amount_out} exceeds reserve {reserve_out}"
        )

    numerator = reserve_in * amount_out * FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * fee_multiplier

    return numerator // denominator + 1


__all__ = ["get_amount_out", "get_amount_in", "FEE_DENOMINATOR"]
