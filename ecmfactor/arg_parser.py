"""
Argument parsing for the ecmfactor command line.
"""
import argparse
import re
from decimal import Decimal, InvalidOperation

_POWER_RE = re.compile(r'^\s*(-?\d+)\s*\^\s*(\d+)\s*$')


def parse_number(value: str) -> int:
    """
    Parse an integer, supporting scientific notation and powers.

    Examples:
        "600851475143" -> 600851475143
        "-12" -> -12
        "1e6" -> 1000000
        "2^64" -> 18446744073709551616

    Scientific notation goes through Decimal, so large exponents stay
    exact; values that are not whole numbers are rejected.

    Raises:
        argparse.ArgumentTypeError: If value cannot be parsed
    """
    match = _POWER_RE.match(value)
    if match:
        return int(match.group(1)) ** int(match.group(2))
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from e
    if not number.is_finite() or number != number.to_integral_value():
        raise argparse.ArgumentTypeError(f"Not a whole number: {value}")
    return int(number)


def positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        result = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from e
    if result <= 0:
        raise argparse.ArgumentTypeError(f"Value must be positive: {value}")
    return result


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the factorisation command."""
    parser = argparse.ArgumentParser(
        prog='ecmfactor',
        description='Factor integers by trial division and the elliptic curve method'
    )
    parser.add_argument('numbers', nargs='+', type=parse_number, metavar='N',
                        help='Numbers to factor (supports 1e6 and 2^64 notation)')

    parser.add_argument('--config', help='Config file path (default: ecmfactor.yaml if present)')

    parser.add_argument('--digits', '-d', type=positive_int,
                        help='Estimated digit length of the smallest prime factor')
    parser.add_argument('--max-digits', type=positive_int,
                        help='Digit estimate at which unsplit composites are given up')
    parser.add_argument('--seed', type=int, help='Seed for curve selection (default: derived from N)')
    parser.add_argument('--step', action='store_true',
                        help='Step through curve seeds in order instead of drawing them at random')

    parser.add_argument('--strict', action='store_true',
                        help='Exit with status 2 if any composite factor is left unresolved')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only print the factorisations')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log search progress')

    return parser
