"""Shared utilities for price providers."""

NSE_SUFFIX = ".NS"


def normalize_nse_symbol(symbol: str) -> str:
    """Uppercase a ticker and add the NSE suffix Yahoo Finance expects."""
    sym = symbol.strip().upper()
    if "." not in sym:
        sym = f"{sym}{NSE_SUFFIX}"
    return sym
