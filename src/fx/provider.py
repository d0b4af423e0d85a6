"""Latest exchange rate quotes from Yahoo Finance."""

import logging

import pandas as pd
import yfinance as yf

logger = logging.getLogger(__name__)


def fetch_latest_rate(symbol: str = "USDKRW=X", timeout: float = 20.0) -> float:
    """
    Fetch the most recent close for an FX pair.

    Args:
        symbol: Yahoo FX symbol (e.g., "USDKRW=X")
        timeout: Seconds allowed for the request

    Returns:
        Latest rate

    Raises:
        ValueError: If Yahoo returned no usable rate
    """
    hist = yf.Ticker(symbol).history(period="5d", timeout=timeout)

    if hist is None or hist.empty or "Close" not in hist.columns:
        raise ValueError(f"No quote data for {symbol}")

    closes = hist["Close"].dropna()
    if closes.empty:
        raise ValueError(f"No close prices for {symbol}")

    rate = float(closes.iloc[-1])
    if pd.isna(rate) or rate <= 0:
        raise ValueError(f"Invalid rate for {symbol}: {rate}")

    logger.debug(f"{symbol} latest rate: {rate}")
    return rate
