"""
Price History Retrieval Module

This module retrieves the daily close/volume history for a single ticker.
Any provider failure or empty result is fatal for the analysis run.
"""

import logging
import yfinance as yf
import pandas as pd
from datetime import date, timedelta
from typing import Union

logger = logging.getLogger(__name__)

DAILY_INTERVAL = "1d"
PRICE_COLUMNS = {'Close': 'close', 'Volume': 'volume'}


class DataFetchError(RuntimeError):
    """Raised when the market-data provider is unreachable or returns no bars"""

    def __init__(self, ticker: str, startDate, endDate, reason: str):
        self.ticker = ticker
        self.startDate = startDate
        self.endDate = endDate
        self.reason = reason
        super().__init__(f"Could not fetch {ticker} from {startDate} to {endDate}: {reason}")


def _toDate(value: Union[str, date]) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _normalizeHistory(historicalData: pd.DataFrame) -> pd.DataFrame:
    """
    Reduce a provider frame to ascending, de-duplicated daily close/volume rows.

    Args:
        historicalData: OHLCV frame indexed by (possibly tz-aware) timestamps

    Returns:
        DataFrame with 'close' and 'volume' columns and a naive DatetimeIndex named 'date'
    """
    bars = historicalData[list(PRICE_COLUMNS)].rename(columns=PRICE_COLUMNS).astype(float)

    index = pd.DatetimeIndex(bars.index)
    if index.tz is not None:
        index = index.tz_localize(None)
    bars.index = index.normalize()
    bars.index.name = 'date'

    bars = bars[~bars.index.duplicated(keep='last')].sort_index()
    return bars


def getDailyBars(
    ticker: str,
    startDate: Union[str, date],
    endDate: Union[str, date]
) -> pd.DataFrame:
    """
    Get the daily close/volume history for a single ticker.

    Prices are raw (unadjusted) closes. The end date is inclusive.

    Args:
        ticker: Stock symbol (e.g., '2330.TW', 'AAPL')
        startDate: First calendar day, date or 'YYYY-MM-DD'
        endDate: Last calendar day, date or 'YYYY-MM-DD'

    Returns:
        DataFrame with 'close' and 'volume' columns, one row per trading day

    Raises:
        DataFetchError: if the provider fails or returns no data
    """
    start = _toDate(startDate)
    end = _toDate(endDate)
    logger.info(f"Fetching daily bars for {ticker} from {start} to {end}")

    try:
        stock = yf.Ticker(ticker)
        # Provider end bound is exclusive
        historicalData = stock.history(
            start=start.isoformat(),
            end=(end + timedelta(days=1)).isoformat(),
            interval=DAILY_INTERVAL,
            auto_adjust=False
        )
    except Exception as error:
        raise DataFetchError(ticker, start, end, str(error)) from error

    if historicalData is None or historicalData.empty:
        raise DataFetchError(ticker, start, end, "provider returned no data")

    missingColumns = [c for c in PRICE_COLUMNS if c not in historicalData.columns]
    if missingColumns:
        raise DataFetchError(ticker, start, end, f"missing columns {missingColumns}")

    bars = _normalizeHistory(historicalData)
    if bars['close'].notna().sum() == 0:
        raise DataFetchError(ticker, start, end, "provider returned no close prices")

    logger.info(f"Retrieved {len(bars)} daily bars for {ticker}")
    return bars


# Example usage
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    dailyBars = getDailyBars("2330.TW", "2024-09-01", "2025-09-01")
    print(dailyBars.tail())
