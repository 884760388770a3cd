"""
Technical Indicator Calculation Module

Derives daily return, trailing moving averages, MACD and RSI from a daily close
series. Moving averages and returns use the raw closes; MACD and RSI run on a
forward-filled copy and are realigned to the full date index afterwards.
"""

import logging
import pandas as pd
import numpy as np
from typing import Optional, Tuple

from analysis_config import (
    AnalysisConfig, DEFAULT_LONG_MA_WINDOW, DEFAULT_MACD_FAST,
    DEFAULT_MACD_SLOW, DEFAULT_MACD_SIGNAL, DEFAULT_RSI_PERIOD
)

logger = logging.getLogger(__name__)


def calculateDailyReturn(prices: pd.Series) -> pd.Series:
    """
    Calculate the simple return of each close versus the previous close.

    Args:
        prices: Series of raw close prices

    Returns:
        Series of returns; NaN on the first row, after a gap, or where the previous close is zero
    """
    previousPrices = prices.shift(1)
    return (prices - previousPrices) / previousPrices.where(previousPrices != 0)


def calculateSMA(prices: pd.Series, period: int = DEFAULT_LONG_MA_WINDOW) -> pd.Series:
    """
    Calculate a right-aligned Simple Moving Average.

    Args:
        prices: Series of price data
        period: Number of periods for the moving average

    Returns:
        Series with SMA values, NaN until the window is full or while it spans a gap
    """
    return prices.rolling(window=period, min_periods=period).mean()


def calculateEMA(prices: pd.Series, period: int = DEFAULT_MACD_FAST, wilder: bool = False) -> pd.Series:
    """
    Calculate an Exponential Moving Average seeded with a simple average.

    Leading NaNs are skipped. The first value is the mean of the first `period`
    observations; after that the standard recurrence applies with smoothing
    factor 2/(period+1), or 1/period when `wilder` is set.

    Args:
        prices: Series of price data
        period: EMA span
        wilder: Use Wilder's smoothing factor

    Returns:
        Series with EMA values, NaN during warm-up
    """
    values = prices.to_numpy(dtype=float)
    ema = np.full(len(values), np.nan)

    validPositions = np.flatnonzero(~np.isnan(values))
    if len(validPositions) == 0:
        return pd.Series(ema, index=prices.index)

    firstValid = validPositions[0]
    seedPosition = firstValid + period - 1
    if seedPosition >= len(values):
        return pd.Series(ema, index=prices.index)

    smoothing = 1.0 / period if wilder else 2.0 / (period + 1)
    ema[seedPosition] = values[firstValid:seedPosition + 1].mean()
    for i in range(seedPosition + 1, len(values)):
        ema[i] = values[i] * smoothing + ema[i - 1] * (1 - smoothing)

    return pd.Series(ema, index=prices.index)


def calculateMACD(
    prices: pd.Series,
    fastPeriod: int = DEFAULT_MACD_FAST,
    slowPeriod: int = DEFAULT_MACD_SLOW,
    signalPeriod: int = DEFAULT_MACD_SIGNAL,
    percent: bool = False
) -> Tuple[pd.Series, pd.Series, pd.Series]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    Args:
        prices: Series of gap-free price data
        fastPeriod: Fast EMA period
        slowPeriod: Slow EMA period
        signalPeriod: Signal line EMA period
        percent: Express the MACD line as 100 * (fast / slow - 1)

    Returns:
        Tuple of (MACD line, Signal line, Histogram)
    """
    fastEma = calculateEMA(prices, fastPeriod)
    slowEma = calculateEMA(prices, slowPeriod)

    if percent:
        macdLine = 100 * (fastEma / slowEma - 1)
    else:
        macdLine = fastEma - slowEma
    signalLine = calculateEMA(macdLine, signalPeriod)
    histogram = macdLine - signalLine

    return macdLine, signalLine, histogram


def calculateRSI(prices: pd.Series, period: int = DEFAULT_RSI_PERIOD) -> pd.Series:
    """
    Calculate Relative Strength Index with Wilder smoothing.

    Args:
        prices: Series of gap-free price data
        period: Number of periods for RSI calculation

    Returns:
        Series with RSI values (0-100); the first `period` rows are NaN, as is
        any row whose average loss is zero
    """
    # Calculate price changes
    delta = prices.diff()

    # Separate gains and losses, keeping the leading NaN
    gains = delta.clip(lower=0)
    losses = (-delta).clip(lower=0)

    averageGains = calculateEMA(gains, period, wilder=True)
    averageLosses = calculateEMA(losses, period, wilder=True)

    relativeStrength = averageGains / averageLosses.where(averageLosses != 0)
    return 100 - (100 / (1 + relativeStrength))


def forwardFillPrices(prices: pd.Series) -> pd.Series:
    """Carry the last observed close forward and drop leading missing rows."""
    return prices.ffill().dropna()


def alignToIndex(values: pd.Series, index: pd.Index) -> pd.Series:
    """Left-pad a tail-aligned indicator series with NaN so it spans `index`."""
    return values.reindex(index)


def addIndicatorsToDataFrame(dataFrame: pd.DataFrame, config: Optional[AnalysisConfig] = None) -> pd.DataFrame:
    """
    Adds daily return, moving averages, MACD and RSI columns to a frame that has
    at least a 'close' column.

    Args:
        dataFrame: DataFrame of daily bars indexed by date
        config: Indicator windows; defaults to AnalysisConfig()

    Returns:
        The same DataFrame with new indicator columns added in-place
    """
    config = config or AnalysisConfig()
    closePrices = dataFrame['close']

    missingCount = int(closePrices.isna().sum())
    if missingCount:
        logger.warning(f"{missingCount} missing close values; forward-filled for MACD/RSI only")

    longestWindow = max(config.longWindow, config.macdSlow + config.macdSignal - 1, config.rsiPeriod + 1)
    if len(dataFrame) < longestWindow:
        logger.warning(f"Only {len(dataFrame)} rows, {longestWindow} needed for every indicator to be defined")

    dataFrame['daily_return'] = calculateDailyReturn(closePrices)
    dataFrame[config.shortLabel] = calculateSMA(closePrices, config.shortWindow)
    dataFrame[config.longLabel] = calculateSMA(closePrices, config.longWindow)

    filledPrices = forwardFillPrices(closePrices)
    macdLine, signalLine, histogram = calculateMACD(
        filledPrices, config.macdFast, config.macdSlow, config.macdSignal, percent=config.macdPercent
    )
    dataFrame['MACD'] = alignToIndex(macdLine, dataFrame.index)
    dataFrame['SignalLine'] = alignToIndex(signalLine, dataFrame.index)
    dataFrame['MACD_Histogram'] = alignToIndex(histogram, dataFrame.index)
    dataFrame['RSI'] = alignToIndex(calculateRSI(filledPrices, config.rsiPeriod), dataFrame.index)

    logger.debug(
        f"Indicators defined from row: MACD {dataFrame['MACD'].first_valid_index()}, "
        f"RSI {dataFrame['RSI'].first_valid_index()}"
    )
    return dataFrame
