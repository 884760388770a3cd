"""
Signal Extraction Module

Classifies each day by moving average ordering and flags only the first day of
every contiguous Buy or Sell run, so a trend is not re-flagged daily.
"""

import logging
import numpy as np
import pandas as pd
from typing import Optional, Tuple

from analysis_config import AnalysisConfig
from analysis_types import SignalType

logger = logging.getLogger(__name__)


def classifySignals(shortMovingAverage: pd.Series, longMovingAverage: pd.Series) -> pd.Series:
    """
    Args:
        shortMovingAverage: Short window moving average
        longMovingAverage: Long window moving average on the same index

    Returns:
        Object Series holding "Buy", "Sell" or None

    Buy when the short average is above the long one, Sell when below. Equal or
    undefined averages leave the day without a signal.
    """
    signals = pd.Series(np.full(len(shortMovingAverage), None, dtype=object), index=shortMovingAverage.index)
    signals.loc[shortMovingAverage > longMovingAverage] = SignalType.BUY.value
    signals.loc[shortMovingAverage < longMovingAverage] = SignalType.SELL.value
    return signals


def markFirstSignals(signals: pd.Series) -> Tuple[pd.Series, pd.Series]:
    """
    Flag the rising edge into each Buy and Sell run.

    A day is a first signal when it carries the signal and the previous day does
    not (a missing previous day counts as different).

    Args:
        signals: Series of "Buy", "Sell" or None

    Returns:
        Tuple of boolean Series (buy first, sell first)
    """
    previousSignals = signals.shift(1)

    buySignalFirst = (signals == SignalType.BUY.value) & (previousSignals != SignalType.BUY.value)
    sellSignalFirst = (signals == SignalType.SELL.value) & (previousSignals != SignalType.SELL.value)

    return buySignalFirst.astype(bool), sellSignalFirst.astype(bool)


def addSignalsToDataFrame(dataFrame: pd.DataFrame, config: Optional[AnalysisConfig] = None) -> pd.DataFrame:
    """
    Adds 'signal', 'buy_signal_first' and 'sell_signal_first' columns to a frame
    that already holds the moving average columns named by `config`.
    """
    config = config or AnalysisConfig()

    dataFrame['signal'] = classifySignals(dataFrame[config.shortLabel], dataFrame[config.longLabel])
    dataFrame['buy_signal_first'], dataFrame['sell_signal_first'] = markFirstSignals(dataFrame['signal'])

    logger.debug(
        f"First signals: {int(dataFrame['buy_signal_first'].sum())} buy, "
        f"{int(dataFrame['sell_signal_first'].sum())} sell"
    )
    return dataFrame
