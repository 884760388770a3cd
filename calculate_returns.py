"""
Return Statistics Module

Compounds daily returns into a cumulative growth factor and reduces the
indicator table to the rounded summary panel.
"""

import math
import pandas as pd
from typing import Optional

from analysis_config import RETURN_DECIMALS, RSI_DECIMALS, MACD_DECIMALS
from analysis_types import SummaryStatistics

# Display order of the summary panel
SUMMARY_LABELS = [
    ('meanReturn', "Mean Daily Return"),
    ('volatility', "Daily Return Std Dev (Volatility)"),
    ('cumulativeReturn', "Cumulative Return"),
    ('buySignals', "{short}>{long} Signals (Buy)"),
    ('sellSignals', "{short}<{long} Signals (Sell)"),
    ('meanRSI', "Mean RSI"),
    ('meanMACD', "Mean MACD"),
]


def _roundOrNone(value: float, places: int) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return round(float(value), places)


def calculateCumulativeReturn(dailyReturns: pd.Series) -> pd.Series:
    """
    Calculate the running product of (1 + return), treating missing returns as zero.

    Args:
        dailyReturns: Series of simple daily returns

    Returns:
        Series of cumulative growth factors starting from the first day
    """
    return (1 + dailyReturns.fillna(0)).cumprod()


def addCumulativeReturnToDataFrame(dataFrame: pd.DataFrame) -> pd.DataFrame:
    dataFrame['cum_return'] = calculateCumulativeReturn(dataFrame['daily_return'])
    return dataFrame


def calculateSummaryStatistics(dataFrame: pd.DataFrame) -> SummaryStatistics:
    """
    Reduce the full indicator table to the summary panel values.

    Mean and sample standard deviation use the zero-filled daily returns; RSI and
    MACD means skip undefined days.

    Args:
        dataFrame: Table with daily_return, cum_return, first-signal, RSI and MACD columns

    Returns:
        SummaryStatistics with values rounded for display
    """
    zeroFilledReturns = dataFrame['daily_return'].fillna(0)
    cumulativeReturn = dataFrame['cum_return'].iloc[-1] - 1 if len(dataFrame) else 0.0

    return SummaryStatistics(
        meanReturn=_roundOrNone(zeroFilledReturns.mean(), RETURN_DECIMALS),
        volatility=_roundOrNone(zeroFilledReturns.std(ddof=1), RETURN_DECIMALS),
        cumulativeReturn=round(float(cumulativeReturn), RETURN_DECIMALS),
        buySignals=int(dataFrame['buy_signal_first'].sum()),
        sellSignals=int(dataFrame['sell_signal_first'].sum()),
        meanRSI=_roundOrNone(dataFrame['RSI'].mean(), RSI_DECIMALS),
        meanMACD=_roundOrNone(dataFrame['MACD'].mean(), MACD_DECIMALS),
    )


def buildSummaryTable(summary: SummaryStatistics, shortLabel: str = "MA5", longLabel: str = "MA20") -> pd.DataFrame:
    """
    Lay the summary out as a two-column (Indicator, Value) table in display order.
    """
    labels = [label.format(short=shortLabel, long=longLabel) for _, label in SUMMARY_LABELS]
    values = [getattr(summary, fieldName) for fieldName, _ in SUMMARY_LABELS]
    return pd.DataFrame({'Indicator': labels, 'Value': pd.Series(values, dtype=object)})
