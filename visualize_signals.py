"""
Signal Chart Module

Renders the close price with both moving averages and marks the first day of
each Buy and Sell run.
"""

import logging
import pandas as pd
import matplotlib.pyplot as plt
from typing import Optional

from analysis_config import AnalysisConfig

logger = logging.getLogger(__name__)

CHART_FIGSIZE = (12, 6)
CHART_DPI = 150
MARKER_SIZE = 40


def plotSignals(
    df: pd.DataFrame,
    ticker: str,
    outputPath: Optional[str] = None,
    show: bool = False,
    config: Optional[AnalysisConfig] = None
) -> Optional[str]:
    """
    Plots close price with both moving averages and the first Buy/Sell signal days.

    Returns the saved file path, or None when the chart was only shown.
    """
    config = config or AnalysisConfig()
    shortLabel, longLabel = config.shortLabel, config.longLabel

    fig, ax = plt.subplots(figsize=CHART_FIGSIZE)

    ax.plot(df.index, df['close'], label='Close', color='blue', linewidth=1.5)
    ax.plot(df.index, df[shortLabel], label=shortLabel, color='green', linestyle='--', linewidth=1)
    ax.plot(df.index, df[longLabel], label=longLabel, color='red', linestyle='--', linewidth=1)

    buyDays = df[df['buy_signal_first']]
    sellDays = df[df['sell_signal_first']]
    ax.scatter(buyDays.index, buyDays['close'], label='Buy (first)', color='darkgreen', marker='^', s=MARKER_SIZE, zorder=3)
    ax.scatter(sellDays.index, sellDays['close'], label='Sell (first)', color='darkred', marker='v', s=MARKER_SIZE, zorder=3)

    ax.set_title(f"{ticker} Price with MA Crossover First Signals", fontsize=14, loc='left')
    ax.set_xlabel("Date")
    ax.set_ylabel("Close Price")
    ax.legend(loc='upper left')
    ax.grid(True, alpha=0.3)

    # Rotate dates for readability
    plt.setp(ax.get_xticklabels(), rotation=45)

    if show:
        plt.show()
        plt.close(fig)
        return None

    outputPath = outputPath or config.chartPath
    logger.info(f"Saving price chart as '{outputPath}'")
    fig.savefig(outputPath, bbox_inches='tight', dpi=CHART_DPI)
    plt.close(fig)
    return outputPath
