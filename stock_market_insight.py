"""
Stock Market Insight

Fetches one year of daily bars for a single ticker, derives moving averages,
MACD and RSI, flags first-occurrence crossover signals, prints a summary panel
and saves an annotated price chart.
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional, Tuple

import matplotlib
import pandas as pd
from pydantic import ValidationError

from analysis_config import (
    AnalysisConfig, configureLogging, DEFAULT_TICKER, DEFAULT_START_DATE, DEFAULT_END_DATE,
    DEFAULT_SHORT_MA_WINDOW, DEFAULT_LONG_MA_WINDOW, DEFAULT_MACD_FAST, DEFAULT_MACD_SLOW,
    DEFAULT_MACD_SIGNAL, DEFAULT_RSI_PERIOD, DEFAULT_CHART_PATH
)
from analysis_types import AnalysisReport, DailyRecord
from get_price_history import DataFetchError, getDailyBars
from calculate_indicators import addIndicatorsToDataFrame
from extract_signals import addSignalsToDataFrame
from calculate_returns import addCumulativeReturnToDataFrame, calculateSummaryStatistics, buildSummaryTable
from visualize_signals import plotSignals

logger = logging.getLogger(__name__)

EXIT_FETCH_FAILED = 1
EXIT_BAD_CONFIG = 2


def _optionalFloat(value) -> Optional[float]:
    return float(value) if pd.notna(value) else None


def buildIndicatorFrame(bars: pd.DataFrame, config: Optional[AnalysisConfig] = None) -> pd.DataFrame:
    """
    Run feature derivation, signal extraction and cumulative return over raw bars.

    Args:
        bars: DataFrame with 'close' and 'volume' columns indexed by date
        config: Indicator windows; defaults to AnalysisConfig()

    Returns:
        New DataFrame holding the raw columns plus every derived column
    """
    config = config or AnalysisConfig()
    df = bars[['close', 'volume']].copy()

    addIndicatorsToDataFrame(df, config)
    addSignalsToDataFrame(df, config)
    addCumulativeReturnToDataFrame(df)
    return df


def toDailyRecords(df: pd.DataFrame, config: Optional[AnalysisConfig] = None) -> List[DailyRecord]:
    """Convert the indicator table into DailyRecord models, NaN becoming None."""
    config = config or AnalysisConfig()
    records = []

    for idx, row in df.iterrows():
        records.append(DailyRecord(
            date=idx.date().isoformat(),
            close=_optionalFloat(row['close']),
            volume=_optionalFloat(row['volume']),
            dailyReturn=_optionalFloat(row['daily_return']),
            shortMA=_optionalFloat(row[config.shortLabel]),
            longMA=_optionalFloat(row[config.longLabel]),
            signal=row['signal'] if pd.notna(row['signal']) else None,
            buySignalFirst=bool(row['buy_signal_first']),
            sellSignalFirst=bool(row['sell_signal_first']),
            macd=_optionalFloat(row['MACD']),
            signalLine=_optionalFloat(row['SignalLine']),
            macdHistogram=_optionalFloat(row['MACD_Histogram']),
            rsi=_optionalFloat(row['RSI']),
            cumReturn=float(row['cum_return']),
        ))

    return records


def runAnalysis(config: Optional[AnalysisConfig] = None, renderChart: bool = True) -> Tuple[pd.DataFrame, AnalysisReport]:
    """
    Execute the whole pipeline once: fetch, derive, aggregate, render.

    Args:
        config: Run parameters; defaults to AnalysisConfig()
        renderChart: Draw the price chart (saved or shown per config)

    Returns:
        Tuple of (indicator table, AnalysisReport)

    Raises:
        DataFetchError: if the price history cannot be retrieved
    """
    config = config or AnalysisConfig()

    bars = getDailyBars(config.ticker, config.startDate, config.endDate)
    df = buildIndicatorFrame(bars, config)
    summary = calculateSummaryStatistics(df)

    chartPath = None
    if renderChart:
        chartPath = plotSignals(df, config.ticker, config.chartPath, show=config.showChart, config=config)

    report = AnalysisReport(
        ticker=config.ticker,
        startDate=config.startDate.isoformat(),
        endDate=config.endDate.isoformat(),
        summary=summary,
        records=toDailyRecords(df, config),
        chartPath=chartPath
    )
    return df, report


def _parseArguments(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Price, moving average crossover and momentum summary for one ticker.")
    parser.add_argument("ticker", nargs="?", default=DEFAULT_TICKER, help="Stock ticker symbol (e.g., 2330.TW, AAPL)")
    parser.add_argument("--start", type=date.fromisoformat, default=DEFAULT_START_DATE, help="Start date YYYY-MM-DD")
    parser.add_argument("--end", type=date.fromisoformat, default=DEFAULT_END_DATE, help="End date YYYY-MM-DD (inclusive)")
    parser.add_argument("--short-window", type=int, default=DEFAULT_SHORT_MA_WINDOW, help="Short moving average window")
    parser.add_argument("--long-window", type=int, default=DEFAULT_LONG_MA_WINDOW, help="Long moving average window")
    parser.add_argument("--macd-fast", type=int, default=DEFAULT_MACD_FAST, help="MACD fast EMA span")
    parser.add_argument("--macd-slow", type=int, default=DEFAULT_MACD_SLOW, help="MACD slow EMA span")
    parser.add_argument("--macd-signal", type=int, default=DEFAULT_MACD_SIGNAL, help="MACD signal EMA span")
    parser.add_argument("--macd-percent", action="store_true", help="Report MACD as percent difference of the EMAs")
    parser.add_argument("--rsi-period", type=int, default=DEFAULT_RSI_PERIOD, help="RSI window")
    parser.add_argument("--chart-path", default=DEFAULT_CHART_PATH, help="PNG file for the price chart")
    parser.add_argument("--show", action="store_true", help="Open the chart in a window instead of saving it")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON instead of the table")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parseArguments(argv)
    configureLogging(args.log_level)

    try:
        config = AnalysisConfig(
            ticker=args.ticker.upper(),
            startDate=args.start,
            endDate=args.end,
            shortWindow=args.short_window,
            longWindow=args.long_window,
            macdFast=args.macd_fast,
            macdSlow=args.macd_slow,
            macdSignal=args.macd_signal,
            macdPercent=args.macd_percent,
            rsiPeriod=args.rsi_period,
            chartPath=args.chart_path,
            showChart=args.show
        )
    except ValidationError as error:
        logger.error(f"Invalid parameters: {error}")
        return EXIT_BAD_CONFIG

    if not config.showChart:
        matplotlib.use('Agg') # Headless mode

    try:
        _, report = runAnalysis(config)
    except DataFetchError as error:
        logger.error(str(error))
        return EXIT_FETCH_FAILED

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(buildSummaryTable(report.summary, config.shortLabel, config.longLabel).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
