"""
Analysis Configuration Module

Holds every constant the insight pipeline runs with. The defaults reproduce the
fixed one-year TSMC run; the command line may override any of them.
"""

import logging
from datetime import date
from pydantic import BaseModel, Field, model_validator


# Constants for the default analysis run
DEFAULT_TICKER = "2330.TW"
DEFAULT_START_DATE = date(2024, 9, 1)
DEFAULT_END_DATE = date(2025, 9, 1)

# Constants for default indicator parameters
DEFAULT_SHORT_MA_WINDOW = 5
DEFAULT_LONG_MA_WINDOW = 20
DEFAULT_MACD_FAST = 12
DEFAULT_MACD_SLOW = 26
DEFAULT_MACD_SIGNAL = 9
DEFAULT_RSI_PERIOD = 14

# Rounding applied to the summary table
RETURN_DECIMALS = 5
RSI_DECIMALS = 2
MACD_DECIMALS = 5

DEFAULT_CHART_PATH = "price_signals.png"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class AnalysisConfig(BaseModel):
    """Parameters for a single insight run"""
    ticker: str = Field(DEFAULT_TICKER, description="Stock ticker symbol")
    startDate: date = Field(DEFAULT_START_DATE, description="First calendar day requested")
    endDate: date = Field(DEFAULT_END_DATE, description="Last calendar day requested (inclusive)")

    shortWindow: int = Field(DEFAULT_SHORT_MA_WINDOW, gt=0, description="Short moving average window")
    longWindow: int = Field(DEFAULT_LONG_MA_WINDOW, gt=0, description="Long moving average window")
    macdFast: int = Field(DEFAULT_MACD_FAST, gt=0, description="MACD fast EMA span")
    macdSlow: int = Field(DEFAULT_MACD_SLOW, gt=0, description="MACD slow EMA span")
    macdSignal: int = Field(DEFAULT_MACD_SIGNAL, gt=0, description="MACD signal line EMA span")
    macdPercent: bool = Field(False, description="Express MACD as percent difference of the EMAs")
    rsiPeriod: int = Field(DEFAULT_RSI_PERIOD, gt=0, description="RSI lookback window")

    chartPath: str = Field(DEFAULT_CHART_PATH, description="Where the price chart PNG is saved")
    showChart: bool = Field(False, description="Open an interactive window instead of saving")

    @model_validator(mode='after')
    def checkOrdering(self) -> 'AnalysisConfig':
        if self.shortWindow >= self.longWindow:
            raise ValueError(f"shortWindow ({self.shortWindow}) must be smaller than longWindow ({self.longWindow})")
        if self.macdFast >= self.macdSlow:
            raise ValueError(f"macdFast ({self.macdFast}) must be smaller than macdSlow ({self.macdSlow})")
        if self.startDate >= self.endDate:
            raise ValueError(f"startDate ({self.startDate}) must be before endDate ({self.endDate})")
        return self

    @property
    def shortLabel(self) -> str:
        return f"MA{self.shortWindow}"

    @property
    def longLabel(self) -> str:
        return f"MA{self.longWindow}"


def configureLogging(level: str = "INFO") -> None:
    """Configure root logging once for the command line entry point."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
