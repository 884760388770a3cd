"""
Type definitions for analysis results.
Provides structured data models for the per-day table and the summary panel.
"""

from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class SignalType(str, Enum):
    """Moving average ordering on a given day; absent when neither holds"""
    BUY = "Buy"
    SELL = "Sell"


# ============================================================================
# Per-day Models
# ============================================================================

class DailyRecord(BaseModel):
    """Single trading day with every derived column"""
    date: str = Field(description="Trading day in ISO 8601 format")
    close: Optional[float] = Field(None, description="Raw closing price")
    volume: Optional[float] = Field(None, description="Trading volume")
    dailyReturn: Optional[float] = Field(None, description="Simple return versus the previous close")

    shortMA: Optional[float] = Field(None, description="Short trailing moving average of close")
    longMA: Optional[float] = Field(None, description="Long trailing moving average of close")
    signal: Optional[SignalType] = Field(None, description="Buy when shortMA > longMA, Sell when below")
    buySignalFirst: bool = Field(False, description="First day of a contiguous Buy run")
    sellSignalFirst: bool = Field(False, description="First day of a contiguous Sell run")

    macd: Optional[float] = Field(None, description="MACD line value")
    signalLine: Optional[float] = Field(None, description="MACD signal line value")
    macdHistogram: Optional[float] = Field(None, description="MACD line minus signal line")
    rsi: Optional[float] = Field(None, description="Relative Strength Index (0-100)")

    cumReturn: float = Field(description="Compounded growth factor since the first day")


# ============================================================================
# Summary Models
# ============================================================================

class SummaryStatistics(BaseModel):
    """Rounded statistics shown in the summary panel"""
    meanReturn: Optional[float] = Field(None, description="Mean daily return (missing returns as zero)")
    volatility: Optional[float] = Field(None, description="Sample standard deviation of daily returns")
    cumulativeReturn: float = Field(description="Total compounded return over the period")
    buySignals: int = Field(description="Number of first-occurrence Buy days")
    sellSignals: int = Field(description="Number of first-occurrence Sell days")
    meanRSI: Optional[float] = Field(None, description="Mean RSI over defined days")
    meanMACD: Optional[float] = Field(None, description="Mean MACD over defined days")


class AnalysisReport(BaseModel):
    """Complete result of one insight run"""
    ticker: str = Field(description="Stock ticker symbol")
    startDate: str = Field(description="First requested day (YYYY-MM-DD)")
    endDate: str = Field(description="Last requested day (YYYY-MM-DD)")
    summary: SummaryStatistics = Field(description="Summary panel values")
    records: List[DailyRecord] = Field(description="Per-day table in ascending date order")
    chartPath: Optional[str] = Field(None, description="Saved chart location, if one was written")
