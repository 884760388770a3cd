import json

import pytest

import stock_market_insight
from analysis_config import AnalysisConfig
from get_price_history import DataFetchError
from stock_market_insight import buildIndicatorFrame, main, runAnalysis, toDailyRecords


@pytest.fixture
def fake_fetch(monkeypatch, wave_bars):
    requests = []

    def fetch(ticker, startDate, endDate):
        requests.append((ticker, startDate, endDate))
        return wave_bars

    monkeypatch.setattr(stock_market_insight, "getDailyBars", fetch)
    return requests


def test_indicator_frame_columns(wave_bars):
    df = buildIndicatorFrame(wave_bars)

    assert df.columns.tolist() == [
        'close', 'volume', 'daily_return', 'MA5', 'MA20', 'MACD', 'SignalLine',
        'MACD_Histogram', 'RSI', 'signal', 'buy_signal_first', 'sell_signal_first', 'cum_return'
    ]
    assert len(df) == len(wave_bars)
    assert 'daily_return' not in wave_bars.columns


def test_daily_records_use_none_for_undefined(wave_bars):
    records = toDailyRecords(buildIndicatorFrame(wave_bars))

    first, last = records[0], records[-1]
    assert first.date == "2024-09-02"
    assert first.dailyReturn is None
    assert first.shortMA is None and first.longMA is None
    assert first.signal is None
    assert first.rsi is None and first.macd is None
    assert first.cumReturn == 1.0
    assert last.longMA is not None and last.signalLine is not None


def test_run_analysis_without_chart(fake_fetch):
    config = AnalysisConfig(ticker="TEST")
    df, report = runAnalysis(config, renderChart=False)

    assert fake_fetch == [("TEST", config.startDate, config.endDate)]
    assert report.chartPath is None
    assert len(report.records) == len(df)
    assert report.summary.buySignals >= 1
    assert report.summary.sellSignals >= 1
    assert report.summary.buySignals == sum(r.buySignalFirst for r in report.records)


def test_main_prints_summary_and_saves_chart(fake_fetch, tmp_path, capsys):
    chartPath = tmp_path / "out.png"

    assert main(["test", "--chart-path", str(chartPath)]) == 0

    out = capsys.readouterr().out
    assert "Mean Daily Return" in out
    assert "Mean MACD" in out
    assert chartPath.exists()
    assert fake_fetch[0][0] == "TEST"


def test_main_json_output(fake_fetch, tmp_path, capsys):
    assert main(["--json", "--chart-path", str(tmp_path / "out.png")]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report['ticker'] == "2330.TW"
    assert report['startDate'] == "2024-09-01"
    assert len(report['records']) == 120
    assert set(report['summary']) == {
        'meanReturn', 'volatility', 'cumulativeReturn', 'buySignals', 'sellSignals', 'meanRSI', 'meanMACD'
    }


def test_fetch_failure_halts(monkeypatch, tmp_path, capsys):
    def failingFetch(ticker, startDate, endDate):
        raise DataFetchError(ticker, startDate, endDate, "provider returned no data")

    monkeypatch.setattr(stock_market_insight, "getDailyBars", failingFetch)
    chartPath = tmp_path / "out.png"

    assert main(["--chart-path", str(chartPath)]) == stock_market_insight.EXIT_FETCH_FAILED
    assert capsys.readouterr().out == ""
    assert not chartPath.exists()


def test_invalid_windows_rejected(fake_fetch):
    assert main(["--short-window", "20", "--long-window", "5"]) == stock_market_insight.EXIT_BAD_CONFIG
    assert fake_fetch == []
