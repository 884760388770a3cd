import matplotlib.pyplot as plt

from stock_market_insight import buildIndicatorFrame
from visualize_signals import plotSignals


def test_chart_saved_to_png(wave_bars, tmp_path):
    df = buildIndicatorFrame(wave_bars)
    outputPath = str(tmp_path / "chart.png")

    savedPath = plotSignals(df, "TEST", outputPath)

    assert savedPath == outputPath
    with open(savedPath, 'rb') as chart:
        assert chart.read(8) == b'\x89PNG\r\n\x1a\n'
    assert plt.get_fignums() == []


def test_chart_draws_lines_and_markers(wave_bars, tmp_path, monkeypatch):
    df = buildIndicatorFrame(wave_bars)
    captured = {}

    def fake_show():
        ax = plt.gcf().axes[0]
        captured['lines'] = [line.get_label() for line in ax.get_lines()]
        captured['styles'] = [line.get_linestyle() for line in ax.get_lines()]
        captured['markers'] = [len(c.get_offsets()) for c in ax.collections]
        captured['title'] = ax.get_title(loc='left')
        captured['labels'] = (ax.get_xlabel(), ax.get_ylabel())

    monkeypatch.setattr(plt, "show", fake_show)
    assert plotSignals(df, "TEST", show=True) is None

    assert captured['lines'] == ['Close', 'MA5', 'MA20']
    assert captured['styles'] == ['-', '--', '--']
    assert captured['markers'] == [int(df['buy_signal_first'].sum()), int(df['sell_signal_first'].sum())]
    assert captured['title'] == "TEST Price with MA Crossover First Signals"
    assert captured['labels'] == ("Date", "Close Price")
