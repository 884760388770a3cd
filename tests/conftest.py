import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use('Agg')


def _bars(closes) -> pd.DataFrame:
    dates = pd.date_range(start='2024-09-02', periods=len(closes), freq='B', name='date')
    return pd.DataFrame({
        'close': np.asarray(closes, dtype=float),
        'volume': np.linspace(1000, 2000, len(closes)),
    }, index=dates)


@pytest.fixture
def make_bars():
    return _bars


@pytest.fixture
def wave_bars():
    # Drifting sine wave: MA5 and MA20 cross in both directions several times
    i = np.arange(120)
    return _bars(100 + 10 * np.sin(i / 8) + 0.1 * i)


@pytest.fixture
def zigzag_closes():
    # Alternating up/down moves so RSI always has both gains and losses
    return [100 + 0.5 * i + 2 * (i % 2) for i in range(40)]


@pytest.fixture
def crossover_closes():
    head = [100, 102, 101, 105, 110, 108, 107, 103]
    falling = [103 - k for k in range(1, 17)]
    rising = [87 + 2 * k for k in range(1, 17)]
    return head + falling + rising
