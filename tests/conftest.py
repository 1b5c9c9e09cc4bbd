import pytest

from wumpus_explorer.utils.constants import GRID_SIZE


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    monkeypatch.setenv("WUMPUS_QUIET", "1")


@pytest.fixture
def make_layout():
    """Builds a 10x10 world text from hazard/gold positions."""
    def _make(wumpus=None, pits=(), gold=None):
        rows = [["-"] * GRID_SIZE for _ in range(GRID_SIZE)]
        if wumpus is not None:
            rows[wumpus[0]][wumpus[1]] = "W"
        for row, col in pits:
            rows[row][col] = "P"
        if gold is not None:
            rows[gold[0]][gold[1]] = "G"
        return "\n".join("".join(row) for row in rows)
    return _make
