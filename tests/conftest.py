import pytest

from ultimate.logic import GameSession


# O sweeps the main diagonal of the meta-board: (0,0), then (1,1), then (2,2).
# Turns marked free have no forced board, so the console asks for both coordinates.
WINNING_GAME = [
    # (player, outer, inner, free choice)
    ("O", (0, 0), (1, 0), True),
    ("X", (1, 0), (0, 0), False),
    ("O", (0, 0), (1, 1), False),
    ("X", (1, 1), (0, 0), False),
    ("O", (0, 0), (1, 2), False),   # O takes game (0,0)
    ("X", (1, 2), (0, 0), False),   # points O at a won game
    ("O", (1, 1), (1, 0), True),
    ("X", (1, 0), (1, 1), False),
    ("O", (1, 1), (1, 2), False),
    ("X", (1, 2), (1, 1), False),
    ("O", (1, 1), (1, 1), False),   # O takes game (1,1)
    ("X", (2, 2), (0, 0), True),
    ("O", (2, 2), (2, 0), True),
    ("X", (2, 0), (2, 2), False),
    ("O", (2, 2), (1, 1), False),
    ("X", (2, 1), (2, 2), True),
    ("O", (2, 2), (0, 2), False),   # O takes game (2,2) and the match
]


@pytest.fixture
def session():
    return GameSession()


@pytest.fixture
def client():
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as c:
        c.post('/reset')
        yield c


@pytest.fixture
def winning_game():
    return list(WINNING_GAME)
