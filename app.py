import os
import threading

from flask import Flask, Response, jsonify, request

from ultimate.errors import GameError, MalformedPosition
from ultimate.logic import GameSession, Position

app = Flask(__name__)

# ── Settings ──────────────────────────────────────────────────────────────────
# One hot-seat game for whoever sits at this machine. Bind to loopback unless
# told otherwise: there are no accounts or rooms here.
HOST  = os.environ.get('UTTT_HOST', '127.0.0.1')
PORT  = int(os.environ.get('UTTT_PORT', '5000'))
DEBUG = os.environ.get('UTTT_DEBUG', '').lower() in ('1', 'true', 'yes')

game_data = {"session": GameSession()}
game_lock = threading.Lock()


# ── Helpers ───────────────────────────────────────────────────────────────────
def _position(payload, key):
    value = payload.get(key)
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise MalformedPosition(f"'{key}' must be a [row, col] pair of integers")
    return Position(*value)


def turn_line(s):
    if s.drawn:
        return "Draw!"
    if s.decided:
        return f"{s.winner} wins!"
    where = "anywhere" if s.forced_board is None else f"in game {s.forced_board.row},{s.forced_board.col}"
    return f"It's {s.current_player}'s turn, play {where}"


# ── Routes ───────────────────────────────────────────────────────────────────
@app.route('/')
def board():
    with game_lock:
        s = game_data["session"]
        text = str(s.game) + turn_line(s) + "\n"
    return Response(text, mimetype='text/plain')

@app.route('/state')
def state():
    with game_lock:
        snapshot = game_data["session"].state()
    return jsonify(snapshot)

@app.route('/move', methods=['POST'])
def move():
    data = request.get_json(silent=True)
    with game_lock:
        s = game_data["session"]
        player = s.current_player
        try:
            if not isinstance(data, dict):
                raise MalformedPosition("Expected a JSON object with 'outer' and 'inner'")
            outer, inner = _position(data, 'outer'), _position(data, 'inner')
            s.submit(outer, inner)
        except GameError as e:
            app.logger.warning("Rejected move by %s: %s", player, e)
            return jsonify(error=str(e)), 400
        app.logger.info("%s played %s -> %s", player, tuple(outer), tuple(inner))
        if s.decided:
            app.logger.info("Game decided: %s", "draw" if s.drawn else f"{s.winner} wins")
        return jsonify(s.state())

@app.route('/reset', methods=['POST'])
def reset():
    with game_lock:
        game_data["session"] = GameSession()
        app.logger.info("New game started")
        return jsonify(game_data["session"].state())


if __name__ == "__main__":
    app.run(host=HOST, port=PORT, debug=DEBUG)
