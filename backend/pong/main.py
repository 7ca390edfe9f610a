from flask import Blueprint, jsonify

from pong.registry import registry

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return 'Pong multiplayer server is running.'


@main.route('/health')
def health():
    game_ids = registry.game_ids(include_finished=False)
    return jsonify({
        'status': 'ok',
        'activeGames': len(game_ids),
        'games': game_ids,
    })
