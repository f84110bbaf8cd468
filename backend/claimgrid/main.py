from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


def _coordinator():
    return current_app.extensions['claimgrid']


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the claim grid server!'})


@main.route('/health')
def health():
    coordinator = _coordinator()
    return jsonify({
        'status': 'ok',
        'onlineCount': coordinator.identities.online_count(),
        'ownedCells': coordinator.grid.owned_cells(),
        'scoredPlayers': len(coordinator.grid.scoreboard()),
    })


@main.route('/api/state')
def get_state():
    """
    Returns the same grid snapshot a newly connected session receives,
    without the identity.
    """
    return jsonify(_coordinator().snapshot()), 200


@main.route('/api/leaderboard')
def get_leaderboard():
    return jsonify(_coordinator().grid.get_leaderboard()), 200


@main.route('/api/config')
def get_config():
    return jsonify(_coordinator().grid.get_config()), 200
