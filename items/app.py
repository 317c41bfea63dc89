# Felma Items
# Capture, rank and progress feedback items

import sys
import os
import logging

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify
from flask_cors import CORS

from felma import (
    CORS_ORIGIN,
    VALID_ITEM_TYPES,
    SORT_OPTIONS,
    ItemNotFound,
    StoreError,
    RatingValidationError,
    StageError,
    configure_logging,
    compute_rank,
    backend_name,
    list_items,
    get_item,
    create_item,
    update_ratings,
    advance_item
)

configure_logging()
log = logging.getLogger('felma.items')

app = Flask(__name__)
CORS(app, origins=[CORS_ORIGIN])


def json_body():
    """Request JSON if it is an object, otherwise an empty dict"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validation_error(e):
    """400 response naming every rating that failed"""
    return jsonify({
        'error': 'validation_error',
        'message': str(e),
        'fields': e.fields,
        'details': e.errors
    }), 400


def not_found(e):
    return jsonify({
        'error': 'item_not_found',
        'itemId': e.item_id,
        'message': str(e)
    }), 404


def storage_error(e):
    log.error("Store failure: %s", e)
    return jsonify({
        'error': 'storage_error',
        'message': 'Could not reach the item store, please try again'
    }), 502


def server_error(e):
    log.exception("Unhandled error: %s", e)
    return jsonify({
        'error': 'server_error',
        'details': str(e)
    }), 500


@app.route('/api/list', methods=['GET'])
def list_route():
    """List items.

    Query:
        - org: Only items tagged with this org (optional)
        - sort: 'rank' (default, priority then newest) or 'recent'
    """
    try:
        org = request.args.get('org') or None
        sort = request.args.get('sort', 'rank')

        if sort not in SORT_OPTIONS:
            return jsonify({'error': f"sort must be one of {', '.join(SORT_OPTIONS)}"}), 400

        return jsonify(list_items(org=org, sort=sort))

    except StoreError as e:
        return storage_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/api/items', methods=['POST'])
@app.route('/api/item', methods=['POST'])
@app.route('/api/create', methods=['POST'])
def create_route():
    """Create an item.

    Accepts:
        - content: Free text of the frustration or idea (required)
        - item_type: 'frustration' or 'idea' (required)
        - title, transcript, user_id, org_id, team_id (optional)
        - customerImpact, teamEnergy, frequency, ease (optional, all or none)

    Returns the stored item with status 201.
    """
    try:
        data = json_body()

        content = data.get('content')
        item_type = data.get('item_type')

        if not isinstance(content, str) or not content.strip():
            return jsonify({'error': 'content required'}), 400

        if item_type not in VALID_ITEM_TYPES:
            return jsonify({'error': "item_type must be 'frustration' or 'idea'"}), 400

        item = create_item(
            content=content,
            item_type=item_type,
            user_id=data.get('user_id'),
            title=data.get('title'),
            transcript=data.get('transcript'),
            org_id=data.get('org_id') or data.get('org'),
            team_id=data.get('team_id'),
            ratings=data
        )
        return jsonify(item), 201

    except RatingValidationError as e:
        return validation_error(e)
    except StoreError as e:
        return storage_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/api/items/<item_id>', methods=['GET'])
def get_route(item_id):
    try:
        return jsonify(get_item(item_id))

    except ItemNotFound as e:
        return not_found(e)
    except StoreError as e:
        return storage_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/api/items/<item_id>/ratings', methods=['PATCH', 'POST'])
def ratings_route(item_id):
    """Re-rate an item.

    Accepts customerImpact, teamEnergy, frequency, ease (each 1-10).
    Returns the item with its refreshed priority_rank, action_tier
    and leader_to_unblock.
    """
    try:
        data = json_body()
        return jsonify(update_ratings(item_id, data))

    except RatingValidationError as e:
        return validation_error(e)
    except ItemNotFound as e:
        return not_found(e)
    except StoreError as e:
        return storage_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/api/items/<item_id>/advance', methods=['POST'])
def advance_route(item_id):
    """Move an item to a later workflow stage.

    Accepts:
        - stage: Stage to move to (optional, defaults to the next one)
        - note: Note recorded against the stage being left (optional)
    """
    try:
        data = json_body()
        item = advance_item(item_id, target=data.get('stage'), note=data.get('note'))
        return jsonify(item)

    except StageError as e:
        return jsonify({'error': 'stage_error', 'message': str(e)}), 409
    except ItemNotFound as e:
        return not_found(e)
    except StoreError as e:
        return storage_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/api/rank', methods=['POST'])
def rank_route():
    """Score four ratings without storing anything"""
    try:
        data = json_body()
        return jsonify(compute_rank(data).as_fields())

    except RatingValidationError as e:
        return validation_error(e)
    except Exception as e:
        return server_error(e)


@app.route('/', methods=['GET'])
def root():
    return 'Felma backend OK', 200, {'Content-Type': 'text/plain; charset=utf-8'}


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Felma Items',
        'version': '1.0',
        'store': backend_name()
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 10000))
    app.run(host='0.0.0.0', port=port)
