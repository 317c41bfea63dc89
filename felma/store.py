# Felma Item Store
# Item create/read/update on top of whichever backend is configured

import logging

from . import memory, supabase
from .config import DEFAULT_ORG_ID, DEFAULT_TEAM_ID
from .errors import ItemNotFound
from .helpers import collapse_whitespace, display_title
from .ranking import RATING_FIELDS, compute_rank, has_any_rating, parse_ratings
from .stages import FIRST_STAGE, NOTE_FIELDS, StageError, stage_changes

log = logging.getLogger(__name__)

SORT_OPTIONS = ['rank', 'recent']

EMPTY_RANKING = {
    'priority_rank': None,
    'action_tier': None,
    'leader_to_unblock': False,
}


def _backend():
    """Supabase when configured, otherwise the in-process store."""
    return supabase if supabase.is_configured() else memory


def backend_name():
    return 'supabase' if supabase.is_configured() else 'memory'


def _present(item):
    item['display_title'] = display_title(item.get('title'), item.get('content') or item.get('transcript'))
    return item


def _ranked_fields(data):
    """Ratings plus their ranking, ready to persist."""
    ratings = parse_ratings(data)
    result = compute_rank(ratings)
    fields = ratings.as_dict()
    fields.update(result.as_fields())
    return fields


# ===================
# READ OPERATIONS
# ===================

def get_item(item_id):
    item = _backend().fetch_item(item_id)
    if item is None:
        raise ItemNotFound(item_id)
    return _present(item)


def list_items(org=None, sort='rank'):
    """List items for an org (or every org), sorted by 'rank' or 'recent'."""
    if sort not in SORT_OPTIONS:
        raise ValueError(f"sort must be one of {', '.join(SORT_OPTIONS)}")
    items = [_present(item) for item in _backend().fetch_items(org=org, sort=sort)]
    return attach_originators(items)


def get_profile(user_id):
    """Look up an originator's profile. Returns None if unknown."""
    if not user_id:
        return None
    profiles = _backend().fetch_profiles([user_id])
    return profiles[0] if profiles else None


def attach_originators(items):
    """Add an 'originator' display name to each item that has a user_id."""
    user_ids = sorted({str(item['user_id']) for item in items if item.get('user_id')})
    names = {}
    if user_ids:
        names = {str(p['id']): p.get('display_name') for p in _backend().fetch_profiles(user_ids)}
    for item in items:
        item['originator'] = names.get(str(item.get('user_id')))
    return items


# ===================
# WRITE OPERATIONS
# ===================

def create_item(content, item_type, user_id=None, title=None, transcript=None,
                org_id=None, team_id=None, ratings=None):
    """Store a new item at the first workflow stage.

    If `ratings` carries any rating it must carry all four; the item is
    then ranked straight away.
    """
    row = {
        'content': content.strip(),
        'item_type': item_type,
        'user_id': user_id,
        'title': collapse_whitespace(title) or None,
        'transcript': transcript,
        'org_id': org_id or DEFAULT_ORG_ID,
        'team_id': team_id or DEFAULT_TEAM_ID,
        'stage': FIRST_STAGE,
    }
    row.update({field: None for field in NOTE_FIELDS})
    row.update({attr: None for attr, _ in RATING_FIELDS})
    row.update(EMPTY_RANKING)

    if has_any_rating(ratings):
        row.update(_ranked_fields(ratings))

    item = _backend().insert_item(row)
    log.info("Created %s item %s for org %s", item_type, item.get('id'), row['org_id'])
    return _present(item)


def update_ratings(item_id, ratings):
    """Re-rate an item and persist the refreshed ranking."""
    fields = _ranked_fields(ratings)
    item = _backend().patch_item(item_id, fields)
    if item is None:
        raise ItemNotFound(item_id)
    log.info("Re-ranked item %s: %s (%s)", item_id, fields['priority_rank'], fields['action_tier'])
    return _present(item)


def advance_item(item_id, target=None, note=None):
    """Move an item forward through the workflow stages.

    The write only lands if the stage has not changed since it was read.
    """
    item = get_item(item_id)
    current = item.get('stage') or FIRST_STAGE
    changes = stage_changes(current, target, note)

    updated = _backend().patch_item(item_id, changes, match={'stage': item.get('stage')})
    if updated is None:
        raise StageError(f"Item '{item_id}' moved on from '{current}' before this update")
    log.info("Item %s advanced from %s to %s", item_id, current, changes['stage'])
    return _present(updated)
