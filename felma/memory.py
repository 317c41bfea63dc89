# Felma In-Memory Store
# Process-local item storage used when Supabase is not configured

import itertools
import threading

from .helpers import utc_now_iso

_lock = threading.Lock()
_items = []
_profiles = {}
_ids = itertools.count(1)


def reset():
    """Drop every item and profile and restart ids at 1."""
    global _ids
    with _lock:
        _items.clear()
        _profiles.clear()
        _ids = itertools.count(1)


def add_profile(user_id, display_name):
    with _lock:
        _profiles[str(user_id)] = {'id': user_id, 'display_name': display_name}


def insert_item(row):
    with _lock:
        item = dict(row)
        item['id'] = next(_ids)
        item['created_at'] = utc_now_iso()
        # Newest first, like the list endpoint's default order
        _items.insert(0, item)
        return dict(item)


def fetch_item(item_id):
    with _lock:
        item = _find(item_id)
        return dict(item) if item else None


def fetch_items(org=None, sort='rank'):
    with _lock:
        items = [dict(item) for item in _items if org is None or item.get('org_id') == org]

    # Stable sorts, applied least significant key first
    items.sort(key=lambda item: item.get('created_at') or '', reverse=True)
    if sort == 'rank':
        items.sort(key=lambda item: (item.get('priority_rank') is None, -(item.get('priority_rank') or 0)))
    return items


def patch_item(item_id, changes, match=None):
    """Apply changes if the item exists and every `match` field still holds.

    Returns the updated item, or None when nothing matched.
    """
    with _lock:
        item = _find(item_id)
        if item is None:
            return None
        for field, expected in (match or {}).items():
            if item.get(field) != expected:
                return None
        item.update(changes)
        return dict(item)


def fetch_profiles(user_ids):
    with _lock:
        keys = [str(uid) for uid in user_ids]
        return [dict(_profiles[key]) for key in keys if key in _profiles]


def _find(item_id):
    for item in _items:
        if str(item['id']) == str(item_id):
            return item
    return None
