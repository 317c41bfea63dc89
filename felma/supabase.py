# Felma Supabase Functions
# All reads/writes against the hosted Postgres tables via the Supabase REST API

import logging

import httpx

from . import config
from .errors import StoreError

log = logging.getLogger(__name__)


def is_configured():
    return bool(config.SUPABASE_URL and config.SUPABASE_SERVICE_KEY)


def _get_headers():
    """Get standard Supabase headers"""
    return {
        'apikey': config.SUPABASE_SERVICE_KEY,
        'Authorization': f'Bearer {config.SUPABASE_SERVICE_KEY}',
        'Content-Type': 'application/json',
        'Prefer': 'return=representation'
    }


def _table_url(table):
    return f'{config.SUPABASE_URL}/rest/v1/{table}'


def _request(method, table, params=None, json=None):
    """Send one request and return the decoded list of rows.

    Raises StoreError on transport errors, non-2xx responses and bodies
    that are not a JSON list.
    """
    try:
        response = httpx.request(
            method,
            _table_url(table),
            headers=_get_headers(),
            params=params,
            json=json,
            timeout=config.HTTP_TIMEOUT
        )
        response.raise_for_status()
        rows = response.json()
    except httpx.HTTPStatusError as e:
        log.error("Supabase %s %s failed with %s: %s", method, table, e.response.status_code, e.response.text)
        raise StoreError(f'Supabase returned {e.response.status_code}') from e
    except httpx.HTTPError as e:
        log.error("Supabase %s %s failed: %s", method, table, e)
        raise StoreError('Could not reach Supabase') from e
    except ValueError as e:
        log.error("Supabase %s %s returned invalid JSON: %s", method, table, e)
        raise StoreError('Supabase returned invalid JSON') from e

    if not isinstance(rows, list):
        log.error("Supabase %s %s returned %r, expected a list", method, table, type(rows).__name__)
        raise StoreError('Supabase returned an unexpected response')
    return rows


# ===================
# READ OPERATIONS
# ===================

def fetch_item(item_id):
    """Look up one item by id. Returns the row or None if not found."""
    rows = _request('GET', config.SUPABASE_ITEMS_TABLE, params={'select': '*', 'id': f'eq.{item_id}'})
    return rows[0] if rows else None


def fetch_items(org=None, sort='rank'):
    """List items, highest priority first ('rank') or newest first ('recent')."""
    if sort == 'rank':
        order = 'priority_rank.desc.nullslast,created_at.desc'
    else:
        order = 'created_at.desc'

    params = {'select': '*', 'order': order}
    if org:
        params['org_id'] = f'eq.{org}'
    return _request('GET', config.SUPABASE_ITEMS_TABLE, params=params)


def fetch_profiles(user_ids):
    """Get id and display name for each originator in user_ids."""
    ids = [str(uid) for uid in user_ids if uid]
    if not ids:
        return []
    params = {'select': 'id,display_name', 'id': f"in.({','.join(ids)})"}
    return _request('GET', config.SUPABASE_PROFILES_TABLE, params=params)


# ===================
# WRITE OPERATIONS
# ===================

def insert_item(row):
    """Create an item. Supabase fills in id and created_at."""
    rows = _request('POST', config.SUPABASE_ITEMS_TABLE, json=row)
    if not rows:
        raise StoreError('Supabase did not return the created item')
    log.info("Created item %s", rows[0].get('id'))
    return rows[0]


def patch_item(item_id, changes, match=None):
    """Update fields on an item.

    `match` adds equality filters so the write only lands if those
    fields are unchanged. Returns the updated row or None if nothing matched.
    """
    params = {'id': f'eq.{item_id}'}
    for field, expected in (match or {}).items():
        params[field] = 'is.null' if expected is None else f'eq.{expected}'

    rows = _request('PATCH', config.SUPABASE_ITEMS_TABLE, params=params, json=changes)
    if not rows:
        return None
    log.info("Updated item %s: %s", item_id, sorted(changes))
    return rows[0]
