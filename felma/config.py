# Felma Shared Config
# Central configuration for all Felma apps

import os

# Supabase (managed Postgres over REST)
SUPABASE_URL = os.environ.get('SUPABASE_URL', '').rstrip('/')
SUPABASE_SERVICE_KEY = os.environ.get('SUPABASE_SERVICE_KEY')

# Table names
SUPABASE_ITEMS_TABLE = 'items'
SUPABASE_PROFILES_TABLE = 'profiles'

# Seconds before a Supabase request is abandoned
HTTP_TIMEOUT = float(os.environ.get('HTTP_TIMEOUT', 10.0))

# Anthropic
ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'

# Web
CORS_ORIGIN = os.environ.get('CORS_ORIGIN', 'https://felma-ui.onrender.com')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Item defaults
DEFAULT_ORG_ID = os.environ.get('DEFAULT_ORG_ID', 'DEV')
DEFAULT_TEAM_ID = os.environ.get('DEFAULT_TEAM_ID', 'GENERAL')
VALID_ITEM_TYPES = ['frustration', 'idea']
TITLE_MAX_LENGTH = 80
UNTITLED = '(untitled)'
