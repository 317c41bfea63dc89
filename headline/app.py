# Felma Headline
# Suggests a short headline for a submitted frustration or idea

import sys
import os
import logging

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify
from flask_cors import CORS
from anthropic import Anthropic, AnthropicError
import httpx
import json

from felma import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    CORS_ORIGIN,
    configure_logging,
    strip_markdown_json,
    collapse_whitespace,
    display_title
)
from felma.config import TITLE_MAX_LENGTH

configure_logging()
log = logging.getLogger('felma.headline')

app = Flask(__name__)
CORS(app, origins=[CORS_ORIGIN])


def json_body():
    """Request JSON if it is an object, otherwise an empty dict"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

# Anthropic client, only when a key is configured
anthropic_client = None
if ANTHROPIC_API_KEY:
    anthropic_client = Anthropic(
        api_key=ANTHROPIC_API_KEY,
        http_client=httpx.Client(timeout=60.0, follow_redirects=True)
    )

# Load prompt
PROMPT_PATH = os.path.join(os.path.dirname(__file__), 'prompt.txt')
with open(PROMPT_PATH, 'r') as f:
    HEADLINE_PROMPT = f.read()


def ask_claude(content):
    """Ask Claude for a headline. Returns the cleaned headline or None."""
    response = anthropic_client.messages.create(
        model=ANTHROPIC_MODEL,
        max_tokens=200,
        temperature=0.2,
        system=HEADLINE_PROMPT,
        messages=[
            {'role': 'user', 'content': f'Submitted text:\n\n{content}'}
        ]
    )

    if not response.content or response.content[0].type != 'text':
        return None

    text = strip_markdown_json(response.content[0].text)
    parsed = json.loads(text)
    if not isinstance(parsed, dict) or not isinstance(parsed.get('headline'), str):
        return None
    headline = collapse_whitespace(parsed['headline'])[:TITLE_MAX_LENGTH].rstrip()
    return headline or None


@app.route('/headline', methods=['POST'])
def headline():
    """Suggest a headline.

    Accepts:
        - content: The submitted text (required)

    Returns:
        - headline: Suggested headline, at most 80 characters
        - source: 'claude', or 'fallback' when the text itself was trimmed
    """
    try:
        data = json_body()
        content = data.get('content', '')

        if not isinstance(content, str) or not content.strip():
            return jsonify({'error': 'No content provided'}), 400

        if anthropic_client is not None:
            try:
                suggestion = ask_claude(content)
                if suggestion:
                    return jsonify({'headline': suggestion, 'source': 'claude'})
                log.warning("Claude returned no usable headline, using fallback")
            except json.JSONDecodeError as e:
                log.warning("Claude returned invalid JSON, using fallback: %s", e)
            except AnthropicError as e:
                log.warning("Headline request failed, using fallback: %s", e)

        return jsonify({'headline': display_title(None, content), 'source': 'fallback'})

    except Exception as e:
        log.exception("Unhandled error: %s", e)
        return jsonify({
            'error': 'Internal server error',
            'details': str(e)
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Felma Headline',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
