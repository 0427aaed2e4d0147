"""
Article Summarizer Cloud Function

Runs one generation action over article text: a short description
('about'), key theses ('theses') or a Telegram post draft ('telegram').

Expected JSON input:
    {"text": "...", "action": "about" | "theses" | "telegram"}

Response:
    {"result": "..."}
"""

import functions_framework
import os
import sys

# Add the referent package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from referent import messages
from referent.http_utils import error_response, get_text_field, json_response, preflight_response
from referent.text_generation import is_action, run_action

# Configuration
OPENROUTER_API_KEY = os.environ.get('OPENROUTER_API_KEY')


@functions_framework.http
def summarize_article(request):
    """Main Cloud Function entry point."""
    if request.method == 'OPTIONS':
        return preflight_response()

    try:
        request_json = request.get_json(silent=True)

        text = get_text_field(request_json, 'text')
        if not text:
            return error_response(messages.MISSING_TEXT, 400)

        action = request_json.get('action')
        if not is_action(action):
            return error_response(messages.UNKNOWN_ACTION, 400)

        if not OPENROUTER_API_KEY:
            return error_response(messages.SERVICE_UNAVAILABLE, 503)

        result = run_action(action, text, OPENROUTER_API_KEY)
        if not result['success']:
            print(f"Summarize ({action}) failed: {result['error']}")
            return error_response(
                messages.describe_text_failure(result.get('status'), messages.GENERATION_FAILED),
                502
            )

        return json_response({'result': result['text']})

    except Exception as e:
        print(f"Summarize error: {e}")
        return error_response(messages.GENERATION_FAILED, 502)
