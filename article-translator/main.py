"""
Article Translator Cloud Function

Translates English article text into Russian.

Expected JSON input:
    {"text": "..."}

Response:
    {"translation": "..."}
"""

import functions_framework
import os
import sys

# Add the referent package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from referent import messages
from referent.http_utils import error_response, get_text_field, json_response, preflight_response
from referent.text_generation import translate_text

# Configuration
OPENROUTER_API_KEY = os.environ.get('OPENROUTER_API_KEY')


@functions_framework.http
def translate_article(request):
    """Main Cloud Function entry point."""
    if request.method == 'OPTIONS':
        return preflight_response()

    try:
        request_json = request.get_json(silent=True)

        text = get_text_field(request_json, 'text')
        if not text:
            return error_response(messages.MISSING_TRANSLATION_TEXT, 400)

        if not OPENROUTER_API_KEY:
            return error_response(messages.TRANSLATION_UNAVAILABLE, 503)

        result = translate_text(text, OPENROUTER_API_KEY)
        if not result['success']:
            print(f"Translate failed: {result['error']}")
            return error_response(
                messages.describe_text_failure(result.get('status'), messages.TRANSLATION_FAILED),
                502
            )

        return json_response({'translation': result['text']})

    except Exception as e:
        print(f"Translate error: {e}")
        return error_response(messages.TRANSLATION_FAILED, 502)
