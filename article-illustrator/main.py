"""
Article Illustrator Cloud Function

Generates an illustration for an article in two steps:
1. Ask the text model for a short English text-to-image prompt
2. Walk the image model fallback chain with that prompt

Expected JSON input:
    {"text": "..."}

Response:
    {"image": "data:image/png;base64,...", "prompt": "..."}
"""

import functions_framework
import base64
import os
import sys

# Add the referent package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from referent import messages
from referent.http_utils import error_response, get_text_field, json_response, preflight_response
from referent.image_generation import ImageFailure, generate_image
from referent.text_generation import build_image_prompt

# Configuration
OPENROUTER_API_KEY = os.environ.get('OPENROUTER_API_KEY')
HUGGINGFACE_API_KEY = os.environ.get('HUGGINGFACE_API_KEY')


def to_data_uri(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode('ascii')
    return f'data:{mime_type};base64,{encoded}'


@functions_framework.http
def illustrate_article(request):
    """Main Cloud Function entry point."""
    if request.method == 'OPTIONS':
        return preflight_response()

    try:
        request_json = request.get_json(silent=True)

        text = get_text_field(request_json, 'text')
        if not text:
            return error_response(messages.MISSING_ILLUSTRATION_TEXT, 400)

        if not OPENROUTER_API_KEY:
            return error_response(messages.SERVICE_UNAVAILABLE, 503)

        hf_key = (HUGGINGFACE_API_KEY or '').strip()
        if not hf_key:
            return error_response(messages.MISSING_IMAGE_KEY, 503)

        prompt_result = build_image_prompt(text, OPENROUTER_API_KEY)
        if not prompt_result['success']:
            print(f"[illustrate] prompt generation failed: {prompt_result['error']}")
            return error_response(messages.IMAGE_PROMPT_FAILED, 502)

        image_prompt = prompt_result['text']
        print(f"[illustrate] prompt: {image_prompt}")

        result = generate_image(image_prompt, hf_key)
        if isinstance(result, ImageFailure):
            print(f"[illustrate] no image: {result.status_code} {result.message}")
            return error_response(messages.describe_image_failure(result), 503)

        return json_response({
            'image': to_data_uri(result.content, result.mime_type),
            'prompt': image_prompt,
        })

    except Exception as e:
        print(f"Illustrate error: {e}")
        return error_response(messages.ILLUSTRATION_FAILED, 502)
