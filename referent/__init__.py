"""Shared logic for the Referent article functions."""

from .extraction import (
    DEFAULT_SELECTOR_RULES,
    ParsedArticle,
    SelectorRules,
    extract_article,
    fetch_article_html,
    normalize_whitespace,
)

from .text_generation import (
    ACTIONS,
    ACTION_PROMPTS,
    build_image_prompt,
    complete,
    is_action,
    run_action,
    translate_text,
)

from .image_generation import (
    DEFAULT_IMAGE_MODELS,
    ImageFailure,
    ImageModelCandidate,
    ImageSuccess,
    Step,
    classify_response,
    generate_image,
    looks_like_image,
)

from .http_utils import (
    error_response,
    get_text_field,
    is_valid_url,
    json_response,
    preflight_response,
)

__all__ = [
    # Extraction
    'DEFAULT_SELECTOR_RULES',
    'ParsedArticle',
    'SelectorRules',
    'extract_article',
    'fetch_article_html',
    'normalize_whitespace',
    # Text generation
    'ACTIONS',
    'ACTION_PROMPTS',
    'build_image_prompt',
    'complete',
    'is_action',
    'run_action',
    'translate_text',
    # Image generation
    'DEFAULT_IMAGE_MODELS',
    'ImageFailure',
    'ImageModelCandidate',
    'ImageSuccess',
    'Step',
    'classify_response',
    'generate_image',
    'looks_like_image',
    # HTTP helpers
    'error_response',
    'get_text_field',
    'is_valid_url',
    'json_response',
    'preflight_response',
]
