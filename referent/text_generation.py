"""
Chat-completion client for Referent.

All text tasks (summaries, theses, Telegram posts, translation and image
prompts) go through complete(), which sends exactly one system message and
one user message to OpenRouter. There is no retry: any failure is returned to
the caller, who turns it into a user-facing message.
"""

import os

import requests

OPENROUTER_URL = 'https://openrouter.ai/api/v1/chat/completions'
TEXT_MODEL = 'deepseek/deepseek-chat'
APP_TITLE = 'Referent - AI Article Summarizer'
APP_URL = os.environ.get('APP_URL', 'http://localhost:3000')
COMPLETION_TIMEOUT_SECONDS = 60

ACTIONS = ('about', 'theses', 'telegram')

# (system prompt, user prefix) per action
ACTION_PROMPTS = {
    'about': (
        'Ты эксперт по реферированию. Дай краткое описание статьи на русском языке: '
        '1–2 абзаца, без списков и без формата поста. Только суть и основные идеи.',
        'О чем эта статья? Кратко опиши:\n\n',
    ),
    'theses': (
        'Ты эксперт по реферированию. Выдели ключевые тезисы статьи и выдай их в виде '
        'нумерованного или маркированного списка на русском языке. Без вступления, только тезисы.',
        'Выдели ключевые тезисы статьи:\n\n',
    ),
    'telegram': (
        'Ты редактор. Напиши короткий пост для Telegram на русском языке по материалам статьи: '
        '1–3 абзаца, готовый к публикации. Без хештегов и лишних пометок, живой язык.',
        'Напиши пост для Telegram по этой статье:\n\n',
    ),
}

ACTION_TEMPERATURE = 0.3
ACTION_MAX_TOKENS = 2000

TRANSLATE_SYSTEM_PROMPT = (
    'Ты профессиональный переводчик. Переведи следующий текст с английского на русский язык, '
    'сохраняя структуру и стиль оригинала. Переведи только текст, без дополнительных комментариев.'
)
TRANSLATE_USER_PREFIX = 'Переведи на русский язык:\n\n'
TRANSLATE_TEMPERATURE = 0.3
TRANSLATE_MAX_TOKENS = 4000

IMAGE_PROMPT_SYSTEM_PROMPT = (
    'You are an expert at writing short image generation prompts. Based on the article text, '
    'write a single English prompt for a text-to-image model (e.g. Stable Diffusion, FLUX). '
    'The prompt should describe one clear, visual scene that captures the main idea of the article. '
    'Use 10-15 words max. Output only the prompt, no quotes or explanation.'
)
IMAGE_PROMPT_USER_PREFIX = 'Article excerpt:\n\n'
IMAGE_PROMPT_EXCERPT_CHARS = 3000
IMAGE_PROMPT_TEMPERATURE = 0.5
IMAGE_PROMPT_MAX_TOKENS = 100
FALLBACK_IMAGE_PROMPT = 'Abstract concept, digital art, vivid colors'


def is_action(value) -> bool:
    """Check if value is one of the supported generation actions."""
    return isinstance(value, str) and value in ACTIONS


def build_completion_payload(system_prompt: str, user_text: str, max_tokens: int, temperature: float) -> dict:
    """Build the chat-completion request body."""
    return {
        'model': TEXT_MODEL,
        'messages': [
            {'role': 'system', 'content': system_prompt},
            {'role': 'user', 'content': user_text},
        ],
        'temperature': temperature,
        'max_tokens': max_tokens,
    }


def complete(system_prompt: str, user_text: str, max_tokens: int, temperature: float, api_key: str) -> dict:
    """
    Run one chat completion.

    Returns dict with:
        success: bool
        text: str - generated text (on success)
        error: str - internal error description (on failure)
        status: int or None - upstream HTTP status (on failure)
    """
    try:
        response = requests.post(
            OPENROUTER_URL,
            headers={
                'Content-Type': 'application/json',
                'Authorization': f'Bearer {api_key}',
                'HTTP-Referer': APP_URL,
                'X-Title': APP_TITLE,
            },
            json=build_completion_payload(system_prompt, user_text, max_tokens, temperature),
            timeout=COMPLETION_TIMEOUT_SECONDS
        )
    except requests.exceptions.RequestException as e:
        print(f"OpenRouter request failed: {e}")
        return {'success': False, 'error': f'Request failed: {str(e)}', 'status': None}

    if not response.ok:
        print(f"OpenRouter error: {response.status_code} - {response.text[:200]}")
        return {'success': False, 'error': f'HTTP error: {response.status_code}', 'status': response.status_code}

    try:
        data = response.json()
        content = data['choices'][0]['message']['content']
    except (ValueError, KeyError, IndexError, TypeError):
        print(f"OpenRouter returned unexpected body: {response.text[:200]}")
        return {'success': False, 'error': 'Malformed completion response', 'status': response.status_code}

    if not isinstance(content, str):
        return {'success': False, 'error': 'Malformed completion response', 'status': response.status_code}

    return {'success': True, 'text': content.strip()}


def run_action(action: str, text: str, api_key: str) -> dict:
    """Run one of the fixed generation actions over the article text."""
    if not is_action(action):
        raise ValueError(f"Unknown action: {action!r}")

    system_prompt, user_prefix = ACTION_PROMPTS[action]
    return complete(
        system_prompt,
        user_prefix + text.strip(),
        ACTION_MAX_TOKENS,
        ACTION_TEMPERATURE,
        api_key
    )


def translate_text(text: str, api_key: str) -> dict:
    """Translate English article text into Russian."""
    return complete(
        TRANSLATE_SYSTEM_PROMPT,
        TRANSLATE_USER_PREFIX + text,
        TRANSLATE_MAX_TOKENS,
        TRANSLATE_TEMPERATURE,
        api_key
    )


def build_image_prompt(text: str, api_key: str) -> dict:
    """
    Derive a short text-to-image prompt from the article.

    Only the first few thousand characters are sent. An empty completion
    falls back to a generic abstract prompt.
    """
    result = complete(
        IMAGE_PROMPT_SYSTEM_PROMPT,
        IMAGE_PROMPT_USER_PREFIX + text[:IMAGE_PROMPT_EXCERPT_CHARS],
        IMAGE_PROMPT_MAX_TOKENS,
        IMAGE_PROMPT_TEMPERATURE,
        api_key
    )
    if result['success'] and not result['text']:
        result['text'] = FALLBACK_IMAGE_PROMPT
    return result
