"""
User-facing messages for Referent.

The front-end audience reads Russian, so every message a function returns is
Russian. Upstream error bodies never reach these strings; they only go to
the logs.
"""

from typing import Optional

from .image_generation import ImageFailure

# Input validation
MISSING_URL = 'Введите URL статьи.'
INVALID_URL = 'Некорректный URL. Проверьте адрес статьи.'
MISSING_TEXT = 'Нет текста для обработки.'
MISSING_TRANSLATION_TEXT = 'Нет текста для перевода.'
MISSING_ILLUSTRATION_TEXT = 'Нет текста для генерации иллюстрации.'
UNKNOWN_ACTION = 'Выберите действие: описание, тезисы или пост для Telegram.'

# Configuration
SERVICE_UNAVAILABLE = 'Сервис временно недоступен. Попробуйте позже.'
TRANSLATION_UNAVAILABLE = 'Сервис перевода временно недоступен.'
MISSING_IMAGE_KEY = (
    'В .env.local задайте HUGGINGFACE_API_KEY '
    '(токен: https://huggingface.co/settings/tokens, право: Inference).'
)

# Upstream failures
FETCH_ARTICLE_FAILED = 'Не удалось загрузить статью по этой ссылке.'
GENERATION_FAILED = 'Не удалось сгенерировать ответ. Попробуйте позже.'
TRANSLATION_FAILED = 'Не удалось выполнить перевод. Попробуйте позже.'
IMAGE_PROMPT_FAILED = 'Не удалось создать промпт для иллюстрации. Попробуйте позже.'
ILLUSTRATION_FAILED = 'Не удалось сгенерировать иллюстрацию. Попробуйте позже.'
IMAGE_FAILED = 'Не удалось сгенерировать изображение. Попробуйте позже.'
RATE_LIMITED = 'Слишком много запросов к сервису. Подождите минуту и попробуйте снова.'

# Image provider hints
INVALID_IMAGE_KEY = (
    'Неверный HUGGINGFACE_API_KEY. Создайте токен на '
    'https://huggingface.co/settings/tokens с правом «Inference».'
)
IMAGE_KEY_WITHOUT_INFERENCE = (
    'Токен без доступа к Inference API. В настройках токена включите: '
    'Inference → Make calls to the serverless Inference API.'
)
IMAGE_MODEL_LOADING = 'Модель ещё загружается. Подождите 1–2 минуты и нажмите «Иллюстрация» снова.'


def describe_text_failure(status: Optional[int], default: str) -> str:
    """Pick the message for a failed chat completion."""
    if status == 429:
        return RATE_LIMITED
    return default


def describe_image_failure(failure: ImageFailure) -> str:
    """Pick the message for a failed image generation."""
    if failure.status_code == 401:
        return INVALID_IMAGE_KEY
    if failure.status_code == 403:
        return IMAGE_KEY_WITHOUT_INFERENCE
    if failure.status_code == 429:
        return RATE_LIMITED
    if 'loading' in (failure.message or '').lower():
        return IMAGE_MODEL_LOADING
    return IMAGE_FAILED
