"""
Image generation through the Hugging Face inference router.

Models are tried in order. Each model is reached first through the
hf-inference provider path, then through the generic auto-routing path.
Every response is classified into a Step that tells the loop what to do next:

    SUCCESS        image bytes found, stop
    RETRY_ONCE     model is loading, wait and resend the same request once
    NEXT_ENDPOINT  try the same model on its next path
    NEXT_MODEL     give up on this model

Providers answer either with raw image bytes or with a JSON object (an error,
or a placeholder while the model is cold), and the content type is not always
reliable, so image detection also sniffs the body.
"""

import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

import requests

HF_BASE_URL = 'https://router.huggingface.co'
IMAGE_REQUEST_TIMEOUT_SECONDS = 120
LOADING_RETRY_DELAY_SECONDS = 8
ERROR_BODY_PREVIEW_BYTES = 500
MIN_SNIFFED_IMAGE_BYTES = 200
DEFAULT_IMAGE_MIME_TYPE = 'image/png'
NO_IMAGE_MESSAGE = 'No model returned an image'


@dataclass(frozen=True)
class ImageModelCandidate:
    model_id: str
    parameters: Dict[str, float] = field(default_factory=dict)

    def endpoint_paths(self) -> List[str]:
        """Provider-specific path first, then the generic routed path."""
        return [
            f'/hf-inference/models/{self.model_id}',
            f'/models/{self.model_id}',
        ]


DEFAULT_IMAGE_MODELS = (
    ImageModelCandidate('ByteDance/SDXL-Lightning', {'num_inference_steps': 4, 'guidance_scale': 0}),
    ImageModelCandidate('black-forest-labs/FLUX.1-schnell', {'num_inference_steps': 4}),
    ImageModelCandidate('stabilityai/stable-diffusion-2-1', {'num_inference_steps': 25, 'guidance_scale': 7.5}),
)


@dataclass(frozen=True)
class ImageSuccess:
    content: bytes
    mime_type: str


@dataclass(frozen=True)
class ImageFailure:
    message: str
    status_code: Optional[int] = None


ImageResult = Union[ImageSuccess, ImageFailure]


class Step(Enum):
    SUCCESS = 'success'
    RETRY_ONCE = 'retry_once'
    NEXT_ENDPOINT = 'next_endpoint'
    NEXT_MODEL = 'next_model'


@dataclass(frozen=True)
class Attempt:
    """Outcome of one POST: the next step plus whatever it produced."""
    step: Step
    image: Optional[ImageSuccess] = None
    failure: Optional[ImageFailure] = None


def looks_like_image(content_type: str, body: bytes) -> bool:
    """
    Decide whether a success body is image data.

    Either the declared type says so, or the body is big enough and does not
    open with '{' (a JSON payload).
    """
    if 'image/' in (content_type or ''):
        return True
    return len(body) > MIN_SNIFFED_IMAGE_BYTES and body[0] != 0x7B


def image_mime_type(content_type: str) -> str:
    """Declared image/* type without parameters, else image/png."""
    if content_type and 'image/' in content_type:
        return content_type.split(';')[0].strip()
    return DEFAULT_IMAGE_MIME_TYPE


def _parse_json(body: bytes) -> Optional[dict]:
    try:
        data = json.loads(body.decode('utf-8'))
    except (ValueError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def error_message(body: bytes) -> str:
    """Pull a message out of an error body: JSON error/message, else raw preview."""
    preview = body[:ERROR_BODY_PREVIEW_BYTES].decode('utf-8', errors='replace')
    data = _parse_json(body)
    if data:
        if data.get('error'):
            return str(data['error'])
        if data.get('message'):
            return str(data['message'])
    return preview


def classify_response(response: requests.Response, allow_retry: bool = True) -> Attempt:
    """Map one provider response to the next Step."""
    body = response.content or b''
    content_type = response.headers.get('Content-Type', '')

    if not response.ok:
        failure = ImageFailure(error_message(body), response.status_code)
        if response.status_code == 404:
            # Model not served through this path
            return Attempt(Step.NEXT_ENDPOINT, failure=failure)
        return Attempt(Step.NEXT_MODEL, failure=failure)

    if looks_like_image(content_type, body):
        return Attempt(Step.SUCCESS, image=ImageSuccess(body, image_mime_type(content_type)))

    data = _parse_json(body) or {}
    placeholder = str(data.get('error') or '')
    if allow_retry and 'loading' in placeholder.lower():
        return Attempt(Step.RETRY_ONCE, failure=ImageFailure(placeholder, response.status_code))

    return Attempt(
        Step.NEXT_ENDPOINT,
        failure=ImageFailure(placeholder or NO_IMAGE_MESSAGE, response.status_code)
    )


def build_image_payload(prompt: str, candidate: ImageModelCandidate) -> dict:
    payload = {'inputs': prompt}
    if candidate.parameters:
        payload['parameters'] = dict(candidate.parameters)
    return payload


def _post(url: str, payload: dict, credential: str, allow_retry: bool) -> Attempt:
    try:
        response = requests.post(
            url,
            headers={
                'Authorization': f'Bearer {credential}',
                'Content-Type': 'application/json',
            },
            json=payload,
            timeout=IMAGE_REQUEST_TIMEOUT_SECONDS
        )
    except requests.exceptions.RequestException as e:
        return Attempt(Step.NEXT_MODEL, failure=ImageFailure(f'Request failed: {str(e)}'))
    return classify_response(response, allow_retry=allow_retry)


def generate_image(prompt: str, credential: str,
                   models: Sequence[ImageModelCandidate] = DEFAULT_IMAGE_MODELS) -> ImageResult:
    """
    Generate an image for prompt, walking the model fallback chain.

    Returns ImageSuccess with the first image produced. When every model and
    path is exhausted, returns the most telling failure seen (the last
    non-404 rejection, otherwise the last failure), or a generic one.
    """
    last_failure = None

    for candidate in models:
        payload = build_image_payload(prompt, candidate)

        for path in candidate.endpoint_paths():
            url = f'{HF_BASE_URL}{path}'
            attempt = _post(url, payload, credential, allow_retry=True)

            if attempt.step is Step.RETRY_ONCE:
                print(f"[illustrate] {candidate.model_id} loading ({url}), retrying in {LOADING_RETRY_DELAY_SECONDS}s")
                time.sleep(LOADING_RETRY_DELAY_SECONDS)
                attempt = _post(url, payload, credential, allow_retry=False)

            if attempt.step is Step.SUCCESS:
                return attempt.image

            failure = attempt.failure
            print(f"[illustrate] {candidate.model_id} {failure.status_code} ({url}): {failure.message}")
            if last_failure is None or failure.status_code != 404:
                last_failure = failure

            if attempt.step is Step.NEXT_MODEL:
                break

    return last_failure or ImageFailure(NO_IMAGE_MESSAGE)
