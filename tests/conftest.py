"""
Shared pytest fixtures for Referent tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load Cloud Function modules with unique names at module load time
_parser_module = _load_module_from_path(
    'article_parser_main',
    PROJECT_ROOT / 'article-parser' / 'main.py'
)

_summarizer_module = _load_module_from_path(
    'article_summarizer_main',
    PROJECT_ROOT / 'article-summarizer' / 'main.py'
)

_translator_module = _load_module_from_path(
    'article_translator_main',
    PROJECT_ROOT / 'article-translator' / 'main.py'
)

_illustrator_module = _load_module_from_path(
    'article_illustrator_main',
    PROJECT_ROOT / 'article-illustrator' / 'main.py'
)


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def parse_article():
    """Returns main entry point from article-parser."""
    return _parser_module.parse_article


@pytest.fixture
def summarize_article(monkeypatch):
    """Returns main entry point from article-summarizer, with an API key set."""
    monkeypatch.setattr(_summarizer_module, 'OPENROUTER_API_KEY', 'test-openrouter-key')
    return _summarizer_module.summarize_article


@pytest.fixture
def translate_article(monkeypatch):
    """Returns main entry point from article-translator, with an API key set."""
    monkeypatch.setattr(_translator_module, 'OPENROUTER_API_KEY', 'test-openrouter-key')
    return _translator_module.translate_article


@pytest.fixture
def illustrate_article(monkeypatch):
    """Returns main entry point from article-illustrator, with both API keys set."""
    monkeypatch.setattr(_illustrator_module, 'OPENROUTER_API_KEY', 'test-openrouter-key')
    monkeypatch.setattr(_illustrator_module, 'HUGGINGFACE_API_KEY', 'test-hf-key')
    return _illustrator_module.illustrate_article


@pytest.fixture
def summarizer_module():
    return _summarizer_module


@pytest.fixture
def translator_module():
    return _translator_module


@pytest.fixture
def illustrator_module():
    return _illustrator_module


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip the model-loading wait; records requested delays."""
    delays = []
    monkeypatch.setattr('referent.image_generation.time.sleep', delays.append)
    return delays


# ============================================================================
# Request and payload fixtures
# ============================================================================

@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


@pytest.fixture
def completion_response():
    """Factory for OpenRouter chat-completion bodies."""
    def _make(content):
        return {
            'id': 'gen-123',
            'model': 'deepseek/deepseek-chat',
            'choices': [
                {'index': 0, 'message': {'role': 'assistant', 'content': content}}
            ]
        }
    return _make


@pytest.fixture
def png_bytes():
    """Fake PNG payload large enough to pass the byte sniffing check."""
    return b'\x89PNG\r\n\x1a\n' + b'\x00' * 400


@pytest.fixture
def sample_article_html():
    """Returns a sample article page."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>How Rust Won Over Systems Programmers | Example Blog</title>
        <meta property="article:published_time" content="2024-12-15T10:00:00Z">
    </head>
    <body>
        <nav>Home | About | Contact</nav>
        <article>
            <h1>How Rust Won Over Systems Programmers</h1>
            <time datetime="2024-12-15">December 15, 2024</time>
            <script>trackPageView();</script>
            <p>Rust started as a side project and grew into one of the most loved
               languages among developers.</p>
            <p>Its ownership model removes whole classes of memory bugs   without
               a garbage collector, which is why systems teams keep adopting it.</p>
            <aside>Subscribe to our newsletter!</aside>
        </article>
    </body>
    </html>
    """
