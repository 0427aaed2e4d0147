"""
Article Parser Cloud Function

Fetches an article URL and returns its title, publish date and main text.

Expected JSON input:
    {"url": "https://example.com/article"}

Response:
    {"title": str | null, "date": str | null, "content": str | null}
"""

import functions_framework
import os
import sys

# Add the referent package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from referent import messages
from referent.extraction import extract_article, fetch_article_html
from referent.http_utils import error_response, get_text_field, is_valid_url, json_response, preflight_response


@functions_framework.http
def parse_article(request):
    """Main Cloud Function entry point."""
    if request.method == 'OPTIONS':
        return preflight_response()

    try:
        request_json = request.get_json(silent=True)

        url = get_text_field(request_json, 'url')
        if not url:
            return error_response(messages.MISSING_URL, 400)

        url = url.strip()
        if not is_valid_url(url):
            return error_response(messages.INVALID_URL, 400)

        html, fetch_error = fetch_article_html(url)
        if fetch_error:
            print(f"Fetch error for {url}: {fetch_error}")
            return error_response(messages.FETCH_ARTICLE_FAILED, 502)

        article = extract_article(html)
        print(f"Parsed {url}: title={article.title!r}, content={len(article.content or '')} chars")

        return json_response(article.to_dict())

    except Exception as e:
        print(f"Parse error: {e}")
        return error_response(messages.FETCH_ARTICLE_FAILED, 502)
