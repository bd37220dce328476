"""
Starlette implementations of the request-side collaborators.
"""

from starlette.requests import Request
from starlette.responses import RedirectResponse


class StarletteRequestContext:
    """RequestContext over a Starlette request.

    The path keeps the query string, matching what the client requested.
    """

    def __init__(self, request: Request):
        self.request = request

    def get_path(self) -> str:
        url = self.request.url
        if url.query:
            return f"{url.path}?{url.query}"
        return url.path

    def get_full_url(self) -> str:
        return str(self.request.url)


class RedirectResponseBuilder:
    """ResponseBuilder producing Starlette redirects."""

    def __init__(self, status_code: int = 302):
        self.status_code = status_code

    def redirect(self, uri: str) -> RedirectResponse:
        return RedirectResponse(url=uri, status_code=self.status_code)
