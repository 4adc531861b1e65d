"""
Shared fixtures: an in-memory stand-in for the Cloudflare Images service
plugged into the client through ``httpx.MockTransport``.
"""

import httpx
import pytest

from cfimages.api.api import Api

ACCOUNT_ID = "023e105f4ecef8ad9ca31a8372d0c353"
API_KEY = "test-api-key"
BATCH_TOKEN = "batch-token-value"
ACCOUNT_PATH = f"/client/v4/accounts/{ACCOUNT_ID}"
FUTURE_EXPIRY = "2999-08-09T15:33:56.273411222Z"
PAST_EXPIRY = "2000-01-01T00:00:00.000000000Z"


def envelope(result, success=True, errors=None):
    return {"result": result, "success": success, "errors": errors or [], "messages": []}


def image_payload(id="img-1", **fields):
    payload = {
        "id": id,
        "filename": "image.jpg",
        "meta": {"key1": "value1"},
        "uploaded": "2023-08-09T15:33:56.273Z",
        "requireSignedURLs": False,
        "variants": [f"https://imagedelivery.net/hash/{id}/public"],
    }
    payload.update(fields)
    return payload


class FakeImagesService:
    """Routes requests by (method, path) where path is relative to the account or batch host."""

    def __init__(self):
        self.requests = []
        self.routes = {}

    def add(self, method, path, json=None, status_code=200, content=None):
        self.routes[(method, path)] = (status_code, json, content)

    def add_batch_token(self, expires_at=FUTURE_EXPIRY, token=BATCH_TOKEN):
        self.add("GET", "/images/v1/batch_token", envelope({"token": token, "expiresAt": expires_at}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.url.host == "api.cloudflare.com":
            path = path[len(ACCOUNT_PATH) :]
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404,
                json=envelope({}, success=False, errors=[{"code": 5404, "message": "Not found"}]),
            )
        status_code, payload, content = route
        if content is not None:
            return httpx.Response(status_code, content=content)
        if callable(payload):
            payload = payload(request)
        return httpx.Response(status_code, json=payload)

    def requests_to(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path.endswith(path)]


@pytest.fixture
def service():
    return FakeImagesService()


@pytest.fixture
def api(service):
    client = Api(account_id=ACCOUNT_ID, api_key=API_KEY, transport=httpx.MockTransport(service))
    yield client
    client.close()
