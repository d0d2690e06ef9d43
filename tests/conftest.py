"""Pytest fixtures: fake backend client and a small catalog."""

import json

import pytest
import requests

from shophub.services.session import StorefrontSession


CATALOG = [
    {"_id": "a", "name": "Red Shirt", "description": "Cotton tee", "price": 20,
     "imageUrl": "https://images.unsplash.com/red.jpg", "category": "apparel",
     "rating": 4, "reviews": 12},
    {"_id": "b", "name": "Blue Hat", "description": "Wool beanie", "price": 10,
     "imageUrl": "https://images.unsplash.com/blue.jpg", "category": "apparel",
     "rating": 5, "reviews": 3},
    {"_id": "c", "name": "Mug", "description": "Ceramic, RED glaze", "price": 7.5,
     "imageUrl": "https://res.cloudinary.com/mug.jpg", "category": "kitchen"},
]


class FakeApiClient:
    """Stands in for ApiClient: records calls, replays canned bodies or errors."""

    base_url = "http://backend.test"

    def __init__(self, catalog=None):
        self.catalog = list(CATALOG if catalog is None else catalog)
        self.calls = []
        self.form_result = None
        self.fail_with = {}

    def _maybe_fail(self, method):
        err = self.fail_with.get(method)
        if err is not None:
            raise err

    def get_json(self, path):
        self.calls.append(("GET", path, None, None))
        self._maybe_fail("GET")
        return self.catalog

    def send_form(self, method, path, data, files=None):
        self.calls.append((method, path, data, files))
        self._maybe_fail(method)
        if self.form_result is not None:
            return self.form_result
        return {"_id": "new-id", **data, "price": float(data["price"])}

    def delete(self, path):
        self.calls.append(("DELETE", path, None, None))
        self._maybe_fail("DELETE")
        return {"message": "Product deleted"}

    def methods(self):
        return [c[0] for c in self.calls]


def make_response(status=200, body=None, raw=None, url="http://backend.test/api/products"):
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    if raw is not None:
        resp._content = raw
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


@pytest.fixture
def fake_api():
    return FakeApiClient()


@pytest.fixture
def session(fake_api):
    s = StorefrontSession(api=fake_api)
    s.catalog.refresh()
    fake_api.calls.clear()
    return s
