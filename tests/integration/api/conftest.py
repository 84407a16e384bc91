# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the API integration tests."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from iconfetch.icons import get_resolver
from iconfetch.icons.resolver import IconResolver
from iconfetch.main import app


@pytest.fixture(name="client")
def fixture_test_client(resolver: IconResolver) -> Iterator[TestClient]:
    """Return a FastAPI TestClient instance serving icons from the fake web.

    Note that this will NOT trigger event handlers (i.e. `startup` and `shutdown`) for
    the app, see: https://fastapi.tiangolo.com/advanced/testing-events/
    """
    app.dependency_overrides[get_resolver] = lambda: resolver
    yield TestClient(app)
    del app.dependency_overrides[get_resolver]


@pytest.fixture(name="client_with_events")
def fixture_test_client_with_events() -> Iterator[TestClient]:
    """Return a FastAPI TestClient instance.

    This test client will trigger event handlers (i.e. `startup` and `shutdown`) for
    the app, see: https://fastapi.tiangolo.com/advanced/testing-events/
    """
    with TestClient(app) as client:
        yield client
