# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations shared by the unit and integration tests."""

import os
import pathlib
from logging import LogRecord

import pytest

# Must be set before `iconfetch.configs` loads the settings.
os.environ.setdefault("ICONFETCH_ENV", "testing")

from prometheus_client import CollectorRegistry  # noqa: E402

from iconfetch.icons.cache import IconCache  # noqa: E402
from iconfetch.icons.fetcher import IconFetcher  # noqa: E402
from iconfetch.icons.models import IconConfig  # noqa: E402
from iconfetch.icons.resolver import IconResolver  # noqa: E402
from iconfetch.metrics import IconMetrics  # noqa: E402
from iconfetch.utils.http_client import create_http_client  # noqa: E402
from tests.fakes import FakeWeb  # noqa: E402
from tests.types import FilterCaplogFixture  # noqa: E402


@pytest.fixture(scope="session", name="filter_caplog")
def fixture_filter_caplog() -> FilterCaplogFixture:
    """
    Return a function that will filter pytest captured log records for a given logger
    name
    """

    def filter_caplog(records: list[LogRecord], logger_name: str) -> list[LogRecord]:
        """
        Filter pytest captured log records for a given logger name
        """
        return [record for record in records if record.name == logger_name]

    return filter_caplog


@pytest.fixture(name="icon_config")
def fixture_icon_config(tmp_path: pathlib.Path) -> IconConfig:
    """Return an icon configuration with a per-test cache root and caching enabled."""
    return IconConfig(
        source_cache=tmp_path / "sourceCache",
        cache_duration=120,
        caching=True,
        probe_timeout_sec=2.0,
    )


@pytest.fixture(name="fake_web")
def fixture_fake_web() -> FakeWeb:
    """Return an empty fake web; tests add their routes."""
    return FakeWeb()


@pytest.fixture(name="fetcher")
def fixture_fetcher(icon_config: IconConfig, fake_web: FakeWeb) -> IconFetcher:
    """Return a fetcher talking to the fake web."""
    return IconFetcher(icon_config, session=create_http_client(transport=fake_web.transport()))


@pytest.fixture(name="metrics")
def fixture_metrics() -> IconMetrics:
    """Return metrics registered on a private registry."""
    return IconMetrics(registry=CollectorRegistry())


@pytest.fixture(name="icon_cache")
def fixture_icon_cache(icon_config: IconConfig) -> IconCache:
    """Return a cache rooted in the per-test temporary directory."""
    return IconCache(icon_config)


@pytest.fixture(name="resolver")
def fixture_resolver(
    icon_config: IconConfig, metrics: IconMetrics, fetcher: IconFetcher, icon_cache: IconCache
) -> IconResolver:
    """Return a resolver wired to the fake web and the temporary cache."""
    return IconResolver(icon_config, metrics, fetcher=fetcher, cache=icon_cache)
