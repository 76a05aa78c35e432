import logging

import pytest

from common.factories import make_session, make_store

# 激活分层插件
pytest_plugins = [
    "common.plugins.layers",
]


def pytest_addoption(parser):
    parser.addoption("--env", action="store", default="dev", help="运行环境")


@pytest.fixture(scope="function")
def log_capture(caplog):
    logger = logging.getLogger("storefront.pricing")
    caplog.set_level(logging.INFO, logger=logger.name)
    return caplog


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def session(store):
    return make_session(store)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    for key in ("STOREFRONT_CONFIG", "STOREFRONT_CURRENCY", "STOREFRONT_DECIMALS",
                "STOREFRONT_LOCALE", "STOREFRONT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    p = tmp_path / "storefront.yaml"
    p.write_text("currency_symbol: EUR\ndecimals: 3\nlocale: en\n", encoding="utf-8")
    yield p
    p.unlink(missing_ok=True)
