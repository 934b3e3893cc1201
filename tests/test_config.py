import pytest

from sprest.sprest_config import load_settings, runtime_config, setup
from sprest.sprest_errors import AddressConstructionError
from sprest.sprest_http import HttpTransport
from sprest.sprest_queryable import Queryable
from sprest.sprest_rest import SPRest

SITE = "https://contoso.sharepoint.com/sites/dev"


def test_defaults():
    assert runtime_config.base_url is None
    assert runtime_config.get("retries") == 0
    assert runtime_config.headers == {"Accept": "application/json;odata=verbose"}


def test_setup_merges_headers_key_by_key():
    setup({"base-url": SITE, "headers": {"X-RequestDigest": "abc"}})
    setup({"timeout": 5})
    assert runtime_config.base_url == SITE
    assert runtime_config.get("timeout") == 5
    assert runtime_config.headers == {"Accept": "application/json;odata=verbose", "X-RequestDigest": "abc"}


def test_load_settings_reads_sprest_section(tmp_path):
    p = tmp_path / "settings.yaml"
    p.write_text(
        "sprest:\n"
        "  base-url: https://contoso.sharepoint.com/sites/dev\n"
        "  retries: 2\n"
        "  headers:\n"
        "    Accept: application/json;odata=nometadata\n",
        encoding="utf-8",
    )
    assert load_settings(p)["retries"] == 2
    runtime_config.load(p)
    assert runtime_config.base_url == SITE
    assert runtime_config.headers["Accept"] == "application/json;odata=nometadata"


def test_load_settings_rejects_non_mapping(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(p)


def test_default_transport_uses_settings():
    setup({"base-url": SITE, "timeout": 10, "retries": 1})
    t = runtime_config.transport()
    assert isinstance(t, HttpTransport)
    assert t.base_url == SITE
    assert t.config["timeout"] == 10
    assert t.config["retries"] == 1
    assert t.headers == {"Accept": "application/json;odata=verbose"}


@pytest.mark.asyncio
async def test_unbound_locator_sends_through_configured_transport(transport):
    setup(transport_factory=lambda: transport)
    transport.queue({"d": {"Title": "Dev"}})
    out = await Queryable(SITE, "_api/web").get()
    assert out == {"Title": "Dev"}
    assert transport.last.url == SITE + "/_api/web"


def test_entry_point_requires_a_base_url():
    with pytest.raises(AddressConstructionError):
        SPRest()
    setup({"base-url": SITE})
    assert SPRest().web.url == SITE + "/_api/web"


@pytest.mark.asyncio
async def test_entry_point_binds_transport(transport):
    transport.queue({"d": {"Title": "Dev"}})
    web = SPRest(SITE, transport).web
    assert web._context is transport
    assert (await web.select("Title").get()) == {"Title": "Dev"}
    assert transport.last.url == SITE + "/_api/web?$select=Title"
