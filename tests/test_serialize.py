import pytest
from sprest.sprest_serialize import serialize, deserialize, detect_format

def test_json_body_is_sniffed():
    value = {"__metadata": {"type": "SP.Folder"}, "Name": "Reports", "ItemCount": 3}
    s = serialize(value, fmt="json")
    out = deserialize(s)  # JSON is sniffed from leading "{"
    assert out == value

def test_json_keeps_non_ascii():
    assert serialize({"Title": "Überblick"}) == '{"Title": "Überblick"}'

def test_xml_with_fmt():
    # Use string values to avoid XML numeric typing ambiguity
    value = {"entry": {"title": "Reports", "id": "1"}}
    s = serialize(value, fmt="xml")
    out = deserialize(s, fmt="xml")
    assert out == value

def test_atom_feed_via_content_type():
    feed = '<feed><entry><title>a</title></entry><entry><title>b</title></entry></feed>'
    out = deserialize(feed, content_type="application/atom+xml")
    assert [e["title"] for e in out["feed"]["entry"]] == ["a", "b"]

@pytest.mark.parametrize(
    "ct,expected",
    [
        ("application/json", "json"),
        ("application/json;odata=verbose;charset=utf-8", "json"),
        ("application/xml", "xml"),
        ("application/atom+xml", "xml"),
        ("text/plain", None),
    ],
)
def test_detect_format_from_content_type(ct, expected):
    assert detect_format(ct) == expected

def test_deserialize_bytes_with_charset():
    data = '{"Title": "é"}'.encode("latin-1")
    out = deserialize(data, content_type="application/json; charset=latin-1")
    assert out == {"Title": "é"}

def test_deserialize_unknown_returns_text():
    txt = "plain text"
    out = deserialize(txt, content_type="text/plain")
    assert out == "plain text"

def test_empty_body_is_none():
    assert deserialize(b"", content_type="application/json") is None
    assert deserialize("  \n") is None

def test_strict_rejects_malformed_bodies():
    assert deserialize('{"d": ', content_type="application/json") == '{"d": '
    with pytest.raises(ValueError):
        deserialize('{"d": ', content_type="application/json", strict=True)
    with pytest.raises(ValueError):
        deserialize("<feed><entry>", content_type="application/xml", strict=True)

def test_unsupported_format():
    with pytest.raises(ValueError):
        serialize({"a": 1}, fmt="yaml")
