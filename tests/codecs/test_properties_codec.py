import pytest

from config_editor.codecs import PropertiesCodec, SerializationTypeMismatch, parse_config, stringify_config
from tests.conftest import SAMPLE_PROPERTIES


def test_basic_parsing() -> None:
    """Test key/value extraction and type inference"""
    parsed = parse_config(SAMPLE_PROPERTIES, "properties")
    assert parsed is not None
    assert parsed.values == {
        "server-port": 25565,
        "motd": "A Minecraft Server",
        "online-mode": True,
        "view-distance": 10,
        "level-name": "world",
    }
    assert isinstance(parsed.values["server-port"], float)


def test_no_inline_comment_stripping() -> None:
    """Test that '#' after a value is part of the value"""
    parsed = parse_config("key=value # not a comment", "properties")
    assert parsed.values["key"] == "value # not a comment"


def test_earliest_separator_wins() -> None:
    parsed = parse_config("url:http://host=1\nname=a:b", "properties")
    assert parsed.values == {"url": "http://host=1", "name": "a:b"}


def test_lines_without_separator_are_skipped() -> None:
    parsed = parse_config("just some words\n\nkey = 1", "properties")
    assert parsed.values == {"key": 1}


def test_type_inference_boundary() -> None:
    parsed = parse_config("a=true\nb=false\nc=TRUE\nd=1e3\ne=1e400\nf=0x10\ng=\nh=-2.5", "properties")
    assert parsed.values == {
        "a": True,
        "b": False,
        "c": "TRUE",
        "d": 1000,
        "e": "1e400",
        "f": "0x10",
        "g": "",
        "h": -2.5,
    }


def test_duplicate_keys_last_write_wins() -> None:
    parsed = parse_config("key=first\nother=1\nkey=second", "properties")
    assert parsed.values == {"key": "second", "other": 1}
    assert list(parsed.values) == ["key", "other"]


def test_comments_not_exposed_by_default() -> None:
    """Test that properties comments never reach the comment map"""
    parsed = parse_config("# Port of the server\nport=1\n! bang comment\nname=x", "properties")
    assert parsed.comments == {}


def test_comment_capture_option() -> None:
    """Test comment attachment rules when capture is enabled"""
    codec = PropertiesCodec(capture_comments=True)
    parsed = codec.parse("# Port\n# of the server\nport=1\n\n! detached\n\nname=x\n!bang\nmode=a")
    assert parsed.comments == {"port": "Port of the server", "mode": "bang"}


def test_stringify() -> None:
    text = stringify_config({"port": 25565.0, "ratio": 0.5, "online": False, "motd": "hi there", "empty": None},
                            "properties")
    assert text == "port=25565\nratio=0.5\nonline=false\nmotd=hi there\nempty="


def test_stringify_drops_comments() -> None:
    codec = PropertiesCodec(capture_comments=True)
    parsed = codec.parse("# Port\nport=1")
    assert parsed.comments == {"port": "Port"}
    assert codec.parse(codec.stringify(parsed.values)).comments == {}


def test_nested_values_are_rejected() -> None:
    with pytest.raises(SerializationTypeMismatch):
        stringify_config({"list": [1, 2]}, "properties")
    with pytest.raises(SerializationTypeMismatch):
        stringify_config({"section": {"a": 1}}, "properties")
