"""
Unit tests for reading and writing magpie.config.js modules.
"""

import pytest

from magpie_config.config.js_module import parse_js_module, render_js_module
from magpie_config.errors import ConfigurationError


def test_parse_deployed_module(magpie_config_js, sample_config_dict):
    assert parse_js_module(magpie_config_js) == sample_config_dict


def test_render_matches_deployed_module(magpie_config_js, sample_config_dict):
    assert render_js_module(sample_config_dict) == magpie_config_js


def test_comments_quotes_and_trailing_commas():
    text = """
    // generated for the pilot
    export default {
      /* id from the results server */
      "experimentId": "9",
      mode: 'debug',
      stimuli: { main: 'stimuli/vignettes.csv', },
    }
    """
    assert parse_js_module(text) == {
        "experimentId": "9",
        "mode": "debug",
        "stimuli": {"main": "stimuli/vignettes.csv"},
    }


def test_url_with_slashes_is_not_a_comment():
    assert parse_js_module("export default { serverUrl: 'https://a.example//x' };") == {
        "serverUrl": "https://a.example//x"
    }


def test_escapes_round_trip():
    data = {"contactEmail": "O'Brien <lab@example.org>"}
    text = render_js_module(data)
    assert "\\'" in text
    assert parse_js_module(text) == data


@pytest.mark.parametrize(
    "literal, expected",
    [
        (r"'\u0041\x42\u{1F600}'", "AB\U0001F600"),
        (r"'\uD83D\uDE00'", "\U0001F600"),
        ("'stimuli/\\\nvignettes.csv'", "stimuli/vignettes.csv"),
        ("'a\\\r\nb'", "ab"),
        (r"'tab\there\0'", "tab\there\0"),
        (r"'\q'", "q"),
    ],
)
def test_string_escapes(literal, expected):
    assert parse_js_module(f"export default {{ contactEmail: {literal} }};") == {
        "contactEmail": expected
    }


@pytest.mark.parametrize(
    "literal, message",
    [
        (r"'\u12'", "malformed"),
        (r"'\xZZ'", "malformed"),
        (r"'\u{110000}'", "out of range"),
        (r"'\7'", "octal"),
        (r"'\01'", "octal"),
        (r"'\uD83D'", "unpaired surrogate"),
    ],
)
def test_rejects_bad_escapes(literal, message):
    with pytest.raises(ConfigurationError, match=message):
        parse_js_module(f"export default {{ contactEmail: {literal} }};")


@pytest.mark.parametrize(
    "text, message",
    [
        ("exports default {};", "expected 'export'"),
        ("export default { experimentId: 43 };", "unexpected character"),
        ("export default { mode: debug };", "unsupported value"),
        ("export default { mode: 'debug' mode: 'x' };", "expected ','"),
        ("export default { mode: 'debug', mode: 'x' };", "duplicate key"),
        ("export default { mode: 'debug'", "end of input"),
        ("export default {}; export default {};", "after default export"),
    ],
)
def test_rejects_unsupported_modules(text, message):
    with pytest.raises(ConfigurationError, match=message):
        parse_js_module(text)
