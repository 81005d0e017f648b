"""
Reader and writer for ``magpie.config.js``.

The framework reads its configuration from an ES module whose default export
is a plain object literal::

    export default {
      experimentId: '43',
      serverUrl: 'https://magpie-cogsciprag.fly.dev',
      ...
      stimuli: {
        main: 'stimuli/vignettes.csv'
      }
    };

Only that subset of JavaScript is supported: identifier or quoted keys,
single/double-quoted string values, nested objects, trailing commas and
``//`` / ``/* */`` comments.
"""

import re
from typing import Any, Dict, List, Tuple

from ..errors import ConfigurationError

INDENT = "  "

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<line_comment>//[^\n]*)
    |(?P<block_comment>/\*.*?\*/)
    |(?P<string>'(?:[^'\\\n]|\\(?:\r\n|.))*'|"(?:[^"\\\n]|\\(?:\r\n|.))*")
    |(?P<ident>[A-Za-z_$][A-Za-z0-9_$]*)
    |(?P<punct>[{}:,;])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_LINE_CONTINUATIONS = ("\n", "\r\n", "\r", "\u2028", "\u2029")
_ESCAPE_RE = re.compile(
    r"\\(?:u\{(?P<code_point>[0-9A-Fa-f]{1,6})\}|u(?P<unicode>[0-9A-Fa-f]{4})"
    r"|x(?P<hex>[0-9A-Fa-f]{2})|(?P<char>\r\n|.))",
    re.DOTALL,
)

Token = Tuple[str, str, int]


def _unescape(literal: str, pos: int) -> str:
    def _replace(match):
        digits = match.group("code_point") or match.group("unicode") or match.group("hex")
        if digits:
            code = int(digits, 16)
            if code > 0x10FFFF:
                raise ConfigurationError(f"code point \\u{{{digits}}} out of range at offset {pos}")
            return chr(code)
        char = match.group("char")
        if char in _LINE_CONTINUATIONS:
            return ""
        if char in ("u", "x"):
            raise ConfigurationError(f"malformed \\{char} escape in string at offset {pos}")
        if char == "0" and match.string[match.end() : match.end() + 1].isdigit():
            raise ConfigurationError(f"octal escape \\0 followed by a digit at offset {pos}")
        if char in "123456789":
            raise ConfigurationError(f"octal escape \\{char} not allowed at offset {pos}")
        return _ESCAPES.get(char, char)

    text = _ESCAPE_RE.sub(_replace, literal[1:-1])
    # \uD83D\uDE00 style pairs decode to two surrogates; join them
    try:
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"unpaired surrogate in string at offset {pos}") from e


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def _tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ConfigurationError(
                f"unexpected character {text[pos]!r} at offset {pos} in JS module"
            )
        kind = match.lastgroup
        if kind not in ("ws", "line_comment", "block_comment"):
            tokens.append((kind, match.group(), pos))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0

    def _peek(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return ("eof", "", -1)

    @staticmethod
    def _where(token: Token) -> str:
        return "end of input" if token[0] == "eof" else f"offset {token[2]}"

    def _next(self) -> Token:
        token = self._peek()
        self.index += 1
        return token

    def _expect(self, kind: str, value: str = None) -> Token:
        token = self._next()
        if token[0] != kind or (value is not None and token[1] != value):
            wanted = value or kind
            raise ConfigurationError(
                f"expected {wanted!r} but found {token[1]!r} at {self._where(token)} in JS module"
            )
        return token

    def parse_module(self) -> Dict[str, Any]:
        self._expect("ident", "export")
        self._expect("ident", "default")
        result = self.parse_object()
        if self._peek()[:2] == ("punct", ";"):
            self._next()
        if self._peek()[0] != "eof":
            token = self._peek()
            raise ConfigurationError(
                f"unexpected {token[1]!r} after default export at offset {token[2]}"
            )
        return result

    def parse_object(self) -> Dict[str, Any]:
        self._expect("punct", "{")
        result: Dict[str, Any] = {}
        while self._peek()[:2] != ("punct", "}"):
            token = self._next()
            kind, raw, pos = token
            if kind == "ident":
                key = raw
            elif kind == "string":
                key = _unescape(raw, pos)
            else:
                raise ConfigurationError(f"expected a key but found {raw!r} at {self._where(token)}")
            if key in result:
                raise ConfigurationError(f"duplicate key {key!r} at offset {pos}")
            self._expect("punct", ":")
            result[key] = self.parse_value()
            if self._peek()[:2] == ("punct", ","):
                self._next()
            elif self._peek()[:2] != ("punct", "}"):
                token = self._peek()
                raise ConfigurationError(
                    f"expected ',' or '}}' but found {token[1]!r} at {self._where(token)}"
                )
        self._expect("punct", "}")
        return result

    def parse_value(self) -> Any:
        token = self._peek()
        kind, raw, _ = token
        if kind == "string":
            self._next()
            return _unescape(raw, token[2])
        if (kind, raw) == ("punct", "{"):
            return self.parse_object()
        raise ConfigurationError(
            f"unsupported value {raw!r} at {self._where(token)}; only strings and objects are allowed"
        )


def parse_js_module(text: str) -> Dict[str, Any]:
    """Parse the default-exported object literal of a ``magpie.config.js`` module."""
    return _Parser(_tokenize(text)).parse_module()


def _render_object(data: Dict[str, Any], depth: int) -> List[str]:
    lines = []
    items = list(data.items())
    for i, (key, value) in enumerate(items):
        comma = "," if i < len(items) - 1 else ""
        pad = INDENT * depth
        if isinstance(value, dict):
            lines.append(f"{pad}{key}: {{")
            lines.extend(_render_object(value, depth + 1))
            lines.append(f"{pad}}}{comma}")
        else:
            lines.append(f"{pad}{key}: '{_escape(str(value))}'{comma}")
    return lines


def render_js_module(data: Dict[str, Any]) -> str:
    """Render a serialized configuration as a ``magpie.config.js`` module."""
    lines = ["export default {"]
    lines.extend(_render_object(data, 1))
    lines.append("};")
    return "\n".join(lines) + "\n"


__all__ = ["parse_js_module", "render_js_module"]
