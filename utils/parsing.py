from __future__ import annotations
import re
from typing import List, Tuple

# int() and float() also take surrounding whitespace, "_" digit separators
# and non-ASCII digits; coordinates and sizes only accept plain notation.
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class ParseError(ValueError):
    pass


def _split_two(text: str, separator: str, what: str) -> Tuple[str, str]:
    parts = text.split(separator)
    if len(parts) != 2:
        raise ParseError(f"invalid {what} '{text}': expected two values separated by '{separator}'")
    return parts[0], parts[1]


def _to_int(token: str) -> int:
    if not _INT_RE.fullmatch(token):
        raise ValueError(f"not an integer: {token!r}")
    return int(token)


def _to_float(token: str) -> float:
    if not _FLOAT_RE.fullmatch(token):
        raise ValueError(f"not a number: {token!r}")
    return float(token)


def parse_pair(text: str, separator: str = "x") -> Tuple[int, int]:
    """
    Parse an integer pair like "800x600".
    """
    a, b = _split_two(text, separator, "pair")
    try:
        return _to_int(a), _to_int(b)
    except ValueError as e:
        raise ParseError(f"invalid pair '{text}': both parts must be integers") from e


def parse_complex(text: str) -> complex:
    """
    Parse a complex coordinate like "-2,-1" (real part, imaginary part).
    """
    re_part, im_part = _split_two(text, ",", "complex coordinate")
    try:
        return complex(_to_float(re_part), _to_float(im_part))
    except ValueError as e:
        raise ParseError(f"invalid complex coordinate '{text}': both parts must be numbers") from e


def parse_pair_list(text: str, separator: str = "x") -> List[Tuple[int, int]]:
    """
    Parse a comma separated list of pairs like "800x600,1280x720".
    Empty tokens are skipped.
    """
    out: List[Tuple[int, int]] = []
    for token in text.split(','):
        token = token.strip().lower()
        if not token:
            continue
        out.append(parse_pair(token, separator))
    return out


def parse_int_list(text: str) -> List[int]:
    """
    Parse a comma separated list of integers like "1,2,4,8".
    """
    out: List[int] = []
    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        try:
            out.append(_to_int(token))
        except ValueError as e:
            raise ParseError(f"invalid integer '{token}' in '{text}'") from e
    return out
