"""A very small PDF tokenizer used by the inspection reader."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .primitives import PDFName

_WHITESPACE = b"\x00\t\n\r\f \v"
_DELIMITERS = b"()<>[]{}/%"
_NUMBER_RE = re.compile(rb"^[+-]?(\d+\.?\d*|\.\d+)$")
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f"}


@dataclass
class PDFString:
    """Literal string; ``value`` holds the raw bytes as latin-1 characters."""

    value: str

    def raw(self) -> bytes:
        return self.value.encode("latin-1")

    def decode(self, encoding: str = "cp1252") -> str:
        return self.raw().decode(encoding, errors="replace")


@dataclass
class PDFHexString:
    value: bytes


Token = Union[str, float, int, PDFName, PDFString, PDFHexString]


class TokenStream:
    """List of tokens with peek support."""

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._index = 0

    def peek(self) -> Optional[Token]:
        if self._index >= len(self._tokens):
            return None
        return self._tokens[self._index]

    def peek_n(self, offset: int) -> Optional[Token]:
        index = self._index + offset
        if index < 0 or index >= len(self._tokens):
            return None
        return self._tokens[index]

    def pop(self) -> Token:
        if self._index >= len(self._tokens):
            raise ValueError("Unexpected end of token stream")
        value = self._tokens[self._index]
        self._index += 1
        return value

    def at_end(self) -> bool:
        return self._index >= len(self._tokens)


def _parse_name(data: bytes, index: int) -> Tuple[PDFName, int]:
    start = index + 1
    index = start
    while index < len(data):
        byte = data[index : index + 1]
        if byte in _WHITESPACE or byte in _DELIMITERS:
            break
        index += 1
    return PDFName(data[start:index].decode("latin-1")), index


def _parse_number_or_keyword(data: bytes, index: int) -> Tuple[Token, int]:
    start = index
    while index < len(data):
        byte = data[index : index + 1]
        if byte in _WHITESPACE or byte in _DELIMITERS:
            break
        index += 1
    token = data[start:index]
    if _NUMBER_RE.match(token):
        if b"." in token:
            return float(token), index
        return int(token), index
    return token.decode("latin-1"), index


def _parse_literal_string(data: bytes, index: int) -> Tuple[PDFString, int]:
    index += 1  # skip opening '('
    depth = 1
    result: List[str] = []
    while index < len(data) and depth > 0:
        char = data[index : index + 1].decode("latin-1")
        if char == "\\":
            index += 1
            if index >= len(data):
                break
            char = data[index : index + 1].decode("latin-1")
            if char in "01234567":
                digits = char
                while len(digits) < 3 and data[index + 1 : index + 2].decode("latin-1") in tuple("01234567"):
                    index += 1
                    digits += data[index : index + 1].decode("latin-1")
                result.append(chr(int(digits, 8) & 0xFF))
            else:
                result.append(_ESCAPES.get(char, char))
        elif char == "(":
            depth += 1
            result.append(char)
        elif char == ")":
            depth -= 1
            if depth > 0:
                result.append(char)
        else:
            result.append(char)
        index += 1
    if depth > 0:
        raise ValueError("Unterminated literal string")
    return PDFString("".join(result)), index


def _parse_hex_string(data: bytes, index: int) -> Tuple[PDFHexString, int]:
    end = data.index(b">", index + 1)
    hex_data = bytes(byte for byte in data[index + 1 : end] if byte not in _WHITESPACE)
    if len(hex_data) % 2:
        hex_data += b"0"
    return PDFHexString(bytes.fromhex(hex_data.decode("ascii"))), end + 1


def tokenize(data: bytes) -> List[Token]:
    tokens: List[Token] = []
    index = 0
    length = len(data)
    while index < length:
        byte = data[index : index + 1]
        if byte in _WHITESPACE:
            index += 1
            continue
        if byte == b"%":
            while index < length and data[index : index + 1] not in (b"\n", b"\r"):
                index += 1
            continue
        if byte == b"/":
            name, index = _parse_name(data, index)
            tokens.append(name)
            continue
        if byte == b"(":
            string, index = _parse_literal_string(data, index)
            tokens.append(string)
            continue
        if byte == b"<":
            if data[index + 1 : index + 2] == b"<":
                tokens.append("<<")
                index += 2
                continue
            hex_string, index = _parse_hex_string(data, index)
            tokens.append(hex_string)
            continue
        if byte == b">":
            if data[index + 1 : index + 2] == b">":
                tokens.append(">>")
                index += 2
            else:
                index += 1
            continue
        if byte in (b"[", b"]", b"{", b"}"):
            tokens.append(byte.decode("ascii"))
            index += 1
            continue
        token, index = _parse_number_or_keyword(data, index)
        tokens.append(token)
    return tokens


__all__ = ["PDFHexString", "PDFString", "Token", "TokenStream", "tokenize"]
