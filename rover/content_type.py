"""Content-type sniffing from leading bytes.

Implements the signature table of the WHATWG MIME Sniffing Standard
(https://mimesniff.spec.whatwg.org/), in the same order and with the same
results as Go's ``net/http.DetectContentType``.  Only the first
``SNIFF_LEN`` bytes are ever considered.
"""

from __future__ import annotations

from typing import Protocol

SNIFF_LEN = 512

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"


class _Signature(Protocol):
    def match(self, data: bytes, first_non_ws: int) -> str | None: ...


class _ExactSig:
    def __init__(self, sig: bytes, ctype: str) -> None:
        self.sig = sig
        self.ctype = ctype

    def match(self, data: bytes, first_non_ws: int) -> str | None:  # noqa: ARG002
        return self.ctype if data.startswith(self.sig) else None


class _MaskedSig:
    def __init__(
        self,
        pat: bytes,
        mask: bytes,
        ctype: str,
        *,
        skip_ws: bool = False,
    ) -> None:
        assert len(pat) == len(mask)  # noqa: S101
        self.pat = pat
        self.mask = mask
        self.ctype = ctype
        self.skip_ws = skip_ws

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_ws:
            data = data[first_non_ws:]
        if len(data) < len(self.mask):
            return None
        for db, mb, pb in zip(data, self.mask, self.pat):
            if db & mb != pb:
                return None
        return self.ctype


class _HtmlSig:
    """Case-insensitive tag match followed by a space or ``>``."""

    ctype = "text/html; charset=utf-8"

    def __init__(self, tag: bytes) -> None:
        self.tag = tag

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for b, db in zip(self.tag, data):
            if ord("A") <= b <= ord("Z"):
                db &= 0xDF
            if b != db:
                return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return self.ctype


class _Mp4Sig:
    """ISO base media file: an ``ftyp`` box listing an ``mp4`` brand."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:  # noqa: ARG002
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for st in range(8, box_size, 4):
            if st == 12:
                # Bytes 12-15 hold the minor version, not a brand.
                continue
            if data[st : st + 3] == b"mp4":
                return "video/mp4"
        return None


class _TextSig:
    """Fallback: plain text unless a binary control byte appears."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        for b in data[first_non_ws:]:
            if b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F:
                return None
        return TEXT_PLAIN


_HTML_TAGS = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"
_BOM16_MASK = b"\xff\xff\x00\x00"

_SIGNATURES: tuple[_Signature, ...] = (
    *(_HtmlSig(tag) for tag in _HTML_TAGS),
    _MaskedSig(
        b"<?xml",
        b"\xff\xff\xff\xff\xff",
        "text/xml; charset=utf-8",
        skip_ws=True,
    ),
    _ExactSig(b"%PDF-", "application/pdf"),
    _ExactSig(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks.
    _MaskedSig(b"\xfe\xff\x00\x00", _BOM16_MASK, "text/plain; charset=utf-16be"),
    _MaskedSig(b"\xff\xfe\x00\x00", _BOM16_MASK, "text/plain; charset=utf-16le"),
    _MaskedSig(b"\xef\xbb\xbf\x00", b"\xff\xff\xff\x00", TEXT_PLAIN),
    # Images.
    _ExactSig(b"\x00\x00\x01\x00", "image/x-icon"),
    _ExactSig(b"\x00\x00\x02\x00", "image/x-icon"),
    _ExactSig(b"BM", "image/bmp"),
    _ExactSig(b"GIF87a", "image/gif"),
    _ExactSig(b"GIF89a", "image/gif"),
    _MaskedSig(b"RIFF\x00\x00\x00\x00WEBPVP", _RIFF_MASK + b"\xff\xff", "image/webp"),
    _ExactSig(b"\x89PNG\x0d\x0a\x1a\x0a", "image/png"),
    _ExactSig(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video.
    _MaskedSig(b"FORM\x00\x00\x00\x00AIFF", _RIFF_MASK, "audio/aiff"),
    _MaskedSig(b"ID3", b"\xff\xff\xff", "audio/mpeg"),
    _MaskedSig(b"OggS\x00", b"\xff\xff\xff\xff\xff", "application/ogg"),
    _MaskedSig(b"MThd\x00\x00\x00\x06", b"\xff" * 8, "audio/midi"),
    _MaskedSig(b"RIFF\x00\x00\x00\x00AVI ", _RIFF_MASK, "video/avi"),
    _MaskedSig(b"RIFF\x00\x00\x00\x00WAVE", _RIFF_MASK, "audio/wave"),
    _Mp4Sig(),
    _ExactSig(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts.
    _MaskedSig(
        b"\x00" * 34 + b"LP",
        b"\x00" * 34 + b"\xff\xff",
        "application/vnd.ms-fontobject",
    ),
    _ExactSig(b"\x00\x01\x00\x00", "font/ttf"),
    _ExactSig(b"OTTO", "font/otf"),
    _ExactSig(b"ttcf", "font/collection"),
    _ExactSig(b"wOFF", "font/woff"),
    _ExactSig(b"wOF2", "font/woff2"),
    # Archives.
    _ExactSig(b"\x1f\x8b\x08", "application/x-gzip"),
    _ExactSig(b"PK\x03\x04", "application/zip"),
    _ExactSig(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _ExactSig(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _ExactSig(b"\x00\x61\x73\x6d", "application/wasm"),
    _TextSig(),
)


def _first_non_ws(data: bytes) -> int:
    i = 0
    while i < len(data) and data[i] in _WHITESPACE:
        i += 1
    return i


def detect_content_type(data: bytes) -> str:
    """Return the MIME type sniffed from the first 512 bytes of *data*.

    Always returns a valid MIME type; ``application/octet-stream`` when
    nothing more specific matches.
    """
    head = data[:SNIFF_LEN]
    first_non_ws = _first_non_ws(head)
    for sig in _SIGNATURES:
        ctype = sig.match(head, first_non_ws)
        if ctype is not None:
            return ctype
    return OCTET_STREAM
