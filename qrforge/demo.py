"""Demonstration QR Codes printed to the console, plus SVG and text rendering."""

from __future__ import annotations

import sys
from typing import Sequence

from qrforge.bitbuffer import BitBuffer
from qrforge.ecc import MAX_VERSION, MIN_VERSION, Ecc
from qrforge.qrcode import QrCode
from qrforge.segment import Mode, QrSegment


def to_svg_string(qr: QrCode, border: int) -> str:
    """Return SVG markup depicting the QR Code with ``border`` light modules around it.

    The text always uses Unix newlines.
    """
    if border < 0:
        raise ValueError("Border must be non-negative")
    dim = qr.size + border * 2
    parts = []
    for y in range(qr.size):
        for x in range(qr.size):
            if qr.get_module(x, y):
                sep = " " if (x != 0 or y != 0) else ""
                parts.append(f"{sep}M{x + border},{y + border}h1v1h-1z")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
        '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="0 0 {dim} {dim}" stroke="none">\n'
        '\t<rect width="100%" height="100%" fill="#FFFFFF"/>\n'
        f'\t<path d="{"".join(parts)}" fill="#000000"/>\n'
        "</svg>\n"
    )


def render_text(qr: QrCode, border: int = 4) -> str:
    """Return the QR Code drawn with ``##`` for dark and two spaces for light modules."""
    if border < 0:
        raise ValueError("Border must be non-negative")
    span = range(-border, qr.size + border)
    rows = ("".join("##" if qr.get_module(x, y) else "  " for x in span) for y in span)
    return "\n".join(rows) + "\n"


def print_qr(qr: QrCode) -> None:
    """Print the QR Code to standard output with a border of four modules."""
    print(render_text(qr, 4))


def _do_basic_demo() -> None:
    qr = QrCode.encode_text("Hello, world!", Ecc.LOW)
    print_qr(qr)
    print(to_svg_string(qr, 4))


def _do_variety_demo() -> None:
    print_qr(QrCode.encode_text(
        "314159265358979323846264338327950288419716939937510", Ecc.MEDIUM))
    print_qr(QrCode.encode_text(
        "DOLLAR-AMOUNT:$39.87 PERCENTAGE:100.00% OPERATIONS:+-*/", Ecc.HIGH))
    unicode_text = (
        b"\xE3\x81\x93\xE3\x82\x93\xE3\x81\xAB\xE3\x81\xA1wa\xE3\x80\x81"
        b"\xE4\xB8\x96\xE7\x95\x8C\xEF\xBC\x81\x20\xCE\xB1\xCE\xB2\xCE\xB3\xCE\xB4"
    ).decode("utf-8")
    print_qr(QrCode.encode_text(unicode_text, Ecc.QUARTILE))
    print_qr(QrCode.encode_text(
        "Alice was beginning to get very tired of sitting by her sister on the bank, "
        "and of having nothing to do: once or twice she had peeped into the book her sister was reading, "
        "but it had no pictures or conversations in it, 'and what is the use of a book,' thought Alice "
        "'without pictures or conversations?' So she was considering in her own mind (as well as she could, "
        "for the hot day made her feel very sleepy and stupid), whether the pleasure of making a "
        "daisy-chain would be worth the trouble of getting up and picking the daisies, when suddenly "
        "a White Rabbit with pink eyes ran close by her.", Ecc.HIGH))


def _do_segment_demo() -> None:
    silver0 = "THE SQUARE ROOT OF 2 IS 1."
    silver1 = "41421356237309504880168872420969807856967187537694807317667973799"
    print_qr(QrCode.encode_text(silver0 + silver1, Ecc.LOW))
    print_qr(QrCode.encode_segments(
        [QrSegment.make_alphanumeric(silver0), QrSegment.make_numeric(silver1)], Ecc.LOW))

    golden0 = b"Golden ratio \xCF\x86 = 1.".decode("utf-8")
    golden1 = ("6180339887498948482045868343656381177203091798057628621354486227052604628189"
               "024497072072041893911374")
    golden2 = "......"
    print_qr(QrCode.encode_text(golden0 + golden1 + golden2, Ecc.LOW))
    print_qr(QrCode.encode_segments(
        [QrSegment.make_bytes(golden0.encode("utf-8")),
         QrSegment.make_numeric(golden1),
         QrSegment.make_alphanumeric(golden2)], Ecc.LOW))

    madoka = (
        b"\xE3\x80\x8C\xE9\xAD\x94\xE6\xB3\x95\xE5"
        b"\xB0\x91\xE5\xA5\xB3\xE3\x81\xBE\xE3\x81"
        b"\xA9\xE3\x81\x8B\xE2\x98\x86\xE3\x83\x9E"
        b"\xE3\x82\xAE\xE3\x82\xAB\xE3\x80\x8D\xE3"
        b"\x81\xA3\xE3\x81\xA6\xE3\x80\x81\xE3\x80"
        b"\x80\xD0\x98\xD0\x90\xD0\x98\xE3\x80\x80"
        b"\xEF\xBD\x84\xEF\xBD\x85\xEF\xBD\x93\xEF"
        b"\xBD\x95\xE3\x80\x80\xCE\xBA\xCE\xB1\xEF"
        b"\xBC\x9F"
    ).decode("utf-8")
    print_qr(QrCode.encode_text(madoka, Ecc.LOW))

    kanji_chars = (
        0x0035, 0x1002, 0x0FC0, 0x0AED, 0x0AD7,
        0x015C, 0x0147, 0x0129, 0x0059, 0x01BD,
        0x018D, 0x018A, 0x0036, 0x0141, 0x0144,
        0x0001, 0x0000, 0x0249, 0x0240, 0x0249,
        0x0000, 0x0104, 0x0105, 0x0113, 0x0115,
        0x0000, 0x0208, 0x01FF, 0x0008,
    )
    bb = BitBuffer()
    for c in kanji_chars:
        bb.append_bits(c, 13)
    print_qr(QrCode.encode_segments([QrSegment(Mode.KANJI, len(kanji_chars), bb)], Ecc.LOW))


def _do_mask_demo() -> None:
    segs0 = QrSegment.make_segments("https://www.nayuki.io/")
    for mask in (-1, 3):
        print_qr(QrCode.encode_segments(segs0, Ecc.HIGH, MIN_VERSION, MAX_VERSION, mask, True))

    chinese = (
        b"\xE7\xB6\xAD\xE5\x9F\xBA\xE7\x99\xBE\xE7\xA7\x91\xEF\xBC\x88\x57\x69\x6B\x69\x70"
        b"\x65\x64\x69\x61\xEF\xBC\x8C\xE8\x81\x86\xE8\x81\xBD\x69\x2F\xCB\x8C\x77\xC9\xAA"
        b"\x6B\xE1\xB5\xBB\xCB\x88\x70\x69\xCB\x90\x64\x69\x2E\xC9\x99\x2F\xEF\xBC\x89\xE6"
        b"\x98\xAF\xE4\xB8\x80\xE5\x80\x8B\xE8\x87\xAA\xE7\x94\xB1\xE5\x85\xA7\xE5\xAE\xB9"
        b"\xE3\x80\x81\xE5\x85\xAC\xE9\x96\x8B\xE7\xB7\xA8\xE8\xBC\xAF\xE4\xB8\x94\xE5\xA4"
        b"\x9A\xE8\xAA\x9E\xE8\xA8\x80\xE7\x9A\x84\xE7\xB6\xB2\xE8\xB7\xAF\xE7\x99\xBE\xE7"
        b"\xA7\x91\xE5\x85\xA8\xE6\x9B\xB8\xE5\x8D\x94\xE4\xBD\x9C\xE8\xA8\x88\xE7\x95\xAB"
    ).decode("utf-8")
    segs1 = QrSegment.make_segments(chinese)
    for mask in (0, 1, 5, 7):
        print_qr(QrCode.encode_segments(segs1, Ecc.MEDIUM, MIN_VERSION, MAX_VERSION, mask, True))


def main(argv: Sequence[str] | None = None) -> int:
    """Print a series of demonstration QR Codes and one sample SVG document."""
    _do_basic_demo()
    _do_variety_demo()
    _do_segment_demo()
    _do_mask_demo()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))