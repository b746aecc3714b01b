# qrforge

A QR Code generator written in pure Python with no dependencies outside the
standard library. It supports the QR Code Model 2 specification: all versions
(sizes) from 1 to 40, all four error correction levels, and the numeric,
alphanumeric, byte, kanji and ECI segment modes.

## Installation

From a checkout of the project:

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Quick start

```python
from qrforge.ecc import Ecc
from qrforge.qrcode import QrCode
from qrforge.demo import to_svg_string, render_text

qr = QrCode.encode_text("Hello, world!", Ecc.LOW)
print(qr.version, qr.size, qr.mask, qr.error_correction_level)
print(render_text(qr, 4))          # "##" for dark, two spaces for light, 4-module border
svg = to_svg_string(qr, 4)         # SVG document as a string, Unix newlines
```

`QrCode.get_module(x, y)` gives the color of a module: `True` for dark,
`False` for light. Coordinates outside the symbol read as light.

## Ways to create a QR Code

- **High level**: `QrCode.encode_text(text, ecl)` or
  `QrCode.encode_binary(data, ecl)`. The smallest suitable version is chosen,
  and the error correction level is raised when that needs no larger version.
  `encode_text` uses numeric mode for all-digit text, alphanumeric mode when
  every character fits that set, and UTF-8 bytes otherwise.
- **Mid level**: build a list of segments and call
  `QrCode.encode_segments(segs, ecl, min_version, max_version, mask, boost_ecl)`.
  The defaults are versions 1 to 40, mask -1 and `boost_ecl=True`. Mixing
  segment modes can make a symbol smaller:

  ```python
  from qrforge.segment import QrSegment

  segs = [
      QrSegment.make_alphanumeric("THE SQUARE ROOT OF 2 IS 1."),
      QrSegment.make_numeric("41421356237309504880168872420969807856967187537694807317667973799"),
  ]
  qr = QrCode.encode_segments(segs, Ecc.LOW)
  ```

  A mask from 0 to 7 forces that pattern; -1 picks the one with the lowest
  penalty score.
- **Low level**: supply the data codewords yourself (segment headers and
  padding included, error correction excluded) and call
  `QrCode(version, ecl, data_codewords, mask)`.

## Segments

`qrforge.segment.QrSegment` is an immutable record of a `Mode`, a character
count and a tuple of data bits. It offers `make_bytes`, `make_numeric`,
`make_alphanumeric`, `make_eci` and `make_segments`, plus `is_numeric` and
`is_alphanumeric` to test whether a string fits those modes, and
`get_total_bits(segs, version)`, which returns `None` when a segment has too
many characters for its count field at that version.

A segment can also be built directly from a `Mode`, a character count and the
data bits, for example a `qrforge.bitbuffer.BitBuffer` filled with
`append_bits(val, length)`.

## Error correction helpers

`qrforge.ecc` holds the `Ecc` enumeration, the capacity functions
`num_raw_data_modules` and `num_data_codewords`, and the Reed-Solomon helpers
`reed_solomon_multiply`, `reed_solomon_compute_divisor` and
`reed_solomon_compute_remainder` over GF(2^8/0x11D).

## Errors

Invalid arguments raise `ValueError`. When the data does not fit in any
version of the allowed range, `qrforge.qrcode.DataTooLongError` (a subclass of
`ValueError`) is raised. Try a lower error correction level, a higher maximum
version, more compact segments or shorter data.

## Demo

The package ships a demo that prints a selection of QR Codes to the console
as text art, and one SVG document:

```
qrforge-demo
```

## What it does not do

qrforge only generates symbols. It does not read or decode QR Codes, and it
renders only to SVG text and console text art, not to raster image files.
`make_segments` picks a single mode for the whole text; it does not split text
into mixed-mode segments or produce kanji segments on its own.