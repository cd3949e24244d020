from pathlib import Path
from typing import Iterator, List, Union
import codecs
import logging
import os
import tempfile

from dotenv import load_dotenv

from ..errors import ConfigError, ParseError
from ..models.color import Color
from ..models.pixel_grid import PixelGrid

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

FORMAT_TAG = "P3"
MAX_CHANNEL_VALUE = 255
DEFAULT_TRIPLE_SEPARATOR = " "


def _separator_from_env() -> str:
    raw = os.getenv("PPM_TRIPLE_SEPARATOR", DEFAULT_TRIPLE_SEPARATOR)
    # .env files can't hold a literal tab comfortably, so accept "\t"
    try:
        return codecs.decode(raw, "unicode_escape")
    except UnicodeDecodeError as err:
        raise ConfigError(f"Bad escape in PPM_TRIPLE_SEPARATOR {raw!r}: {err.reason}") from None


class _TokenStream:
    """Whitespace tokens of a PPM document, consumed front to back."""

    def __init__(self, text: str):
        self._tokens = text.split()
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def next(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            raise ParseError(f"Unexpected end of input: expected {what} (token {self._pos + 1})")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def next_int(self, what: str) -> int:
        token = self.next(what)
        try:
            return int(token)
        except ValueError:
            raise ParseError(f"Expected an integer for {what} (token {self._pos}), got {token!r}") from None


class PpmRepository:
    """
    Handles the P3 text format and file I/O for PixelGrid entities.
    """

    def __init__(self, separator: Union[str, None] = None):
        self.separator = _separator_from_env() if separator is None else separator
        if not self.separator or not self.separator.isspace():
            raise ConfigError(f"Triple separator must be non-empty whitespace, got {self.separator!r}")

    # ---------- codec ----------
    @staticmethod
    def parse(text: str) -> PixelGrid:
        """
        Parse P3 text into a new PixelGrid.

        Layout: tag, width, height, maxval, then width*height (r, g, b)
        triples in row-major order. maxval is read but ignored; the output
        is always 8-bit.

        Raises:
            ParseError: wrong tag, non-integer or missing token, too few
                channel values, a non-positive width/height or a channel
                value too large to store.
        """
        tokens = _TokenStream(text)

        tag = tokens.next("format tag")
        if tag != FORMAT_TAG:
            raise ParseError(f"Unsupported format tag {tag!r}, expected {FORMAT_TAG!r}")

        width = tokens.next_int("width")
        height = tokens.next_int("height")
        if width <= 0 or height <= 0:
            raise ParseError(f"Image dimensions must be positive, got {width}x{height}")
        tokens.next_int("maximum channel value")

        needed = 3 * width * height
        if tokens.remaining < needed:
            raise ParseError(
                f"Unexpected end of input: {width}x{height} image needs {needed} channel values, "
                f"found {tokens.remaining}"
            )

        grid = PixelGrid.create(width, height)
        for y in range(height):
            for x in range(width):
                where = f"pixel ({x}, {y})"
                red = tokens.next_int(f"red of {where}")
                green = tokens.next_int(f"green of {where}")
                blue = tokens.next_int(f"blue of {where}")
                try:
                    grid.set(x, y, Color(red, green, blue))
                except OverflowError:
                    raise ParseError(f"Channel value out of range at {where}: {(red, green, blue)}") from None
        return grid

    def iter_lines(self, grid: PixelGrid) -> Iterator[str]:
        """Yield the serialized document line by line, each ending in a newline."""
        yield f"{FORMAT_TAG}\n"
        yield f"{grid.width} {grid.height}\n"
        yield f"{MAX_CHANNEL_VALUE}\n"
        for row in grid.rows():
            triples: List[str] = [f"{c.red} {c.green} {c.blue}" for c in row]
            yield self.separator.join(triples) + "\n"

    def serialize(self, grid: PixelGrid) -> str:
        return "".join(self.iter_lines(grid))

    # ---------- file I/O ----------
    def load(self, path: Union[str, Path]) -> PixelGrid:
        path = Path(path)
        text = path.read_text(encoding="utf-8")  # FileNotFoundError propagates
        grid = self.parse(text)
        logger.info(f"Loaded {path}: {grid.width}x{grid.height}")
        return grid

    def save(self, grid: PixelGrid, path: Union[str, Path]) -> None:
        """
        Write to a temporary file next to *path*, then rename it into place.
        On failure the temporary file is removed and *path* is left as it was.
        """
        path = Path(path)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                for line in self.iter_lines(grid):
                    fh.write(line)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        logger.info(f"Wrote {path}: {grid.width}x{grid.height}")
