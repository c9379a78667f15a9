"""Pull-style XML reader for walking feed documents element by element.

The reader wraps ``xml.etree.ElementTree.XMLPullParser`` and exposes the
small cursor API the feed parser needs: step to the next child start tag,
read an element's text, or skip an element with its whole subtree. Elements
are cleared as soon as they have been consumed, so only the current path is
kept in memory.
"""

import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from xml.parsers import expat


class XmlErrorKind(enum.Enum):
    """Classification of scanner errors."""

    NOT_WELL_FORMED = "not_well_formed"
    PREMATURE_END = "premature_end"


CHUNK_SIZE = 64 * 1024

# Errors expat reports when the input stops while elements are still open
PREMATURE_END_CODES = frozenset(
    expat.errors.codes[message]
    for message in (
        expat.errors.XML_ERROR_NO_ELEMENTS,
        expat.errors.XML_ERROR_UNCLOSED_TOKEN,
        expat.errors.XML_ERROR_PARTIAL_CHAR,
        expat.errors.XML_ERROR_UNCLOSED_CDATA_SECTION,
    )
)


@dataclass(frozen=True)
class XmlError:
    """A scanner error with its location in the document."""

    kind: XmlErrorKind
    message: str
    code: int | None = None
    position: tuple[int, int] | None = None

    def __str__(self) -> str:
        return f"{self.message} ({self.kind.value})"


def split_tag(tag: str) -> tuple[str, str]:
    """Split an ElementTree tag into ``(namespace, local name)``.

    Un-namespaced tags have an empty namespace.
    """
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        return namespace, name
    return "", tag


class XmlStreamReader:
    """Cursor over the start/end events of one XML document.

    The source is handed to the scanner ``chunk_size`` bytes at a time, and
    only when the events of the previous chunk have been consumed.
    """

    def __init__(self, source: bytes, chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size = chunk_size
        self._events = self._read_events(source)
        self.error: XmlError | None = None
        self.bytes_fed = 0
        self.tag = ""
        self.namespace = ""
        self.name = ""
        self.attributes: dict[str, str] = {}

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def read_next_start_element(self) -> bool:
        """Advance to the next child start tag of the current element.

        Returns False once the current element's end tag is reached, at the
        end of the document, or when the reader is in an error state.
        """
        event = self._next_event()
        if event is None:
            return False
        kind, elem = event
        if kind == "start":
            self.tag = elem.tag
            self.namespace, self.name = split_tag(elem.tag)
            self.attributes = dict(elem.attrib)
            return True
        elem.clear()
        return False

    def read_element_text(self, separator: str = "") -> str:
        """Consume the current element and return its stripped text content.

        Text of nested child elements is included, joined with ``separator``.
        Returns an empty string if the document ends or fails before the end
        tag.
        """
        depth = 1
        while True:
            event = self._next_event()
            if event is None:
                return ""
            kind, elem = event
            if kind == "start":
                depth += 1
                continue
            depth -= 1
            if depth == 0:
                text = separator.join(elem.itertext()).strip()
                elem.clear()
                return text

    def skip_current_element(self) -> None:
        """Consume the current element including its subtree."""
        depth = 1
        while depth:
            event = self._next_event()
            if event is None:
                return
            kind, elem = event
            if kind == "start":
                depth += 1
            else:
                depth -= 1
                if depth == 0:
                    elem.clear()

    def _next_event(self) -> tuple[str, ET.Element] | None:
        if self.error is not None:
            return None
        return next(self._events, None)

    def _read_events(self, source: bytes):
        parser = ET.XMLPullParser(events=("start", "end"))
        try:
            for offset in range(0, len(source), self._chunk_size):
                chunk = source[offset:offset + self._chunk_size]
                parser.feed(chunk)
                self.bytes_fed = offset + len(chunk)
                yield from parser.read_events()
        except ET.ParseError as exc:
            self._fail(XmlErrorKind.NOT_WELL_FORMED, exc)
            return

        closing_error = None
        try:
            parser.close()
        except ET.ParseError as exc:
            closing_error = exc
        yield from parser.read_events()

        if closing_error is not None:
            if getattr(closing_error, "code", None) in PREMATURE_END_CODES:
                self._fail(XmlErrorKind.PREMATURE_END, closing_error)
            else:
                self._fail(XmlErrorKind.NOT_WELL_FORMED, closing_error)

    def _fail(self, kind: XmlErrorKind, exc: ET.ParseError) -> None:
        self.error = XmlError(
            kind=kind,
            message=str(exc),
            code=getattr(exc, "code", None),
            position=getattr(exc, "position", None),
        )
