"""RSS document parsing into a Channel.

The document is walked with a pull reader, one nesting level per function:
``<rss>`` holds ``<channel>``, which holds the channel metadata, the
``<image>`` block and the ``<item>`` entries. RSS elements are matched on
their un-namespaced tag only, so extension elements sharing a local name
(``atom:link``, ``media:title``) are not mistaken for them. Elements that
are not recognised at a given level are skipped together with their
subtrees.
"""

import logging
from typing import TYPE_CHECKING

from rsschannel.dates import parse_date
from rsschannel.models import Item
from rsschannel.xml_stream import XmlError, XmlErrorKind, XmlStreamReader

if TYPE_CHECKING:
    from rsschannel.channel import Channel

logger = logging.getLogger(__name__)

# <channel> children stored as plain text, by element name
TEXT_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "language": "language",
    "copyright": "copyright",
    "managingEditor": "editor_email",
    "webmaster": "webmaster_email",
    "webMaster": "webmaster_email",
}

# <channel> children holding <hour>/<day> lists, kept as opaque strings
SCHEDULE_FIELDS = {
    "skipHours": "skip_hours",
    "skipDays": "skip_days",
}

DATE_FIELDS = {
    "pubDate": "publish_date",
    "lastBuildDate": "last_build_date",
}


def parse_document(channel: "Channel", source: bytes) -> XmlError | None:
    """Parse an RSS document into the channel.

    Items are merged into the channel as they are read. Scanner errors are
    logged and end the walk; whatever was read before them is kept. A
    document that simply stops early is not reported.

    Returns:
        The reader error that ended the walk, or None.
    """
    reader = XmlStreamReader(source)

    while reader.read_next_start_element():
        if reader.tag == "rss":
            _parse_rss(channel, reader)
        else:
            reader.skip_current_element()

    if reader.error and reader.error.kind is not XmlErrorKind.PREMATURE_END:
        logger.warning(
            "Unable to parse RSS feed from %s. %s", channel.feed_link, reader.error
        )
    return reader.error


def _parse_rss(channel: "Channel", reader: XmlStreamReader) -> None:
    while reader.read_next_start_element():
        if reader.tag == "channel":
            _parse_channel(channel, reader)
        else:
            reader.skip_current_element()


def _parse_channel(channel: "Channel", reader: XmlStreamReader) -> None:
    while reader.read_next_start_element():
        name = reader.tag
        if name == "item":
            _parse_item(channel, reader)
        elif name in TEXT_FIELDS:
            setattr(channel, TEXT_FIELDS[name], reader.read_element_text())
        elif name in DATE_FIELDS:
            # Absent or malformed dates keep the previous value
            parsed = parse_date(reader.read_element_text())
            if parsed is not None:
                setattr(channel, DATE_FIELDS[name], parsed)
        elif name in SCHEDULE_FIELDS:
            text = reader.read_element_text(separator=" ")
            setattr(channel, SCHEDULE_FIELDS[name], " ".join(text.split()))
        elif name == "category":
            channel.categories.append(reader.read_element_text())
        elif name == "image":
            _parse_channel_image(channel, reader)
        else:
            reader.skip_current_element()


def _parse_channel_image(channel: "Channel", reader: XmlStreamReader) -> None:
    while reader.read_next_start_element():
        if reader.tag == "url":
            channel.image = reader.read_element_text() or None
        else:
            reader.skip_current_element()


def _parse_item(channel: "Channel", reader: XmlStreamReader) -> None:
    item = Item()
    item.parse(reader)

    if reader.has_error:
        logger.warning(
            "Unable to parse RSS feed item from %s. %s", channel.feed_link, reader.error
        )
        return

    channel.merge(item)
