"""Data models for RSS channels."""

from dataclasses import dataclass, field, fields
from datetime import datetime

from rsschannel.dates import parse_date
from rsschannel.xml_stream import XmlStreamReader

DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"

# <item> children stored as plain text, by ElementTree tag; RSS elements are
# un-namespaced, extensions carry their namespace URI
TEXT_FIELDS = {
    "guid": "guid",
    "title": "title",
    "link": "link",
    "description": "description",
    "author": "author",
    f"{{{DC_NAMESPACE}}}creator": "author",
    "comments": "comments",
}


@dataclass
class Item:
    """Represents a single entry from a feed."""

    guid: str | None = None
    title: str | None = None
    link: str | None = None
    description: str | None = None
    author: str | None = None
    comments: str | None = None
    categories: list[str] = field(default_factory=list)
    published_at: datetime | None = None
    is_read: bool = False

    @property
    def key(self) -> str | None:
        """Identity used to recognise the same entry across fetches."""
        return self.guid or self.link

    def parse(self, reader: XmlStreamReader) -> None:
        """Fill the item from the children of the reader's current <item>.

        Unknown children are skipped. On return the reader is positioned
        after </item>, or in an error state if the subtree was broken.
        """
        while reader.read_next_start_element():
            name = reader.tag
            if name == "pubDate":
                published_at = parse_date(reader.read_element_text())
                if published_at is not None:
                    self.published_at = published_at
            elif name == "category":
                self.categories.append(reader.read_element_text())
            elif name in TEXT_FIELDS:
                setattr(self, TEXT_FIELDS[name], reader.read_element_text() or None)
            else:
                reader.skip_current_element()

    def update_from(self, other: "Item") -> None:
        """Take the content of a newer copy of this entry, keeping is_read."""
        for f in fields(self):
            if f.name != "is_read":
                setattr(self, f.name, getattr(other, f.name))
