"""Shared test fixtures for rsschannel tests."""

import pytest

from rsschannel.channel import Channel

FEED_URL = "https://example.com/feed.xml"


SAMPLE_RSS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>A test RSS feed</description>
    <language>en-us</language>
    <copyright>Copyright 2026 Example</copyright>
    <managingEditor>editor@example.com (Editor)</managingEditor>
    <webmaster>webmaster@example.com</webmaster>
    <pubDate>Thu, 12 Feb 2026 08:00:00 GMT</pubDate>
    <lastBuildDate>Thu, 12 Feb 2026 11:00:00 GMT</lastBuildDate>
    <category>News</category>
    <category>Tech</category>
    <skipHours><hour>1</hour><hour>2</hour></skipHours>
    <skipDays>
      <day>Saturday</day>
      <day>Sunday</day>
    </skipDays>
    <image>
      <url>https://example.com/logo.png</url>
      <title>Logo</title>
      <link>https://example.com</link>
    </image>
    <item>
      <title>Second Article</title>
      <link>https://example.com/article-2</link>
      <guid>article-2</guid>
      <description>Description of the second article</description>
      <pubDate>Thu, 12 Feb 2026 09:00:00 GMT</pubDate>
    </item>
    <item>
      <title>First Article</title>
      <link>https://example.com/article-1</link>
      <guid>article-1</guid>
      <description>Description of the first article</description>
      <dc:creator>Jane Doe</dc:creator>
      <category>Science</category>
      <pubDate>Thu, 12 Feb 2026 10:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>"""

SAMPLE_TWO_ITEMS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Two Items</title>
    <item>
      <title>Morning</title>
      <guid>morning</guid>
      <pubDate>Wed, 02 Oct 2024 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Noon</title>
      <guid>noon</guid>
      <pubDate>Wed, 02 Oct 2024 12:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>"""

SAMPLE_TRUNCATED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Truncated Feed</title>
    <link>https://example.com</link>
    <item>
      <title>Good Item</title>
      <guid>good-item</guid>
      <pubDate>Wed, 02 Oct 2024 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Bad Item</title>
      <!-- Missing closing tags intentionally -->
"""

SAMPLE_MALFORMED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Malformed Feed</title>
    <item>
      <title>Kept Item</title>
      <guid>kept</guid>
    </item>
    <item>
      <title>Broken Item</guid>
    </item>
    <item>
      <title>Unreached Item</title>
      <guid>unreached</guid>
    </item>
  </channel>
</rss>"""

SAMPLE_NOT_A_FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<html>
  <body>This is not a feed</body>
</html>"""


@pytest.fixture
def channel():
    """An empty channel for the test feed URL."""
    return Channel(FEED_URL)


@pytest.fixture
def sample_rss_xml():
    """Sample valid RSS 2.0 XML."""
    return SAMPLE_RSS_XML


@pytest.fixture
def sample_two_items_xml():
    """RSS with two items in ascending publish order."""
    return SAMPLE_TWO_ITEMS_XML


@pytest.fixture
def sample_truncated_xml():
    """RSS cut off in the middle of its last item."""
    return SAMPLE_TRUNCATED_XML


@pytest.fixture
def sample_malformed_xml():
    """RSS with a mismatched closing tag inside its second item."""
    return SAMPLE_MALFORMED_XML


@pytest.fixture
def sample_not_a_feed_xml():
    """Sample XML that is not a feed."""
    return SAMPLE_NOT_A_FEED_XML


def ingest(channel: Channel, source: bytes) -> bool:
    """Run one full fetch cycle on the channel and parse the result."""
    channel.start_fetching()
    channel.fetching_succeeded(source)
    return channel.parse()
