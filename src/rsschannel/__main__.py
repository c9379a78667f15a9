"""Entry point for rsschannel: python -m rsschannel URL"""

import argparse
import asyncio
import logging
import os

from rsschannel.channel import Channel
from rsschannel.poller import refresh_channel

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LIMIT = 20

logging.basicConfig(
    level=os.environ.get("RSSCHANNEL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    format="%(asctime)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
# Quiet noisy loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def format_channel(channel: Channel, unread_only: bool = False, limit: int = DEFAULT_LIMIT) -> str:
    """Render the channel header and its newest items as plain text."""
    lines = [channel.title or channel.feed_link]
    if channel.description:
        lines.append(channel.description)
    lines.append(f"{channel.count()} items, {channel.count_unread()} unread")
    lines.append("")

    items = channel.all_unread_items() if unread_only else list(channel.all_items())
    for item in items[:limit]:
        published = item.published_at.strftime("%Y-%m-%d %H:%M") if item.published_at else "----------------"
        lines.append(f"{published}  {item.title or 'Untitled'}")
        if item.link:
            lines.append(f"                  {item.link}")
    return "\n".join(lines)


async def main(argv: list[str] | None = None) -> int:
    """Fetch one feed, parse it and print its items."""
    parser = argparse.ArgumentParser(prog="rsschannel", description="Fetch and list an RSS feed.")
    parser.add_argument("url", help="feed URL")
    parser.add_argument("--unread", action="store_true", help="only list unread items")
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="maximum items to list")
    args = parser.parse_args(argv)

    channel = Channel(args.url)
    await refresh_channel(channel)

    if channel.is_failed:
        print(f"Could not fetch {args.url}")
        return 1

    print(format_channel(channel, unread_only=args.unread, limit=args.limit))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
