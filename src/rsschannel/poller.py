"""One-shot refresh of a channel from its feed source."""

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future

from rsschannel.channel import Channel
from rsschannel.main_queue import ProcessorRegistry
from rsschannel.transport import TransportError, fetch_feed

logger = logging.getLogger(__name__)


async def refresh_channel(
    channel: Channel,
    fetch: Callable[[str], bytes] = fetch_feed,
) -> bool:
    """Fetch the channel's feed once and parse it.

    Returns True if new source was parsed, False if a fetch was already in
    flight, the fetch failed, or the source was unchanged.
    """
    if not channel.can_fetch():
        logger.debug("Feed '%s' is already being fetched", channel.feed_link)
        return False

    channel.start_fetching()
    try:
        source = await asyncio.to_thread(fetch, channel.feed_link)
    except TransportError as e:
        logger.warning("Feed '%s' error: %s", channel.feed_link, e)
        channel.fetching_failed()
        return False
    except Exception as e:
        logger.warning("Feed '%s' unexpected error: %s", channel.feed_link, e)
        channel.fetching_failed()
        return False

    channel.fetching_succeeded(source)
    parsed = channel.parse()
    if parsed:
        logger.info("Feed '%s': %d items", channel.title or channel.feed_link, channel.count())
    return parsed


def submit_fetch(
    channel: Channel,
    registry: ProcessorRegistry,
    executor: Executor,
    fetch: Callable[[str], bytes] = fetch_feed,
) -> Future | None:
    """Start fetching the channel on an executor thread.

    The outcome is posted back through ``registry`` as a call to
    ``fetching_succeeded`` or ``fetching_failed``; parsing is left to the
    caller. Returns None, without starting anything, if the channel is
    already being fetched or no processor is registered to receive the
    result; a result nobody delivers would leave the channel fetching.
    """
    if not channel.can_fetch():
        return None
    if registry.active is None:
        logger.warning("No main queue processor, not fetching '%s'", channel.feed_link)
        return None

    url = channel.feed_link
    channel.start_fetching()

    def work() -> None:
        try:
            source = fetch(url)
        except Exception as e:
            logger.warning("Feed '%s' error: %s", url, e)
            delivered = registry.post(channel.fetching_failed)
        else:
            delivered = registry.post(channel.fetching_succeeded, source)
        if not delivered:
            logger.warning("Result for '%s' dropped, channel stays fetching", url)

    return executor.submit(work)
