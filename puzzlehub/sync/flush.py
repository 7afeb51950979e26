"""
Queue Flush

Forwards a local queue to the remote service, oldest item first, stopping
at the first item that is not delivered.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Protocol

from ..exceptions import UpstreamUnavailable
from ..utils.game_logger import game_logger


class FlushableQueue(Protocol):
    def drain(self) -> List[Any]:
        ...

    def restore(self, items: List[Any]) -> None:
        ...


Sender = Callable[[Any], Awaitable[Optional[bool]]]


@dataclass(frozen=True)
class FlushResult:
    flushed: int = 0
    remaining: int = 0

    def __add__(self, other: 'FlushResult') -> 'FlushResult':
        return FlushResult(self.flushed + other.flushed, self.remaining + other.remaining)


async def flush(queue: FlushableQueue, sender: Sender) -> FlushResult:
    """
    Deliver every queued item through ``sender``.

    The queue is drained up front so a second flush in the same run cannot
    send the same items again. When item k is not delivered (the sender
    returns False or raises UpstreamUnavailable), items k..N are restored
    in their original order and the first k-1 count as flushed. Any other
    exception, cancellation included, restores the undelivered items and
    propagates.
    """
    items = queue.drain()
    if not items:
        return FlushResult()

    flushed = 0
    for index, item in enumerate(items):
        try:
            delivered = await sender(item)
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('flush_item_failed', success=False, error=str(e), status=e.status)
            delivered = False
        except BaseException:
            queue.restore(items[index:])
            raise

        if delivered is False:
            remaining = items[index:]
            queue.restore(remaining)
            return FlushResult(flushed=flushed, remaining=len(remaining))
        flushed += 1

    return FlushResult(flushed=flushed, remaining=0)
