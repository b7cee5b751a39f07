"""
Table change notifications.

`ChangeBroker` publishes "something changed in <table>" events, over Redis
pub/sub when a client is configured (so every worker and every other client of
the database sees them) or by in-process fan-out otherwise.

`ChangeSubscription` turns those events into refetch callbacks with a
subscribe/unsubscribe lifecycle tied to whoever holds the subscription.
Delivery is at-least-once and uncoalesced; callbacks receive no payload.
"""
import asyncio
import inspect
import json
from typing import Callable

from redis.exceptions import RedisError

from hotel_site.core.logging_config import get_logger

logger = get_logger().bind(log_type="realtime")

CHANNEL_PREFIX = "table_changes:"


def channel_name(table: str) -> str:
    return f"{CHANNEL_PREFIX}{table}"


# ---------- channels ----------
class LocalChannel:
    def __init__(self, broker: "ChangeBroker", table: str):
        self.table = table
        self.closed = False
        self._broker = broker
        self._queue: asyncio.Queue = asyncio.Queue()
        broker._listeners.setdefault(table, set()).add(self)

    def deliver(self, event: str):
        if not self.closed:
            self._queue.put_nowait(event)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.closed:
            raise StopAsyncIteration
        return await self._queue.get()

    def close(self):
        self.closed = True
        listeners = self._broker._listeners.get(self.table)
        if listeners is not None:
            listeners.discard(self)
            if not listeners:
                del self._broker._listeners[self.table]

    async def aclose(self):
        self.close()


class RedisChannel(LocalChannel):
    """Redis pub/sub subscription for one table.

    A reader task moves Redis messages onto the same queue `deliver()` feeds,
    and the channel is registered as a local listener, so a publish that fails
    to reach Redis is still delivered to subscribers in this process.
    """

    def __init__(self, broker: "ChangeBroker", client, table: str):
        super().__init__(broker, table)
        self._pubsub = client.pubsub()
        self._reader = asyncio.get_running_loop().create_task(self._read())

    async def _read(self):
        try:
            await self._pubsub.subscribe(channel_name(self.table))
            async for message in self._pubsub.listen():
                if message.get("type") != "message":
                    continue
                try:
                    event = json.loads(message["data"]).get("event", "*")
                except (TypeError, ValueError, AttributeError):
                    event = "*"
                self.deliver(event)
        except RedisError as e:
            logger.error(f"Redis subscription lost for {self.table}: {e}")

    def close(self):
        super().close()
        self._reader.cancel()

    async def aclose(self):
        self.close()
        try:
            await self._pubsub.unsubscribe()
            await self._pubsub.aclose()
        except RedisError as e:
            logger.warning(f"Redis unsubscribe failed for {self.table}: {e}")


# ---------- broker ----------
class ChangeBroker:
    def __init__(self, redis_client=None):
        self.redis = redis_client
        self._listeners: dict[str, set[LocalChannel]] = {}

    def open_channel(self, table: str):
        if self.redis is not None:
            return RedisChannel(self, self.redis, table)
        return LocalChannel(self, table)

    def listener_count(self, table: str) -> int:
        return len(self._listeners.get(table, ()))

    async def publish(self, table: str, event: str = "*"):
        logger.info(f"CHANGE: {table} {event}")

        if self.redis is not None:
            try:
                await self.redis.publish(channel_name(table), json.dumps({"table": table, "event": event}))
                return
            except RedisError as e:
                # Other processes miss this one; local subscribers still get it below
                logger.error(f"Redis publish failed for {table}, delivering in-process only: {e}")

        for channel in list(self._listeners.get(table, ())):
            channel.deliver(event)

    async def close(self):
        if self.redis is not None:
            await self.redis.aclose()


# ---------- subscriptions ----------
class _Handle:
    def __init__(self, owner: "ChangeSubscription", key, channel, task: asyncio.Task):
        self._owner = owner
        self._key = key
        self._channel = channel
        self._task = task

    def unsubscribe(self):
        if self._owner._active.get(self._key) is not self:
            return
        del self._owner._active[self._key]
        self._channel.close()
        self._task.cancel()
        logger.info(f"UNSUBSCRIBE: {self._key[0]}")


class ChangeSubscription:
    def __init__(self, broker: ChangeBroker):
        self.broker = broker
        self._active: dict[tuple, _Handle] = {}

    def subscribe(self, table: str, on_change: Callable[[], object]) -> Callable[[], None]:
        """Call `on_change()` on every insert/update/delete in `table`.

        Subscribing the same callback to the same table again returns the
        existing subscription. Must be called from a running event loop.
        """
        key = (table, on_change)
        handle = self._active.get(key)
        if handle is not None:
            return handle.unsubscribe

        channel = self.broker.open_channel(table)
        task = asyncio.get_running_loop().create_task(self._pump(table, channel, on_change))
        handle = _Handle(self, key, channel, task)
        self._active[key] = handle
        logger.info(f"SUBSCRIBE: {table}")
        return handle.unsubscribe

    async def _pump(self, table: str, channel, on_change):
        try:
            async for _event in channel:
                try:
                    result = on_change()
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.exception(f"Change callback failed for {table}: {e}")
        finally:
            await channel.aclose()

    def active_count(self, table: str | None = None) -> int:
        if table is None:
            return len(self._active)
        return sum(1 for key in self._active if key[0] == table)

    def close(self):
        for handle in list(self._active.values()):
            handle.unsubscribe()
