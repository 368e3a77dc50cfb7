import asyncio
import logging
import threading
from typing import Any, Self

from dbus_next import Message
from dbus_next.aio.message_bus import MessageBus
from dbus_next.constants import BusType, ErrorType, MessageType
from dbus_next.errors import DBusError

from unitctl.dbus.constants import ConnectionConfig


class DBusConnectionManager:
    """Owns the connection to one message bus and performs method calls on it.

    One instance is shared per bus type (see `get_instance`). The bus is
    connected lazily on first use; concurrent first uses wait on a lock so
    only one of them creates the connection.
    """

    _instances: dict[BusType, 'DBusConnectionManager'] = {}
    _instances_lock = threading.Lock()

    def __init__(
        self,
        bus_type: BusType = BusType.SYSTEM,
        call_timeout: float = ConnectionConfig.DEFAULT_CALL_TIMEOUT,
        max_retries: int = ConnectionConfig.DEFAULT_MAX_RETRIES,
        initial_backoff: float = ConnectionConfig.DEFAULT_INITIAL_BACKOFF,
    ):
        """
        Initializes the DBusConnectionManager.

        Args:
            bus_type: The D-Bus bus type to connect to.
            call_timeout: Seconds to wait for the reply to a method call.
            max_retries: The maximum number of connection attempts.
            initial_backoff: The initial backoff delay in seconds for retries.
        """
        self._logger = logging.getLogger(__name__)

        self._bus_type = bus_type
        self._bus: MessageBus | None = None
        self._call_timeout = call_timeout
        self._max_retries = max_retries
        self._initial_backoff = initial_backoff
        self._connection_lock = asyncio.Lock()

    @property
    def bus_type(self) -> BusType:
        return self._bus_type

    @property
    def call_timeout(self) -> float:
        return self._call_timeout

    async def connect(self) -> None:
        """Connects to the D-Bus with an exponential backoff retry mechanism.
        """
        async with self._connection_lock:
            if self.is_connected():
                self._logger.debug('Already connected to D-Bus.')
                return

            await self._attempt_connection_with_retry()

    def is_connected(self) -> bool:
        """Check if already connected to D-Bus.
        """
        return self._bus is not None and self._bus.connected

    async def _attempt_connection_with_retry(self) -> None:
        """Attempt connection with exponential backoff retry logic.
        """
        retries = 0
        backoff = self._initial_backoff

        while retries < self._max_retries:
            if await self._try_single_connection_attempt(retries + 1):
                return

            retries += 1
            if retries < self._max_retries:
                await self._handle_connection_failure(backoff)
                backoff *= ConnectionConfig.BACKOFF_MULTIPLIER

        self._raise_connection_failure()

    async def _try_single_connection_attempt(
        self,
        attempt_number: int,
    ) -> bool:
        """Try a single connection attempt.

        Args:
            attempt_number: The current attempt number for logging.

        Returns:
            True if connection was successful, False otherwise.
        """
        try:
            self._logger.info(
                'Connecting to the %s bus (attempt %d/%d)...',
                self._bus_type.name.lower(),
                attempt_number,
                self._max_retries,
            )
            # Hello must be answered within the call timeout too
            self._bus = await asyncio.wait_for(
                MessageBus(bus_type=self._bus_type).connect(),
                timeout=self._call_timeout,
            )
            self._logger.info('Successfully connected to D-Bus.')
            return True
        except asyncio.TimeoutError:
            self._logger.warning(
                'D-Bus did not answer within %.1fs.',
                self._call_timeout,
            )
            return False
        except DBusError as e:
            self._logger.warning('Failed to connect to D-Bus: %s', e)
            return False
        except OSError as e:
            self._logger.warning('D-Bus socket is unavailable: %s', e)
            return False

    async def _handle_connection_failure(self, backoff: float) -> None:
        """Handle connection failure by waiting for backoff period.
        """
        self._logger.info('Retrying in %.2f seconds.', backoff)
        await asyncio.sleep(backoff)

    def _raise_connection_failure(self) -> None:
        """Raise connection failure exception after all retries exhausted.
        """
        self._logger.critical(
            'Could not connect to D-Bus after %d attempts.',
            self._max_retries,
        )
        raise ConnectionError(
            f'Failed to connect to D-Bus after {self._max_retries} attempts.'
        )

    async def disconnect(self) -> None:
        """Disconnects from the D-Bus if connected.
        """
        async with self._connection_lock:
            if self._bus:
                self._logger.info('Disconnecting from D-Bus.')
                self._bus.disconnect()
                self._bus = None

    async def get_bus(self) -> MessageBus:
        """Returns the MessageBus object, connecting first if needed.

        Returns:
            The connected MessageBus object.

        Raises:
            ConnectionError: If a connection cannot be established.
        """
        if not self.is_connected():
            await self.connect()

        if not self._bus:
            raise ConnectionError('Failed to get a valid D-Bus connection.')

        return self._bus

    async def call(
        self,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str = '',
        body: list[Any] | None = None,
    ) -> list[Any]:
        """Send a method call and wait for its reply.

        Args:
            destination: Bus name of the receiving service
            path: Object path on the receiving service
            interface: Interface declaring the method
            member: Method name
            signature: D-Bus signature of the arguments
            body: Method arguments

        Returns:
            The body of the method return, one item per out argument

        Raises:
            DBusError: If the peer replies with an error, no reply arrives
                within the call timeout, or the transport fails mid-call
            ConnectionError: If the bus cannot be reached, or does not
                answer the connection handshake within the call timeout
        """
        bus = await self.get_bus()
        message = Message(
            destination=destination,
            path=path,
            interface=interface,
            member=member,
            signature=signature,
            body=body or [],
        )

        try:
            reply = await asyncio.wait_for(
                bus.call(message),
                timeout=self._call_timeout,
            )
        except asyncio.TimeoutError:
            raise DBusError(
                ErrorType.NO_REPLY,
                f'No reply to {member} within {self._call_timeout:.1f}s',
            )
        except (OSError, EOFError) as e:
            raise DBusError(ErrorType.DISCONNECTED, str(e))

        if reply.message_type == MessageType.ERROR:
            raise DBusError(
                reply.error_name,
                reply.body[0] if reply.body else '',
            )

        return reply.body

    @classmethod
    def get_instance(cls, bus_type: BusType = BusType.SYSTEM) -> Self:
        """Returns the shared DBusConnectionManager for a bus type.

        Returns:
            The shared instance.
        """
        if bus_type not in cls._instances:
            with cls._instances_lock:
                if bus_type not in cls._instances:
                    cls._instances[bus_type] = cls(bus_type=bus_type)
        return cls._instances[bus_type]
