"""ScyllaDB implementation for URL shortener."""

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Dict, Optional, Sequence

from cassandra import ConsistencyLevel

from .base import UrlStoreBase
from ..exceptions import StoreConnectionError, StoreReadError, StoreWriteError


DEFAULT_HOSTS = ("127.0.0.1",)
DEFAULT_PORT = 9042
DEFAULT_KEYSPACE = "url_shortener"

# Every read and write waits for a majority of replicas
CONSISTENCY = ConsistencyLevel.QUORUM
REQUEST_TIMEOUT_SECONDS = 5.0


def build_cluster(
    hosts: Sequence[str],
    port: int,
    consistency: int = CONSISTENCY,
    request_timeout: float = REQUEST_TIMEOUT_SECONDS,
):
    """Create a driver Cluster whose default profile uses the given consistency and timeout."""
    # cassandra.cluster picks an event loop reactor at import time
    from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT

    profile = ExecutionProfile(
        consistency_level=consistency,
        request_timeout=request_timeout,
    )
    return Cluster(
        contact_points=list(hosts),
        port=port,
        execution_profiles={EXEC_PROFILE_DEFAULT: profile},
    )


def _set_result(future: asyncio.Future, result: Any) -> None:
    if not future.done():
        future.set_result(result)


def _set_exception(future: asyncio.Future, exc: BaseException) -> None:
    if not future.done():
        future.set_exception(exc)


class ScyllaUrlStore(UrlStoreBase):
    """ScyllaDB (CQL) implementation of the URL store.

    The driver session is thread safe and shared by all concurrent requests.
    Blocking driver calls (connect, prepare, shutdown) run in the default
    executor; queries use the driver's async API bridged onto the event loop.
    """

    CREATE_KEYSPACE_CQL = """
    CREATE KEYSPACE IF NOT EXISTS {keyspace}
    WITH replication = {{'class': 'SimpleStrategy', 'replication_factor': {replication_factor}}}
    """

    CREATE_TABLE_CQL = """
    CREATE TABLE IF NOT EXISTS urls (
        short_url text PRIMARY KEY,
        long_url text
    )
    """

    CREATE_INDEX_CQL = "CREATE INDEX IF NOT EXISTS urls_long_url_idx ON urls (long_url)"

    INSERT_CQL = "INSERT INTO urls (short_url, long_url) VALUES (?, ?)"
    SELECT_BY_LONG_URL_CQL = "SELECT short_url FROM urls WHERE long_url = ? LIMIT 1"
    SELECT_BY_SHORT_URL_CQL = "SELECT long_url FROM urls WHERE short_url = ? LIMIT 1"
    HEALTH_CQL = "SELECT now() FROM system.local"

    def __init__(
        self,
        hosts: Sequence[str] = DEFAULT_HOSTS,
        port: int = DEFAULT_PORT,
        keyspace: str = DEFAULT_KEYSPACE,
        create_schema: bool = False,
        replication_factor: int = 1,
        logger: Optional[logging.Logger] = None,
        cluster_factory: Callable[..., Any] = build_cluster,
    ):
        """Initialize store settings. No connection is made until connect().

        Args:
            hosts: Contact points of the cluster
            port: CQL native protocol port
            keyspace: Keyspace holding the urls table
            create_schema: Create keyspace, table and index on connect
            replication_factor: Replication factor used when creating the keyspace
            logger: Optional logger instance
            cluster_factory: Callable(hosts, port, consistency, request_timeout) returning a Cluster
        """
        self.hosts = tuple(hosts)
        self.port = port
        self.keyspace = keyspace
        self.create_schema = create_schema
        self.replication_factor = replication_factor
        self.consistency = CONSISTENCY
        self.request_timeout = REQUEST_TIMEOUT_SECONDS
        self.logger = logger or logging.getLogger(__name__)
        self._cluster_factory = cluster_factory

        self._cluster = None
        self._session = None
        self._statements: Dict[str, Any] = {}

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def connect(self) -> None:
        """Open the session and prepare statements."""
        if self.connected:
            return

        self.logger.info(
            f"Connecting to ScyllaDB at {','.join(self.hosts)}:{self.port} "
            f"(keyspace={self.keyspace})"
        )
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._connect_blocking)
        except Exception as e:
            self.logger.error(f"Failed to connect to ScyllaDB: {e}")
            raise StoreConnectionError(f"failed to connect to ScyllaDB: {e}") from e

        self.logger.info("Connected to ScyllaDB")

    def _connect_blocking(self) -> None:
        cluster = self._cluster_factory(
            self.hosts,
            self.port,
            self.consistency,
            self.request_timeout,
        )
        try:
            if self.create_schema:
                session = cluster.connect()
                self._create_schema(session)
            else:
                session = cluster.connect(self.keyspace)

            statements = {
                "insert": session.prepare(self.INSERT_CQL),
                "by_long_url": session.prepare(self.SELECT_BY_LONG_URL_CQL),
                "by_short_url": session.prepare(self.SELECT_BY_SHORT_URL_CQL),
            }
            for statement in statements.values():
                statement.consistency_level = self.consistency
        except Exception:
            cluster.shutdown()
            raise

        self._cluster = cluster
        self._session = session
        self._statements = statements

    def _create_schema(self, session) -> None:
        """Create keyspace, table and index if they don't exist, then switch to the keyspace."""
        self.logger.info(f"Creating schema in keyspace {self.keyspace} if not exists...")
        session.execute(
            self.CREATE_KEYSPACE_CQL.format(
                keyspace=self.keyspace,
                replication_factor=self.replication_factor,
            )
        )
        session.set_keyspace(self.keyspace)
        session.execute(self.CREATE_TABLE_CQL)
        session.execute(self.CREATE_INDEX_CQL)
        self.logger.info("Schema creation completed successfully")

    def _require_session(self):
        if self._session is None:
            raise StoreConnectionError("ScyllaDB session is not open")
        return self._session

    async def _execute(self, statement, params=None):
        """Run a statement through the driver's async API and await its rows."""
        session = self._require_session()
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        response_future = session.execute_async(
            statement,
            params,
            timeout=self.request_timeout,
        )
        # Driver callbacks fire on its I/O thread
        response_future.add_callbacks(
            partial(loop.call_soon_threadsafe, _set_result, future),
            partial(loop.call_soon_threadsafe, _set_exception, future),
        )
        return await future

    async def insert(self, short_key: str, long_url: str) -> None:
        """Persist a mapping at quorum consistency.

        Args:
            short_key: The derived short key
            long_url: The original long URL
        """
        self._require_session()
        try:
            await self._execute(self._statements["insert"], (short_key, long_url))
        except Exception as e:
            self.logger.error(f"Error inserting URL {short_key}: {e}")
            raise StoreWriteError(f"failed to insert URL into DB: {e}") from e

        self.logger.debug(f"Inserted URL: {short_key} -> {long_url}")

    async def find_by_long_url(self, long_url: str) -> Optional[str]:
        """Find the short key stored for a long URL."""
        self._require_session()
        try:
            rows = await self._execute(self._statements["by_long_url"], (long_url,))
        except Exception as e:
            self.logger.error(f"Error finding short key for {long_url}: {e}")
            raise StoreReadError(f"failed to find URL: {e}") from e

        if not rows:
            return None
        return rows[0].short_url

    async def find_by_short_key(self, short_key: str) -> Optional[str]:
        """Find the long URL stored for a short key."""
        self._require_session()
        try:
            rows = await self._execute(self._statements["by_short_url"], (short_key,))
        except Exception as e:
            self.logger.error(f"Error finding long URL for {short_key}: {e}")
            raise StoreReadError(f"failed to find URL: {e}") from e

        if not rows:
            return None
        return rows[0].long_url

    async def health_check(self) -> bool:
        """Check if the cluster answers a trivial query."""
        if not self.connected:
            return False
        try:
            await self._execute(self.HEALTH_CQL)
            return True
        except Exception as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Shut down the cluster and drop the session."""
        cluster = self._cluster
        self._cluster = None
        self._session = None
        self._statements = {}

        if cluster is None:
            return

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, cluster.shutdown)
        self.logger.info("ScyllaDB session closed")
