"""
Connection agents: pooled httpx clients shared between logical calls.

An agent owns one ``httpx.AsyncClient`` (its keep-alive connection pool)
and a socket timeout. The timeout only ever grows: a request whose deadline
exceeds it widens it in place instead of getting a new pool.
"""
import logging
import os
from typing import Dict, Optional

import httpx

logger = logging.getLogger("aichat_client.agent")

# Idle keep-alive sockets are kept for five minutes
DEFAULT_KEEPALIVE_EXPIRY = 5 * 60.0
DEFAULT_AGENT_TIMEOUT = 5 * 60.0


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if either of these is set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


class ConnectionAgent:
    """A shared connection pool handle."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_AGENT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if client is None:
            client = httpx.AsyncClient(
                transport=transport,
                limits=httpx.Limits(keepalive_expiry=DEFAULT_KEEPALIVE_EXPIRY),
                verify=not _is_ssl_verify_disabled_by_env(),
            )
        self._client = client
        self._timeout = float(timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def timeout(self) -> float:
        """Socket timeout applied to every request sent through this agent."""
        return self._timeout

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def widen_timeout(self, min_timeout: float) -> bool:
        """
        Raise the socket timeout to ``min_timeout`` if it is currently lower.

        Runs without suspension points, so it is atomic with respect to other
        tasks on the event loop.

        Returns:
            Whether the timeout changed.
        """
        if min_timeout > self._timeout:
            logger.debug(
                f"ConnectionAgent.widen_timeout: {self._timeout}s -> {min_timeout}s"
            )
            self._timeout = min_timeout
            return True
        return False

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "ConnectionAgent":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ConnectionAgent(timeout={self._timeout!r}, closed={self.closed!r})"


_default_agents: Dict[str, ConnectionAgent] = {}


def get_default_agent(url: str) -> ConnectionAgent:
    """
    Return the process-wide agent for the URL's scheme.

    Agents are created on first use and reused by every call on the same
    scheme. A closed agent is replaced.
    """
    scheme = "https" if url.startswith("https") else "http"
    agent = _default_agents.get(scheme)
    if agent is None or agent.closed:
        logger.debug(f"get_default_agent: creating shared {scheme} agent")
        agent = ConnectionAgent()
        _default_agents[scheme] = agent
    return agent


async def close_default_agents() -> None:
    """Close and forget every shared default agent."""
    agents = list(_default_agents.values())
    _default_agents.clear()
    for agent in agents:
        await agent.aclose()
