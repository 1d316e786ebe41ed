"""mDNS / DNS-SD advertisement so the handheld can find the server."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from zeroconf import NonUniqueNameException, ServiceInfo, Zeroconf

from airpad.common.settings import settings

logger = logging.getLogger(__name__)


class DiscoveryError(RuntimeError):
    """Raised when the service cannot be advertised."""


def localAddress_get() -> str:
    """
    Determine the LAN address used for outbound traffic.

    Connecting a UDP socket sends nothing; it only selects a route.

    Returns:
        IPv4 address as a string

    Raises:
        DiscoveryError: If no route is available
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError as e:
        raise DiscoveryError(f"Could not determine local IP address ({e})") from e


class ServiceAdvertiser:
    """Registers the trackpad service once at startup and removes it on stop."""

    def __init__(
        self,
        service_type: str = settings.SERVICE_TYPE,
        service_name: str = settings.SERVICE_NAME,
        zeroconf: Optional[Zeroconf] = None,
    ) -> None:
        """
        Initialize advertiser.

        Args:
            service_type: DNS-SD type, e.g. "_airpad._tcp.local."
            service_name: Instance name under that type
            zeroconf: Existing Zeroconf instance; one is created on register if None
        """
        self._service_type: str = service_type
        self._service_name: str = service_name
        self._zeroconf: Optional[Zeroconf] = zeroconf
        self._info: Optional[ServiceInfo] = None

    @property
    def is_registered(self) -> bool:
        return self._info is not None

    def serviceInfo_build(self, port: int, address: str) -> ServiceInfo:
        """
        Build the DNS-SD record for this server.

        Args:
            port: Bound listener port
            address: IPv4 address to advertise

        Returns:
            Service info record
        """
        return ServiceInfo(
            self._service_type,
            f"{self._service_name}.{self._service_type}",
            addresses=[socket.inet_aton(address)],
            port=port,
            properties={"app_name": self._service_name},
            server=f"{socket.gethostname().split('.')[0]}.local.",
        )

    def service_register(self, port: int, address: Optional[str] = None) -> None:
        """
        Advertise the service on the local network.

        Args:
            port: Bound listener port
            address: Address to advertise; detected if None

        Raises:
            DiscoveryError: If registration fails
        """
        if self._info is not None:
            return
        info = self.serviceInfo_build(port, address or localAddress_get())
        try:
            if self._zeroconf is None:
                self._zeroconf = Zeroconf()
            self._zeroconf.register_service(info)
        except (NonUniqueNameException, OSError) as e:
            raise DiscoveryError(f"Could not register {info.name}: {e}") from e
        self._info = info
        logger.info(f"[mDNS] Registered {info.name} on port {port}")

    def service_unregister(self) -> None:
        """Withdraw the advertisement and release the mDNS socket."""
        if self._zeroconf is None:
            return
        if self._info is not None:
            self._zeroconf.unregister_service(self._info)
            logger.info(f"[mDNS] Unregistered {self._info.name}")
            self._info = None
        self._zeroconf.close()
        self._zeroconf = None
