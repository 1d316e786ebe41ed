"""Unit tests for mDNS service advertisement"""

import socket
from unittest.mock import Mock

import pytest
from zeroconf import NonUniqueNameException

from airpad.server.discovery import DiscoveryError, ServiceAdvertiser


@pytest.fixture
def zeroconf():
    return Mock()


class TestServiceAdvertiser:
    """Test register/unregister against a mocked Zeroconf"""

    def test_service_info(self, zeroconf):
        """Test the record carries type, port and address"""
        advertiser = ServiceAdvertiser("_airpad._tcp.local.", "desk", zeroconf=zeroconf)

        info = advertiser.serviceInfo_build(5000, "192.168.1.20")

        assert info.type == "_airpad._tcp.local."
        assert info.name == "desk._airpad._tcp.local."
        assert info.port == 5000
        assert info.addresses == [socket.inet_aton("192.168.1.20")]

    def test_register_once(self, zeroconf):
        """Test registration happens once however often it is requested"""
        advertiser = ServiceAdvertiser(zeroconf=zeroconf)

        advertiser.service_register(5000, address="192.168.1.20")
        advertiser.service_register(5000, address="192.168.1.20")

        zeroconf.register_service.assert_called_once()
        assert advertiser.is_registered is True

    def test_register_conflict(self, zeroconf):
        """Test name conflicts surface as DiscoveryError"""
        zeroconf.register_service.side_effect = NonUniqueNameException()
        advertiser = ServiceAdvertiser(zeroconf=zeroconf)

        with pytest.raises(DiscoveryError):
            advertiser.service_register(5000, address="192.168.1.20")
        assert advertiser.is_registered is False

    def test_unregister_closes(self, zeroconf):
        """Test unregister withdraws the record and closes Zeroconf"""
        advertiser = ServiceAdvertiser(zeroconf=zeroconf)
        advertiser.service_register(5000, address="192.168.1.20")

        advertiser.service_unregister()
        advertiser.service_unregister()

        zeroconf.unregister_service.assert_called_once()
        zeroconf.close.assert_called_once()
        assert advertiser.is_registered is False

    def test_unregister_without_register(self):
        """Test unregister is a no-op when nothing was advertised"""
        ServiceAdvertiser().service_unregister()
