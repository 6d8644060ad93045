#!/usr/bin/env python3
"""
Tests for service discovery and usage fetching over a mocked transport.
"""

import base64
import os
import sys
import unittest
from datetime import date

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from helpers.http import (
    SERVICE_XML,
    TRAFFIC_XML,
    RecordingTransport,
    make_client,
    xml_response,
)

from node_usage.api import (
    DiscoveryError,
    UsageParseError,
    discover_usage_href,
    fetch_usage,
)
from node_usage.api.client import USER_AGENT
from node_usage.config import Env


class TestHttpClient(unittest.TestCase):
    def test_requests_carry_basic_auth_and_user_agent(self):
        transport = RecordingTransport([xml_response(SERVICE_XML)])
        with make_client(transport) as client:
            discover_usage_href(client, Env())

        request = transport.requests[0]
        expected = base64.b64encode(b"someone@internode.on.net:secret").decode()
        self.assertEqual(request.headers["Authorization"], f"Basic {expected}")
        self.assertEqual(request.headers["User-Agent"], USER_AGENT)
        self.assertTrue(USER_AGENT.startswith("NodeUsageCollectdPlugin/"))

    def test_timeout_comes_from_env(self):
        transport = RecordingTransport([])
        with make_client(transport, Env(REQUEST_TIMEOUT=3.5)) as client:
            self.assertEqual(client.timeout.read, 3.5)


class TestDiscoverUsageHref(unittest.TestCase):
    def test_appends_usage_to_service_href(self):
        transport = RecordingTransport([xml_response(SERVICE_XML)])
        with make_client(transport) as client:
            href = discover_usage_href(client, Env())

        self.assertEqual(href, "/api/v1.5/123456/usage")
        self.assertEqual(
            str(transport.requests[0].url),
            "https://customer-webtools-api.internode.on.net/api/v1.5/",
        )

    def test_redirected_listing_is_followed(self):
        transport = RecordingTransport([
            httpx.Response(302, headers={"Location": "/api/v1.6/"}),
            xml_response(SERVICE_XML),
        ])
        with make_client(transport) as client:
            href = discover_usage_href(client, Env())

        self.assertEqual(href, "/api/v1.5/123456/usage")
        self.assertEqual(transport.requests[1].url.path, "/api/v1.6/")

    def test_http_error_status_raises_discovery_error(self):
        transport = RecordingTransport([xml_response("denied", status=401)])
        with make_client(transport) as client:
            with self.assertRaises(DiscoveryError) as cm:
                discover_usage_href(client, Env())
        self.assertIn("401", str(cm.exception))

    def test_transport_error_raises_discovery_error(self):
        transport = RecordingTransport([httpx.ConnectError("connection refused")])
        with make_client(transport) as client:
            with self.assertRaises(DiscoveryError):
                discover_usage_href(client, Env())

    def test_unparseable_listing_raises_discovery_error(self):
        transport = RecordingTransport([xml_response("<internode><api/></internode>")])
        with make_client(transport) as client:
            with self.assertRaises(DiscoveryError):
                discover_usage_href(client, Env())


class TestFetchUsage(unittest.TestCase):
    def test_fetches_discovered_resource(self):
        transport = RecordingTransport([xml_response(TRAFFIC_XML)])
        with make_client(transport) as client:
            snapshot = fetch_usage(client, "/api/v1.5/123456/usage")

        self.assertEqual(snapshot.quota, 1000)
        self.assertEqual(snapshot.used, 200)
        self.assertEqual(snapshot.rollover, date(2020, 3, 15))
        self.assertEqual(
            str(transport.requests[0].url),
            "https://customer-webtools-api.internode.on.net/api/v1.5/123456/usage",
        )

    def test_follows_redirect_to_moved_resource(self):
        transport = RecordingTransport([
            httpx.Response(301, headers={"Location": "/api/v1.5/654321/usage"}),
            xml_response(TRAFFIC_XML),
        ])
        with make_client(transport) as client:
            snapshot = fetch_usage(client, "/api/v1.5/123456/usage")

        self.assertEqual(snapshot.quota, 1000)
        self.assertEqual(len(transport.requests), 2)
        self.assertEqual(transport.requests[1].url.path, "/api/v1.5/654321/usage")
        self.assertIn("Authorization", transport.requests[1].headers)

    def test_server_error_raises_http_status_error(self):
        transport = RecordingTransport([xml_response("oops", status=503)])
        with make_client(transport) as client:
            with self.assertRaises(httpx.HTTPStatusError):
                fetch_usage(client, "/api/v1.5/123456/usage")

    def test_malformed_payload_raises_parse_error(self):
        transport = RecordingTransport([xml_response("<html>maintenance</html>")])
        with make_client(transport) as client:
            with self.assertRaises(UsageParseError):
                fetch_usage(client, "/api/v1.5/123456/usage")


if __name__ == "__main__":
    unittest.main()
