#!/usr/bin/env python3
"""
API Client Module

HTTP transport and the YDNS update client. The update client issues exactly
one request per call and classifies the outcome; retrying is the daemon's job.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import base64
import logging
from typing import Optional, Dict, Any, Protocol

# Third-party imports
import requests

# Internal imports
from .exceptions import UpdateQueryFailed, UpdateQueryTransport

DDNS_UPDATE_URL = "https://ydns.io/api/v1/update/"
DEFAULT_TIMEOUT = 10

################################################################################
# TRANSPORT - Injectable HTTP Capability
################################################################################

class Transport(Protocol):
    """Sends a request and returns the HTTP status code. Raises requests.RequestException on transport failure."""

    def send(self, method: str, url: str, params: Optional[Dict[str, str]] = None,
             headers: Optional[Dict[str, str]] = None) -> int:
        ...


class HTTPTransport:
    """requests-backed transport with an explicit timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None,
                 logger: Optional[Any] = None) -> None:
        self.timeout = timeout
        self.session = session
        self.logger = logger if logger else logging.getLogger(__name__)

    def send(self, method: str, url: str, params: Optional[Dict[str, str]] = None,
             headers: Optional[Dict[str, str]] = None) -> int:
        """Perform one HTTP request. Returns status code."""
        requester = self.session if self.session else requests
        response = requester.request(method.upper(), url, params=params, headers=headers, timeout=self.timeout)
        self.logger.debug(f"{method.upper()} {url} - Status: {response.status_code}")
        return response.status_code

################################################################################
# UPDATE CLIENT - YDNS Provider Integration
################################################################################

def basic_auth_header(username: str, password: str) -> str:
    """Build a Basic Authorization value; standard Base64 alphabet with padding removed."""
    credentials = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(credentials).decode("ascii").rstrip("=")


class UpdateClient:
    """Stateless DDNS update client. Safe to reuse or to build per call."""

    def __init__(self, update_url: str = DDNS_UPDATE_URL, transport: Optional[Transport] = None,
                 logger: Optional[Any] = None) -> None:
        self.update_url = update_url
        self.logger = logger if logger else logging.getLogger(__name__)
        self.transport = transport if transport else HTTPTransport(logger=self.logger)

    def update(self, host: str, username: str, password: str) -> None:
        """Tell the provider to point host at the caller's public IP.

        Raises:
            UpdateQueryFailed: provider answered with a non-2xx status
            UpdateQueryTransport: provider could not be reached
        """
        headers = {"Authorization": basic_auth_header(username, password)}

        try:
            status_code = self.transport.send("GET", self.update_url, params={"host": host}, headers=headers)
        except requests.exceptions.RequestException as e:
            # Detail is logged here only; the raised error carries no transport specifics
            self.logger.warning(f"DDNS update request for '{host}' failed: {e}")
            raise UpdateQueryTransport() from None

        if not 200 <= status_code < 300:
            raise UpdateQueryFailed(status_code)

        self.logger.debug(f"DDNS update accepted for '{host}' (status {status_code})")
