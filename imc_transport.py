"""
CIMC XML API Client.
Copyright (c) 2021 Cisco and/or its affiliates.
This software is licensed to you under the terms of the Cisco Sample
Code License, Version 1.1 (the "License"). You may obtain a copy of the
License at
               https://developer.cisco.com/docs/licenses
All use of the material herein must be in accordance with the terms of
the License. All rights not expressly granted by the License are
reserved. Unless required by applicable law or agreed to separately in
writing, software distributed under the License is distributed on an "AS
IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express
or implied.
"""

__author__ = "Phithakkit Phasuk"
__email__ = "phphasuk@cisco.com"
__version__ = "0.1.0"
__copyright__ = "Copyright (c) 2021 Cisco and/or its affiliates."
__license__ = "Cisco Sample Code License, Version 1.1"


import urllib3
import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import InsecureRequestWarning
import logging
import socket

from imc_errors import TransportError


HTTPS_PORT = 443
PING_TIMEOUT = 5
USER_AGENT = f'cimc-xmlapi-client/{__version__}'


class HostNameIgnoringAdapter(HTTPAdapter):
    def cert_verify(self, conn, url, verify, cert):
        conn.assert_hostname = False
        return super().cert_verify(conn, url, verify, cert)


class Transport:
    """
    HTTPS transport for the CIMC XML API endpoint.

    The underlying requests.Session is created lazily and kept open between
    calls. reset() throws it away; the next post() builds a fresh one.

    Args:
        host (str): Device address
        timeout (int): Request timeout in seconds
        verify (bool or str): False to skip certificate checks, or a CA bundle path.
            Hostname mismatches are ignored either way.
        port (int): HTTPS port, also used by the liveness probe
        debug (int): Debug verbosity, >4 dumps HTTP response objects
    """

    def __init__(self, host, timeout=120, verify=False, port=HTTPS_PORT, debug=0):
        if not verify:
            urllib3.disable_warnings(InsecureRequestWarning)  # self signed certs are the norm on CIMC
        self.host = host
        self.port = port
        self.timeout = timeout
        self.verify = verify
        self.debug = debug
        if port == HTTPS_PORT:
            self.url = f'https://{host}/nuova'
        else:
            self.url = f'https://{host}:{port}/nuova'
        self._session = None

    def _get_session(self):
        if self._session is None:
            session = requests.Session()
            session.verify = self.verify
            session.headers.update({
                'User-Agent': USER_AGENT,
                'Connection': 'keep-alive'})
            session.mount('https://', HostNameIgnoringAdapter())
            self._session = session
            logging.debug(f'Opened HTTPS session to {self.url}')
        return self._session

    @property
    def is_open(self):
        return self._session is not None

    def post(self, body):
        """
        POST a serialized XML envelope and return the raw response body.

        The XML text is sent verbatim even though the content type claims to
        be form encoded; that is what the CIMC firmware expects.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status
        """
        headers = {'Content-Type': 'application/x-www-form-urlencoded'}
        try:
            response = self._get_session().post(self.url, data=body, headers=headers, timeout=self.timeout)
            if self.debug > 4:
                logging.debug(f'HTTP response: {response!r} headers: {dict(response.headers)}')
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            status = f'{err.response.status_code} {err.response.reason}' if err.response is not None else str(err)
            logging.error(f'HTTP error from {self.host}: {status}')
            raise TransportError(status) from err
        except requests.exceptions.RequestException as err:
            logging.error(f'Request to {self.host} failed: {err}')
            raise TransportError(str(err)) from err
        return response.content

    def ping(self):
        """TCP connect to the HTTPS port. Returns True if the device accepted the connection."""
        try:
            with socket.create_connection((self.host, self.port), timeout=PING_TIMEOUT):
                return True
        except OSError as err:
            logging.debug(f'Ping {self.host}:{self.port} failed: {err}')
            return False

    def reset(self):
        """Discard the HTTP session so the next request opens a new one."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logging.debug(f'Closed HTTPS session to {self.url}')

    close = reset
