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


import logging
import time

from imc_errors import AuthenticationError, IMCError, ProtocolError


SESSION_TIMEOUT = 120


class Session:
    """
    Authentication cookie lifecycle for one CIMC.

    The cookie and its expiry are only ever changed together. Login, refresh
    and logout requests go through the send callable, which must be the
    request engine's low level send so they never recurse into ensure_valid().

    Not safe for concurrent use; callers must serialize access.

    Args:
        host (str): Device address
        user (str): Login name
        password (str): Login password
        send (callable): Takes a request envelope, returns the response payload dict
        refresh_window (int): Seconds before expiry at which the cookie is refreshed
        hostname (str): Display label, defaults to host
        debug (int): Debug verbosity
    """

    def __init__(self, host, user, password, send, refresh_window=SESSION_TIMEOUT, hostname=None, debug=0):
        self.host = host
        self.hostname = hostname or host
        self.user = user
        self.password = password
        self.refresh_window = refresh_window
        self.debug = debug
        self._send = send
        self.cookie = None
        self.valid_until = 0

    def __repr__(self):
        state = 'valid' if self.is_valid else 'none'
        return f'Session(host={self.host!r}, user={self.user!r}, state={state})'

    @property
    def is_valid(self):
        return bool(self.cookie) and self.valid_until > time.time()

    def ensure_valid(self):
        """
        Return a usable cookie, logging in or refreshing as needed.

        Raises:
            AuthenticationError: If no cookie could be obtained
        """
        now = time.time()
        if not self.cookie or self.valid_until <= now:
            self._login()
        elif self.valid_until < now + self.refresh_window:
            self._refresh()

        if not self.is_valid:
            raise AuthenticationError(f'No session cookie received from {self.hostname}')
        return self.cookie

    def login(self, force=False):
        """Return a valid cookie; force starts a new session and cleans up the old one."""
        if force:
            self._login()
            if not self.is_valid:
                raise AuthenticationError(f'No session cookie received from {self.hostname}')
            return self.cookie
        return self.ensure_valid()

    def _login(self):
        self.logout()
        request = {
            'aaaLogin': {
                'inName': self.user,
                'inPassword': self.password,
            },
        }
        logging.info(f'Logging in to {self.hostname} as {self.user}')
        try:
            payload = self._send(request)
        except ProtocolError as err:
            raise AuthenticationError(f'Login to {self.hostname} rejected: {err.description}') from err
        self._install(payload)

    def _refresh(self):
        request = {
            'aaaRefresh': {
                'inCookie': self.cookie,
                'inName': self.user,
                'inPassword': self.password,
            },
        }
        logging.debug(f'Refreshing session cookie for {self.hostname}')
        try:
            payload = self._send(request)
        except ProtocolError as err:
            logging.warning(f'Session refresh on {self.hostname} rejected ({err.description}), logging in again')
            self.invalidate_local()
            self._login()
            return
        self._install(payload)

    def _install(self, payload):
        now = time.time()
        cookie = payload.get('outCookie')
        period = payload.get('outRefreshPeriod')
        if not cookie or not period:
            logging.warning(f'Auth response from {self.hostname} missing outCookie/outRefreshPeriod: {payload}')
            return
        try:
            period = int(float(period))
        except (ValueError, OverflowError):
            period = None
        if period is None or period <= 0:
            logging.warning(f'Auth response from {self.hostname} has invalid outRefreshPeriod: {payload.get("outRefreshPeriod")!r}')
            return
        self.cookie = cookie
        self.valid_until = now + period
        logging.debug(f'Session cookie for {self.hostname} valid for {period} seconds')

    def invalidate_local(self):
        """Forget the cookie without telling the device."""
        self.cookie = None
        self.valid_until = 0

    def logout(self):
        """End the session on the device if one is held, then clear local state."""
        if self.is_valid:
            request = {
                'aaaLogout': {
                    'inCookie': self.cookie,
                },
            }
            try:
                self._send(request)
                logging.info(f'Logged out from {self.hostname}')
            except IMCError as err:
                if self.debug > 0:
                    logging.warning(f'Ignoring logout failure on {self.hostname}: {err}')
        self.invalidate_local()
