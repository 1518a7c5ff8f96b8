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


class IMCError(Exception):
    """Base exception for all CIMC client errors."""


class UnsupportedOperationError(IMCError):
    """Envelope operation is not in the supported operation catalog."""


class UnreachableError(IMCError):
    """Device did not answer the liveness probe, even after a retry."""


class TransportError(IMCError):
    """HTTP layer failure that persisted after a retry."""

    def __init__(self, status):
        self.status = status
        super().__init__(f'HTTP request failed: {status}')


class MalformedResponseError(IMCError):
    """Response did not parse into a single top level element."""


class ProtocolError(IMCError):
    """Device reported an application level error."""

    def __init__(self, description, error_code=None):
        self.description = description
        self.error_code = error_code
        super().__init__(description)


class AuthenticationError(IMCError):
    """Login or refresh did not produce a usable cookie."""


class IMCTimeoutError(IMCError):
    """A device side operation did not finish within its maximum wait."""
