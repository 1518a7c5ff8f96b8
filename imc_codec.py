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


from enum import Enum
from functools import cmp_to_key
from lxml import etree

from imc_errors import MalformedResponseError


# The CIMC firmware parser only honours boot devices in document order for these tags.
BOOT_ORDER_TAGS = ('lsbootDef', 'lsbootDevPrecision')

FALSE_TOKENS = ('0', 'off', 'false', 'no', 'inactive', 'disabled')


class Operation(Enum):
    """Top level request/response tags known to the client."""

    AAA_LOGIN = 'aaaLogin'
    AAA_REFRESH = 'aaaRefresh'
    AAA_LOGOUT = 'aaaLogout'
    CONFIG_RESOLVE_DN = 'configResolveDn'
    CONFIG_RESOLVE_CLASS = 'configResolveClass'
    CONFIG_RESOLVE_CHILDREN = 'configResolveChildren'
    CONFIG_RESOLVE_PARENT = 'configResolveParent'
    CONFIG_CONF_MO = 'configConfMo'
    # Undocumented error response
    ERROR = 'error'
    # Known to the device but not handled by this client
    EVENT_SUBSCRIBE = 'eventSubscribe'
    EVENT_UNSUBSCRIBE = 'eventUnsubscribe'
    AAA_GET_COMPUTE_AUTH_TOKENS = 'aaaGetComputeAuthTokens'
    AAA_KEEP_ALIVE = 'aaaKeepAlive'

    @property
    def supported(self):
        return self not in UNSUPPORTED_OPERATIONS

    @property
    def is_auth(self):
        return self in AUTH_OPERATIONS

    @classmethod
    def lookup(cls, name):
        """Return the supported Operation called name, or None."""
        try:
            operation = cls(name)
        except ValueError:
            return None
        return operation if operation.supported else None


UNSUPPORTED_OPERATIONS = frozenset((
    Operation.EVENT_SUBSCRIBE,
    Operation.EVENT_UNSUBSCRIBE,
    Operation.AAA_GET_COMPUTE_AUTH_TOKENS,
    Operation.AAA_KEEP_ALIVE,
))

AUTH_OPERATIONS = frozenset((
    Operation.AAA_LOGIN,
    Operation.AAA_REFRESH,
    Operation.AAA_LOGOUT,
))


def check_bool(value):
    """
    Interpret a loosely typed flag.

    Returns None when value is None (unknown), False for an empty value or
    one of FALSE_TOKENS (case insensitive), True for anything else.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    return bool(text) and text not in FALSE_TOKENS


def bool_to_xml(value):
    return 'true' if check_bool(value) else 'false'


def _as_list(value):
    return value if isinstance(value, list) else [value]


def _to_text(value):
    if isinstance(value, bool):
        return bool_to_xml(value)
    return str(value)


def _first_order(items):
    if not items or not isinstance(items[0], dict):
        return None
    try:
        return int(items[0]['order'])
    except (KeyError, TypeError, ValueError):
        return None


def _boot_order_cmp(a, b):
    a_order = _first_order(a[1])
    b_order = _first_order(b[1])
    if a_order is not None and b_order is not None:
        return (a_order > b_order) - (a_order < b_order)
    return (a[0] > b[0]) - (a[0] < b[0])


class EnvelopeCodec:
    """
    Converts request envelopes to XML and XML responses to envelopes.

    A request envelope is a dict with one key, the operation name, mapped to
    an attribute bag. Scalar bag values become XML attributes, dict values
    (or lists of dicts) become child elements named after their key.

    A parsed response is {tag: [element]}, where every element is a dict of
    its attributes, its text under 'content' if any, and each child tag
    mapped to a list of child elements.

    Args:
        parser (lxml.etree.XMLParser): Parser used for responses. The default
            does not resolve entities or touch the network.
    """

    def __init__(self, parser=None):
        if parser is None:
            parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)
        self.parser = parser

    def dumps(self, envelope):
        if not isinstance(envelope, dict) or len(envelope) != 1:
            raise ValueError(f'Envelope must have exactly one top level key: {envelope!r}')
        (tag, bag), = envelope.items()
        if isinstance(bag, list):
            if len(bag) != 1:
                raise ValueError(f'Envelope {tag} must hold exactly one attribute bag')
            bag = bag[0]
        return etree.tostring(self._build(None, tag, bag))

    def _build(self, parent, tag, bag):
        element = etree.Element(tag) if parent is None else etree.SubElement(parent, tag)
        if not isinstance(bag, dict):
            element.text = _to_text(bag)
            return element
        children = []
        for key, value in bag.items():
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                children.append((key, _as_list(value)))
            elif key == 'content':
                element.text = _to_text(value)
            else:
                element.set(key, _to_text(value))
        if tag in BOOT_ORDER_TAGS:
            children.sort(key=cmp_to_key(_boot_order_cmp))
        for key, items in children:
            for item in items:
                self._build(element, key, item)
        return element

    def loads(self, text):
        """
        Parse a response document.

        Raises:
            MalformedResponseError: If the document is not well formed XML
        """
        if isinstance(text, str):
            text = text.encode('utf-8')
        try:
            root = etree.fromstring(text, parser=self.parser)
        except etree.XMLSyntaxError as err:
            raise MalformedResponseError(f'Invalid XML response: {err}') from err
        if root is None or not isinstance(root.tag, str):
            raise MalformedResponseError(f'No top level element in response: {text[:200]!r}')
        return {root.tag: [self._to_dict(root)]}

    def _to_dict(self, element):
        result = dict(element.attrib)
        text = (element.text or '').strip()
        if text:
            result['content'] = text
        for child in element:
            if not isinstance(child.tag, str):
                continue  # comment or processing instruction
            result.setdefault(child.tag, []).append(self._to_dict(child))
        return result
