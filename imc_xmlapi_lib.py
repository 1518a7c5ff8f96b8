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
import re
import time

from imc_codec import EnvelopeCodec, Operation, bool_to_xml, check_bool
from imc_errors import (
    IMCError,
    IMCTimeoutError,
    MalformedResponseError,
    ProtocolError,
    TransportError,
    UnreachableError,
    UnsupportedOperationError,
)
from imc_session import SESSION_TIMEOUT, Session
from imc_transport import Transport


DEFAULT_ADMIN = 'admin'
DEFAULT_PASS = 'password'

# errorCode returned when the session cookie is no longer accepted
AUTH_REQUIRED = '552'
RETRY_BACKOFF = 5
WAIT_INTERVAL = 5

OPTION_ROM_POST_WAIT = 180
FIRMWARE_UPDATE_WAIT = 2700

RACK_UNIT_DN = 'sys/rack-unit-1'
MGMT_IF_DN = 'sys/rack-unit-1/mgmt/if-1'
LOCATOR_LED_DN = 'sys/rack-unit-1/locator-led'
FIRMWARE_UPDATER_DN = 'sys/huu/firmwareUpdater'

RESOLVE_KEYS = {
    Operation.CONFIG_RESOLVE_DN: ('dn', 'outConfig'),
    Operation.CONFIG_RESOLVE_PARENT: ('dn', 'outConfig'),
    Operation.CONFIG_RESOLVE_CHILDREN: ('inDn', 'outConfigs'),
    Operation.CONFIG_RESOLVE_CLASS: ('classId', 'outConfigs'),
}

VNIC_CLASSES = {
    'all': 'adaptorUnit',
    'ext': 'adaptorExtEthIf',
    'host': 'adaptorHostEthIf',
    'fc': 'adaptorHostFcIf',
}

# adminPower value to send, keyed by current operPower and requested mode.
# A requested mode missing from the current state's table is skipped.
# TODO: confirm cmos-reset-immediate and diagnostic-interrupt against the C-Series 4.x firmware API guide
POWER_TRANSITIONS = {
    'off': {
        'up': 'up',
        'cycle-immediate': 'up',
        'hard-reset-immediate': 'up',
        'cmos-reset-immediate': 'cmos-reset-immediate',
        'bmc-reset-immediate': 'bmc-reset-immediate',
        'bmc-reset-default': 'bmc-reset-default',
    },
    'on': {
        'down': 'down',
        'soft-shut-down': 'soft-shut-down',
        'cycle-immediate': 'cycle-immediate',
        'hard-reset-immediate': 'hard-reset-immediate',
        'diagnostic-interrupt': 'diagnostic-interrupt',
        'bmc-reset-immediate': 'bmc-reset-immediate',
        'bmc-reset-default': 'bmc-reset-default',
    },
}
POWER_MODES = frozenset(mode for table in POWER_TRANSITIONS.values() for mode in table)

_PASSWORD_ATTR = re.compile(r'(inPassword=")[^"]*(")')


def _redact(request):
    redacted = {}
    for key, bag in request.items():
        redacted[key] = dict(bag, inPassword='********') if 'inPassword' in bag else bag
    return redacted


def _is_error_code(error_code):
    return error_code not in (None, '', '0')


class xml_api_lib:
    """
    Client for the Cisco IMC XML API.

    Nothing is sent at construction; the first request logs in. Call close()
    (or use the instance as a context manager) to end the device session,
    otherwise it lingers until it times out on the CIMC.

    Args:
        host (str): CIMC address
        user (str): Login name
        password (str): Login password
        hostname (str): Display label used in log messages
        debug (int): Verbosity 0-9. >2 logs request/response mappings,
            >3 raw XML, >4 HTTP response objects.
        read_only (bool): Return proposed configuration instead of applying it
        timeout (int): HTTP request timeout in seconds
        refresh_window (int): Seconds before cookie expiry to refresh it,
            defaults to timeout
        verify (bool or str): TLS verification, see Transport
        transport: Transport instance to use instead of building one
        codec: EnvelopeCodec instance to use instead of building one
    """

    def __init__(self, host, user, password, hostname=None, debug=0, read_only=False,
                 timeout=SESSION_TIMEOUT, refresh_window=None, verify=False,
                 transport=None, codec=None):
        if not host:
            raise ValueError('Missing or invalid host option.')
        if not user:
            raise ValueError('Missing or invalid user option.')
        if not password:
            raise ValueError('Missing or invalid password option.')
        if debug is None:
            debug = 0
        if isinstance(debug, bool) or not isinstance(debug, int) or not 0 <= debug <= 9:
            raise ValueError('Missing or invalid debug option.')
        if refresh_window is None:
            refresh_window = timeout

        self.host = host
        self.hostname = hostname or host
        self.debug = debug
        self.read_only = bool(read_only)
        self.transport = transport or Transport(host, timeout=timeout, verify=verify, debug=debug)
        self.codec = codec or EnvelopeCodec()
        self.session = Session(host, user, password, self._issue_request,
                               refresh_window=refresh_window, hostname=self.hostname, debug=debug)
        # retry causes already used by the send() in progress, shared with the
        # login/logout requests it triggers
        self._retried = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        """End the device session and drop the HTTP connection."""
        self.logout()

    def login(self, force=False):
        """
        Start (or reuse) an authentication session and return the cookie.

        Other requests maintain the session on their own, so this is mostly
        useful for error testing or for force starting a new session.
        """
        return self.session.login(force)

    def ensure_valid(self):
        return self.session.ensure_valid()

    def logout(self):
        self.session.logout()
        self.transport.reset()
        return True

    def ping(self):
        return self.transport.ping()

    def send(self, request):
        """
        Send a request envelope and return the response payload.

        Args:
            request (dict): {operation_name: {field: value, ...}}

        Returns:
            dict: The element under the response's top level tag

        Raises:
            UnsupportedOperationError: Unknown or unsupported operation, nothing is sent
            UnreachableError: Device failed the liveness probe twice
            TransportError: HTTP failure twice
            MalformedResponseError: Response is not a recognised single tag document
            ProtocolError: Device reported an error
        """
        return self._issue_request(request)

    def _validate_request(self, request):
        if not isinstance(request, dict) or len(request) != 1:
            raise UnsupportedOperationError(f'Invalid request: {request!r}')
        (name, bag), = request.items()
        operation = Operation.lookup(name)
        if operation is None or operation is Operation.ERROR:
            raise UnsupportedOperationError(f'Unsupported request: {name}')
        if isinstance(bag, list) and len(bag) == 1:
            bag = bag[0]
        if not isinstance(bag, dict):
            raise UnsupportedOperationError(f'Invalid request attributes for {name}: {bag!r}')
        return operation, bag

    def _reset(self, logout=False):
        if logout:
            self.session.logout()
        else:
            self.session.invalidate_local()
        time.sleep(RETRY_BACKOFF)
        self.transport.reset()

    def _issue_request(self, request):
        operation, bag = self._validate_request(request)
        if self._retried is not None:
            return self._attempt(operation, bag, self._retried)

        self._retried = set()
        try:
            return self._attempt(operation, bag, self._retried)
        finally:
            self._retried = None

    def _attempt(self, operation, bag, retried):
        name = operation.value
        while True:
            attempt = {key: value for key, value in bag.items() if key != 'cookie'}
            if not operation.is_auth:
                attempt['cookie'] = self.session.ensure_valid()
            elif self.session.cookie:
                attempt['cookie'] = self.session.cookie
            envelope = {name: attempt}

            if not self.transport.ping():
                if 'unreachable' in retried:
                    raise UnreachableError(f'{self.hostname} is not reachable')
                retried.add('unreachable')
                logging.warning(f'{self.hostname} did not answer ping, retrying {name} in {RETRY_BACKOFF} seconds')
                self._reset()
                continue

            xml_request = self.codec.dumps(envelope)
            if self.debug > 2:
                logging.debug(f'Request: {_redact(envelope)}')
            if self.debug > 3:
                redacted_xml = _PASSWORD_ATTR.sub(r'\1********\2', xml_request.decode())
                logging.debug(f'XML request: {redacted_xml}')

            try:
                xml_response = self.transport.post(xml_request)
            except TransportError as err:
                if 'transport' in retried:
                    raise
                retried.add('transport')
                logging.warning(f'{name} to {self.hostname} failed ({err.status}), retrying in {RETRY_BACKOFF} seconds')
                self._reset()
                continue

            if self.debug > 3:
                logging.debug(f'XML response: {xml_response!r}')
            response = self.codec.loads(xml_response)
            if self.debug > 2:
                logging.debug(f'Response: {response}')

            (response_key, items), = response.items()
            response_operation = Operation.lookup(response_key)
            if response_operation is None or len(items) != 1:
                raise MalformedResponseError(f'Invalid response: {response}')
            payload = items[0]
            if response_operation is Operation.ERROR:
                raise ProtocolError(payload.get('errorDescr') or 'Unknown error', payload.get('errorCode'))
            if response_operation is not operation:
                raise ProtocolError(f'Unexpected response: {response}')

            error_code = payload.get('errorCode')
            if error_code == AUTH_REQUIRED and not operation.is_auth and 'auth' not in retried:
                retried.add('auth')
                logging.warning(f'{self.hostname} rejected the session cookie, logging in again')
                self._reset(logout=True)
                continue

            if check_bool(payload.get('response')) and not _is_error_code(error_code):
                return payload
            description = payload.get('errorDescr') or f'{name} failed on {self.hostname}'
            logging.error(f'{name} on {self.hostname} failed: {description} (errorCode {error_code})')
            raise ProtocolError(description, error_code)

    def wait_response(self, max_wait, check):
        """
        Poll until check() returns true or max_wait seconds have been waited.

        Every WAIT_INTERVAL seconds the device is pinged and, if it answers,
        the session is kept alive and check() is called. Errors while the
        device is coming back count as "not yet".

        Returns:
            bool: Whether the condition was met
        """
        waited = None
        condition_met = False
        while True:
            if waited is not None:
                time.sleep(WAIT_INTERVAL)

            if self.ping():
                try:
                    if self.login():
                        condition_met = bool(check())
                except IMCError as err:
                    logging.info(f'Still waiting on {self.hostname}: {err}')

            waited = 0 if waited is None else waited + WAIT_INTERVAL
            if condition_met or waited >= max_wait:
                return condition_met

    # configResolve* requests and responses share one shape, only the field names differ
    def _config_resolve(self, operation, value, in_hierarchical=None, class_id=None):
        in_key, out_key = RESOLVE_KEYS[operation]
        attributes = {in_key: value}
        if in_hierarchical is not None:
            attributes['inHierarchical'] = bool_to_xml(in_hierarchical)
        if class_id is not None:
            if operation is not Operation.CONFIG_RESOLVE_CHILDREN:
                raise ValueError('classId parameter only accepted for configResolveChildren requests.')
            attributes['classId'] = class_id

        payload = self.send({operation.value: attributes})
        return payload.get(out_key, [{}])[0]

    def config_resolve_dn(self, dn, in_hierarchical=None):
        """
        Resolve the managed object at dn.

        Returns:
            dict: The outConfig element, e.g. {'equipmentLocatorLed': [{'operState': 'off', ...}]}
        """
        return self._config_resolve(Operation.CONFIG_RESOLVE_DN, dn, in_hierarchical)

    def config_resolve_class(self, class_id, in_hierarchical=None):
        """Resolve every managed object of class_id. Returns the outConfigs element."""
        return self._config_resolve(Operation.CONFIG_RESOLVE_CLASS, class_id, in_hierarchical)

    def config_resolve_children(self, dn, in_hierarchical=None, class_id=None):
        """Resolve the children of dn, optionally only those of class_id."""
        return self._config_resolve(Operation.CONFIG_RESOLVE_CHILDREN, dn, in_hierarchical, class_id)

    def config_resolve_parent(self, dn, in_hierarchical=None):
        return self._config_resolve(Operation.CONFIG_RESOLVE_PARENT, dn, in_hierarchical)

    get_config_dn = config_resolve_dn
    get_config_class = config_resolve_class
    get_config_children = config_resolve_children
    get_config_parent = config_resolve_parent

    def config_conf_mo(self, in_config, dn, in_hierarchical=None):
        """
        Apply in_config to the managed object at dn.

        Args:
            in_config (dict): {class_name: {attribute: value, ...}}
            dn (str): Distinguished name of the object
            in_hierarchical: Optional flag, see check_bool()

        Returns:
            dict: The outConfig element, or in_config unchanged in read-only mode
        """
        if not isinstance(in_config, dict):
            raise ValueError(f'Invalid in_config argument: {in_config!r}')

        if self.read_only:
            logging.info(f'Read-only mode, not applying {list(in_config)} to {dn} on {self.hostname}')
            return in_config

        attributes = {
            'dn': dn,
            'inConfig': in_config,
        }
        if in_hierarchical is not None:
            attributes['inHierarchical'] = bool_to_xml(in_hierarchical)

        payload = self.send({Operation.CONFIG_CONF_MO.value: attributes})
        return payload.get('outConfig', [{}])[0]

    set_config = config_conf_mo

    def get_vnic_adaptors(self):
        return self.get_config_class('adaptorUnit').get('adaptorUnit', [])

    def reset_vnic_adaptor(self, vna_dn):
        logging.info(f'Resetting vNic {vna_dn} on {self.hostname}')
        in_config = {
            'adaptorUnit': {
                'adminState': 'adaptor-reset-default',
                'dn': vna_dn,
            },
        }
        return self.set_config(in_config, vna_dn)

    def reset_vnic_adaptors(self):
        logging.info(f'Resetting vNic adaptors on {self.hostname}')
        for adaptor in self.get_vnic_adaptors():
            self.reset_vnic_adaptor(adaptor['dn'])
        return True

    def get_vnic_settings(self, in_hierarchical=True, vnic_type='all', adaptor_dn=None):
        """
        Get vNic settings, optionally restricted to one interface type and/or adaptor.

        Args:
            in_hierarchical: Include child objects, default True
            vnic_type (str): all, ext, host or fc
            adaptor_dn (str): Only return interfaces below this adaptor
        """
        if vnic_type not in VNIC_CLASSES:
            raise ValueError(f"Unexpected type: '{vnic_type}'.")
        class_id = VNIC_CLASSES[vnic_type]

        if adaptor_dn:
            response = self.get_config_children(adaptor_dn, in_hierarchical, class_id)
        else:
            response = self.get_config_class(class_id, in_hierarchical)
        return response.get(class_id, [])

    def get_vmedia_maps(self):
        return self.get_config_class('commVMediaMap').get('commVMediaMap', [])

    def remove_vmedia_map(self, vmedia_dn):
        logging.info(f'Removing vMedia map {vmedia_dn} from {self.hostname}')
        in_config = {
            'commVMediaMap': {
                'dn': vmedia_dn,
                'status': 'deleted',
            },
        }
        return self.set_config(in_config, vmedia_dn, True)

    def remove_vmedia_maps(self):
        for vmedia in self.get_vmedia_maps():
            self.remove_vmedia_map(vmedia['dn'])
        return True

    def get_hba_adaptors(self, in_hierarchical=None):
        """Get the HBA/RAID storage controllers."""
        return self.get_config_class('storageController', in_hierarchical).get('storageController', [])

    def reset_hba_adaptor(self, hba_dn):
        logging.info(f'Resetting RAID/HBA adaptor at {hba_dn} on {self.hostname}')
        in_config = {
            'storageController': {
                'adminAction': 'delete-all-vds-reset-pds',
                'dn': hba_dn,
            },
        }
        self.set_config(in_config, hba_dn)
        return True

    def reset_hba_adaptors(self):
        for adaptor in self.get_hba_adaptors():
            self.reset_hba_adaptor(adaptor['dn'])
        return True

    def _get_jbod_mode(self, hba_dn):
        settings = self.get_config_dn(f'{hba_dn}/controller-settings')
        return settings.get('storageControllerSettings', [{}])[0].get('enableJbod')

    def _wait_option_rom_post(self):
        # The controller caches drive state, so there is nothing reliable to poll for.
        logging.info(f'Waiting for RAID/HBA option ROM to POST on {self.hostname}')
        time.sleep(OPTION_ROM_POST_WAIT)
        return True

    def set_hba_adaptor_jbod_mode(self, hba_dn, jbod_mode):
        """
        Set the JBOD mode of the controller at hba_dn.

        Nothing is changed if the controller already reports the requested
        mode. Otherwise the host is powered on (the controller only answers
        once its option ROM has run), the mode is set and the controller is
        polled until it reports the new value.

        Returns:
            bool: Whether the controller reports the requested mode
        """
        jbod_mode = bool_to_xml(jbod_mode)

        if self._get_jbod_mode(hba_dn) == jbod_mode:
            logging.debug(f'RAID/HBA {hba_dn} on {self.hostname} already has enableJbod={jbod_mode}')
            return True

        logging.info(f'Setting RAID/HBA {hba_dn} JBOD mode to {jbod_mode} on {self.hostname}')
        if self.set_power_mode('up') and not self.read_only:
            self.wait_response(60, self._wait_option_rom_post)

        in_config = {
            'storageController': {
                'adminAction': 'enable-jbod' if check_bool(jbod_mode) else 'disable-jbod',
                'dn': hba_dn,
            },
        }
        self.set_config(in_config, hba_dn)
        if self.read_only:
            return True

        time.sleep(WAIT_INTERVAL)
        done = self.wait_response(90, lambda: self._get_jbod_mode(hba_dn) == jbod_mode)
        if not done:
            logging.warning(f'RAID/HBA {hba_dn} on {self.hostname} did not report enableJbod={jbod_mode}')
        return done

    def set_hba_adaptors_jbod_mode(self, jbod_mode):
        for adaptor in self.get_hba_adaptors():
            self.set_hba_adaptor_jbod_mode(adaptor['dn'], jbod_mode)
        return True

    def get_hba_virtual_drives(self, in_hierarchical=None, hba_dn=None):
        class_id = 'storageVirtualDrive'
        if hba_dn:
            response = self.get_config_children(hba_dn, in_hierarchical, class_id)
        else:
            response = self.get_config_class(class_id, in_hierarchical)
        return response.get(class_id, [])

    def remove_hba_virtual_drive(self, vd_dn):
        logging.info(f'Removing virtual drive {vd_dn} on {self.hostname}')
        in_config = {
            'storageVirtualDrive': {
                'dn': vd_dn,
                'status': 'deleted',
            },
        }
        return self.set_config(in_config, vd_dn, True)

    def remove_hba_virtual_drives(self):
        for drive in self.get_hba_virtual_drives():
            self.remove_hba_virtual_drive(drive['dn'])
        return True

    def get_hba_physical_drives(self, in_hierarchical=None, hba_dn=None):
        class_id = 'storageLocalDisk'
        if hba_dn is not None:
            response = self.get_config_children(hba_dn, in_hierarchical, class_id)
        else:
            response = self.get_config_class(class_id, in_hierarchical)
        return response.get(class_id, [])

    def set_hba_physical_drive_jbod_mode(self, pd_dn):
        logging.info(f'Setting physical drive {pd_dn} on {self.hostname} to JBOD mode')
        in_config = {
            'storageLocalDisk': {
                'dn': pd_dn,
                'adminAction': 'make-jbod',
            },
        }
        return self.set_config(in_config, pd_dn, True)

    def set_hba_physical_drives_jbod_mode(self):
        for drive in self.get_hba_physical_drives():
            if drive.get('pdStatus') != 'JBOD':
                self.set_hba_physical_drive_jbod_mode(drive['dn'])
        return True

    def get_hostname(self):
        response = self.get_config_dn(MGMT_IF_DN)
        return response.get('mgmtIf', [{}])[0].get('hostname')

    def set_hostname(self, hostname):
        """
        Set the CIMC hostname.

        Changing it resets the management network, so the current value is
        checked first and the device is given 20 seconds to come back.
        """
        if self.get_hostname() == hostname:
            return True

        logging.info(f'Setting hostname to {hostname} on {self.hostname}')
        in_config = {
            'mgmtIf': {
                'dn': MGMT_IF_DN,
                'hostname': hostname,
            },
        }
        self.set_config(in_config, MGMT_IF_DN)
        if not self.read_only:
            self.wait_response(20, lambda: bool(self.get_config_dn('sys').get('topSystem')))
        return True

    def get_timezone(self):
        response = self.get_config_dn('sys')
        return response.get('topSystem', [{}])[0].get('timeZone')

    def set_timezone(self, timezone):
        logging.info(f'Setting timezone to {timezone} on {self.hostname}')
        in_config = {
            'topSystem': {
                'timeZone': timezone,
                'dn': 'sys',
            },
        }
        self.set_config(in_config, 'sys')
        return True

    def get_indicator_led(self):
        response = self.get_config_dn(LOCATOR_LED_DN)
        return response.get('equipmentLocatorLed', [{}])[0].get('operState')

    def set_indicator_led(self, state):
        state = 'on' if check_bool(state) else 'off'
        logging.info(f'Turning indicator led {state} on {self.hostname}')
        in_config = {
            'equipmentLocatorLed': {
                'dn': LOCATOR_LED_DN,
                'adminState': state,
            },
        }
        return self.set_config(in_config, LOCATOR_LED_DN)

    def get_power_mode(self):
        response = self.get_config_dn(RACK_UNIT_DN)
        return response.get('computeRackUnit', [{}])[0].get('operPower')

    def set_power_mode(self, mode):
        """
        Change the server power state.

        The requested mode is mapped through POWER_TRANSITIONS for the current
        operPower, e.g. a power cycle of a server that is off just powers it up.

        Returns:
            dict: The set_config() result, or None if nothing needed doing
        """
        if mode not in POWER_MODES:
            raise ValueError(f'Unknown power mode: {mode}')

        oper_power = self.get_power_mode()
        if oper_power in POWER_TRANSITIONS:
            op = POWER_TRANSITIONS[oper_power].get(mode)
        else:
            logging.warning(f"Unhandled operPower state: {oper_power}. Setting adminPower to '{mode}' anyway, it may fail.")
            op = mode

        if not op:
            logging.debug(f'Power mode {mode} not applicable to {self.hostname} while {oper_power}')
            return None

        logging.info(f'Setting adminPower {op} on {self.hostname}')
        in_config = {
            'computeRackUnit': {
                'adminPower': op,
                'dn': RACK_UNIT_DN,
            },
        }
        return self.set_config(in_config, RACK_UNIT_DN)

    def reboot_machine(self):
        logging.info(f'Power cycling {self.hostname}')
        return self.set_power_mode('cycle-immediate')

    def get_firmware_update_status(self):
        return self.get_config_class('huuFirmwareUpdater', True)

    def check_firmware_update_status(self):
        """True when no firmware update is running."""
        response = self.get_firmware_update_status()
        updater = response.get('huuFirmwareUpdater', [{}])[0]
        status = updater.get('huuFirmwareUpdateStatus', [{}])[0]

        if status.get('updateStartTime') and not status.get('updateEndTime'):
            return False
        return 'progress' not in status.get('overallStatus', '').lower()

    def wait_for_firmware_update_completion(self):
        def _check():
            logging.info(f'Waiting for firmware update to complete on {self.hostname}')
            return self.check_firmware_update_status()

        if not self.wait_response(FIRMWARE_UPDATE_WAIT, _check):
            raise IMCTimeoutError(f'Firmware update on {self.hostname} did not complete within {FIRMWARE_UPDATE_WAIT} seconds')
        return True

    def update_firmware(self, opts):
        """
        Update all firmware components from an update ISO on a remote share.

        Args:
            opts (dict): huuFirmwareUpdater attributes, at least remoteIp,
                remoteShare and mapType. Override the defaults as needed.

        Returns:
            dict: The set_config() result once the update has finished
        """
        logging.info(f'Updating firmware on {self.hostname}')
        in_config = {
            'huuFirmwareUpdater': {
                'dn': FIRMWARE_UPDATER_DN,
                'adminState': 'trigger',
                'verifyUpdate': 'yes',
                'stopOnError': 'yes',
                'updateComponent': 'all',
                'timeOut': 120,
                **opts,
            },
        }
        response = self.set_config(in_config, FIRMWARE_UPDATER_DN, True)
        if not self.read_only:
            self.wait_for_firmware_update_completion()
        return response
