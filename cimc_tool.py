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


from log_setup import log_setup, debug_log_level
from imc_xmlapi_lib import xml_api_lib, DEFAULT_ADMIN
from imc_errors import IMCError
import getpass
import json
import argparse
import logging
import sys


OPTIONS = [
    'power-status', 'power-up', 'power-down', 'reboot',
    'led-status', 'led-on', 'led-off',
    'firmware-status', 'firmware-update',
    'remove-vmedia', 'reset-vnics',
    'jbod-on', 'jbod-off',
]


def build_parser():
    LOG_FILE = 'cimc_run.log'
    parser = argparse.ArgumentParser(
        description='Run common operations against a Cisco IMC through its XML API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    python cimc_tool.py --host 192.168.1.50 --username admin --option power-status
    python cimc_tool.py --host 192.168.1.50 --option firmware-update --remote-ip 10.0.0.5 --remote-share /isos/ucs-c220-huu.iso
        '''
    )

    parser.add_argument(
        '--host',
        type=str,
        help='CIMC address (if not provided, will prompt)'
    )

    parser.add_argument(
        '--username',
        type=str,
        help=f'CIMC username (if not provided, will prompt, default: {DEFAULT_ADMIN})'
    )

    parser.add_argument(
        '--option',
        type=str,
        required=True,
        choices=OPTIONS,
        help='Operation to run'
    )

    parser.add_argument(
        '--read-only',
        action='store_true',
        help='Show configuration changes instead of applying them'
    )

    parser.add_argument(
        '--debug',
        type=int,
        default=0,
        choices=range(10),
        metavar='0-9',
        help='Debug verbosity (default: 0)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=LOG_FILE,
        help=f'Log file (default: {LOG_FILE})'
    )

    parser.add_argument('--remote-ip', type=str, help='firmware-update: share server address')
    parser.add_argument('--remote-share', type=str, help='firmware-update: path of the update ISO')
    parser.add_argument('--map-type', type=str, default='nfs', choices=['nfs', 'cifs', 'www'],
                        help='firmware-update: share type (default: nfs)')
    return parser


def run_option(cimc, args):
    '''
    Run the selected --option against an open client and return something printable.
    '''
    option = args.option
    if option == 'power-status':
        return cimc.get_power_mode()
    if option == 'power-up':
        return cimc.set_power_mode('up')
    if option == 'power-down':
        return cimc.set_power_mode('down')
    if option == 'reboot':
        return cimc.reboot_machine()
    if option == 'led-status':
        return cimc.get_indicator_led()
    if option == 'led-on':
        return cimc.set_indicator_led('on')
    if option == 'led-off':
        return cimc.set_indicator_led('off')
    if option == 'firmware-status':
        return cimc.get_firmware_update_status()
    if option == 'firmware-update':
        if not args.remote_ip or not args.remote_share:
            raise ValueError('firmware-update requires --remote-ip and --remote-share')
        return cimc.update_firmware({
            'remoteIp': args.remote_ip,
            'remoteShare': args.remote_share,
            'mapType': args.map_type,
        })
    if option == 'remove-vmedia':
        return cimc.remove_vmedia_maps()
    if option == 'reset-vnics':
        return cimc.reset_vnic_adaptors()
    if option == 'jbod-on':
        return cimc.set_hba_adaptors_jbod_mode('true')
    if option == 'jbod-off':
        return cimc.set_hba_adaptors_jbod_mode('false')
    raise ValueError(f'Unknown option: {option}')


def main(argv=None):
    args = build_parser().parse_args(argv)

    log_setup(debug_log_level(args.debug), args.log_file, log_term=args.debug > 0)

    # Get CIMC credentials
    host = args.host or input('Enter CIMC address: ')
    username = args.username or input(f'Enter CIMC username [{DEFAULT_ADMIN}]: ') or DEFAULT_ADMIN
    password = getpass.getpass('Enter CIMC password: ')

    if args.read_only:
        print('Read-only mode: configuration changes are shown, not applied\n')

    try:
        with xml_api_lib(host, username, password, debug=args.debug, read_only=args.read_only) as cimc:
            result = run_option(cimc, args)
    except (IMCError, ValueError) as err:
        logging.error(f'{args.option} on {host} failed: {err}')
        print(f'Error: {err}')
        sys.exit(1)

    if isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2))
    elif result is None:
        print(f'{args.option}: nothing to do')
    else:
        print(f'{args.option}: {result}')


if __name__ == '__main__':
    main()
