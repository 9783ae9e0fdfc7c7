import argparse
import json
import logging
import sys
import time

from api.palo_token import PaloToken
from config import ConfigurationManager, DEFAULT_CONFIG_FILE
from log_module import PanLogger
from panos_api import ADDRESS_TYPES, AddressObject, Firewall

logger = logging.getLogger(__name__)

# DeviceConfig fields that must hold real values for each kind of command
KEYGEN_SETTINGS = ('hostname', 'username', 'password')
API_SETTINGS = ('hostname', 'api_key')


def build_parser():
    parser = argparse.ArgumentParser(description="Run operational and configuration requests against a PAN-OS firewall")
    parser.add_argument('-c', '--config', default=DEFAULT_CONFIG_FILE, help="Path to the YAML config file")
    parser.add_argument('--log-file', default='debug-log.txt', help="Debug log file")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('keygen', help="Generate an API key from the configured username and password")

    op_parser = subparsers.add_parser('op', help="Run an operational command in XML or CLI syntax")
    op_parser.add_argument('cmd', help='e.g. \'show interface "management"\'')

    subparsers.add_parser('system-info', help="Show system information")
    subparsers.add_parser('license', help="Show license information")
    subparsers.add_parser('routes', help="Show the routing table")
    subparsers.add_parser('resource-monitor', help="Show resource monitor statistics for the last minute")

    jobs_parser = subparsers.add_parser('jobs', help="Show all jobs or a single job")
    jobs_parser.add_argument('--id', dest='job_id', help="Job ID")

    sessions_parser = subparsers.add_parser('sessions', help="Show sessions")
    sessions_group = sessions_parser.add_mutually_exclusive_group()
    sessions_group.add_argument('--id', dest='session_id', help="Session ID")
    sessions_group.add_argument('--info', action='store_true', help="Show session table statistics")
    sessions_parser.add_argument('--source', help="Filter on source IP (requires --destination)")
    sessions_parser.add_argument('--destination', help="Filter on destination IP (requires --source)")

    url_parser = subparsers.add_parser('url-info', help="Look up the URL category of a URL")
    url_parser.add_argument('url')

    address_parser = subparsers.add_parser('address', help="Manage address objects")
    address_actions = address_parser.add_subparsers(dest='action', required=True)
    address_actions.add_parser('list', help="List address objects")
    for action in ('create', 'edit'):
        action_parser = address_actions.add_parser(action, help=f"{action.capitalize()} an address object")
        action_parser.add_argument('-n', '--name', required=True, help="Name of the address object")
        action_parser.add_argument('-v', '--value', required=(action == 'create'), help="Value of the address object")
        action_parser.add_argument('-t', '--type', choices=ADDRESS_TYPES, default='ip-netmask', help="Address type")
        action_parser.add_argument('-d', '--description', help="Description of the address object")
        action_parser.add_argument('-g', '--tag', nargs='*', help="Tags associated with the address object")
    delete_parser = address_actions.add_parser('delete', help="Delete an address object")
    delete_parser.add_argument('-n', '--name', required=True, help="Name of the address object")

    return parser


def edited_fields(args):
    fields = []
    if args.value is not None:
        fields.extend(['type', 'value'])
    if args.description is not None:
        fields.append('description')
    if args.tag is not None:
        fields.append('tag')
    return fields


def run_address(firewall, args):
    if args.action == 'list':
        return [
            {'name': obj.name, 'type': obj.type, 'value': obj.value, 'description': obj.description, 'tag': obj.tag}
            for obj in firewall.get_address_objects()
        ]
    if args.action == 'delete':
        return firewall.delete_address_object(args.name)

    address_object = AddressObject(args.name, args.value, args.type, args.description, args.tag)
    if args.action == 'create':
        firewall.add_child(address_object)
        return address_object.create()

    fields = edited_fields(args)
    if not fields:
        raise ValueError("Nothing to edit, pass at least one of --value, --description or --tag")
    firewall.add_child(address_object)
    return address_object.apply(fields)


def run_command(firewall, args):
    if args.command == 'op':
        return firewall.execute_operational_command(args.cmd)
    if args.command == 'system-info':
        return firewall.get_system_info()
    if args.command == 'license':
        return firewall.request_license_info()
    if args.command == 'routes':
        return firewall.show_routing_route()
    if args.command == 'resource-monitor':
        return firewall.show_resource_monitor()
    if args.command == 'jobs':
        return firewall.show_jobs_id(args.job_id) if args.job_id else firewall.show_jobs_all()
    if args.command == 'sessions':
        if (args.source or args.destination) and (args.session_id or args.info):
            raise ValueError("--source and --destination cannot be combined with --id or --info")
        if args.session_id:
            return firewall.show_session_id(args.session_id)
        if args.info:
            return firewall.show_session_info()
        if args.source or args.destination:
            if not (args.source and args.destination):
                raise ValueError("--source and --destination must be given together")
            return firewall.show_session_all_filter(args.destination, args.source)
        return firewall.show_session_all()
    if args.command == 'url-info':
        return firewall.test_url_info(args.url)
    if args.command == 'address':
        return run_address(firewall, args)
    raise ValueError(f"Unknown command '{args.command}'")


def main(argv=None):
    args = build_parser().parse_args(argv)
    config_manager = ConfigurationManager(args.config)
    config_exists = config_manager.ensure_config_exists()
    config = config_manager.load()

    pan_logger = PanLogger(args.log_file, config.log_level)
    pan_logger.setup_logging()
    start_position = pan_logger.mark_start_of_run_in_log()
    start_time = time.time()

    required = KEYGEN_SETTINGS if args.command == 'keygen' else API_SETTINGS
    if not config_exists or config_manager.has_default_settings(config, required):
        return 1

    if not config.hostname:
        logger.error("No firewall hostname configured. Set PANOS_HOSTNAME or palo_alto_hostname in the config file.")
        return 1

    try:
        if args.command == 'keygen':
            result = {'key': PaloToken(config_manager).retrieve_token(force_refresh=True)}
        else:
            if not config.api_key:
                logger.error("API key is not set. Run 'keygen' first or set PANOS_API_KEY.")
                return 1
            with Firewall.from_config(config) as firewall:
                result = run_command(firewall, args)
    except Exception as e:
        logger.error(f"An error occurred: {e}", exc_info=True)
        pan_logger.print_warnings_and_errors_from_log(start_position)
        return 1

    print(json.dumps(result, indent=2))
    logger.info(f"Script execution time: {time.time() - start_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
