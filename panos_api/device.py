# /project/panos_api/device.py
'''
ISC License

Copyright (c) 2022, Palo Alto Networks Inc.

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
'''

import logging
from xml.sax.saxutils import escape

from api import PanXmlClient
from panos_api.base import PanObject
from panos_api.objects import AddressObject
from parse.parse_response import extract_api_key, parse_api_response

# system info response field -> key returned by get_system_info()
SYSTEM_INFO_FIELDS = {
    'hostname': 'hostname',
    'ip-address': 'ip_address',
    'netmask': 'netmask',
    'default-gateway': 'default_gateway',
    'serial': 'serial_number',
    'mac-address': 'mac_address',
    'uptime': 'uptime',
    'model': 'model',
    'sw-version': 'sw_version',
}


class PanDevice(PanObject):
    """A PAN-OS device reachable over the XML API.

    The device is the root of its object tree and owns the transport client
    used by every child object.

    Methods
    -------
    generate_api_key(self, username, password)
        Exchange credentials for an API key

    execute_operational_command(self, command)
        Run an op command given as XML or CLI syntax and return the parsed response

    fetch_config(self, xpath, action='get')
        Read configuration at an xpath

    create_entity(self, entity) / edit_entity(self, entity, fields=None) / delete_entity(self, name, entity_type=AddressObject)
        Push configuration changes, returning the status/code/message of the acknowledgment
    """

    def __init__(self, hostname, api_key=None, verify=True, timeout=None, client=None):
        super().__init__(hostname)
        self.hostname = hostname
        self.api_key = api_key
        self.client = client or PanXmlClient(hostname, api_key=api_key, verify=verify, timeout=timeout)
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config):
        return cls(config.hostname, api_key=config.api_key or None, verify=config.verify_ssl, timeout=config.timeout)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def generate_api_key(self, username, password):
        """ Returns the new key, or '' if the device answered without one. """
        self.logger.info(f"Generating API key for user '{username}' on {self.hostname}")
        response_xml = self.client.keygen(username, password)
        return extract_api_key(response_xml)

    def execute_operational_command(self, command):
        return self.client.op(command)

    op = execute_operational_command

    def fetch_config(self, xpath, action='get'):
        return self.client.get_config(xpath, action=action)

    def create_entity(self, entity):
        response_xml = self.client.set_config(entity.get_xpath(), entity.to_xml())
        return parse_api_response(response_xml)

    def edit_entity(self, entity, fields=None):
        response_xml = self.client.edit_config(entity.entry_xpath(entity.name), entity.to_editable_xml(fields))
        return parse_api_response(response_xml)

    def delete_entity(self, name, entity_type=AddressObject):
        response_xml = self.client.delete_config(entity_type.entry_xpath(name))
        return parse_api_response(response_xml)

    def request_license_info(self):
        return self.execute_operational_command('<request><license><info/></license></request>')

    def show_jobs_all(self):
        return self.execute_operational_command('<show><jobs><all/></jobs></show>')

    def show_jobs_id(self, job_id):
        return self.execute_operational_command(f'<show><jobs><id>{escape(str(job_id))}</id></jobs></show>')

    def show_system_info(self):
        return self.execute_operational_command('<show><system><info/></system></show>')

    def get_system_info(self):
        """ The flat system summary (hostname, ip_address, serial_number, ...) from 'show system info'. """
        system = self.show_system_info()['response']['result']['system']
        return {key: system.get(field) for field, key in SYSTEM_INFO_FIELDS.items()}


class Firewall(PanDevice):
    """A next generation firewall, with session, routing and address object helpers."""

    def show_resource_monitor(self):
        return self.execute_operational_command('show running resource-monitor minute')

    def show_routing_route(self):
        return self.execute_operational_command('show routing route')

    def show_session_all(self):
        return self.execute_operational_command('show session all')

    def show_session_all_filter(self, destination_ip, source_ip):
        xml_cmd = (
            '<show><session><all><filter>'
            f'<source>{escape(source_ip)}</source>'
            f'<destination>{escape(destination_ip)}</destination>'
            '</filter></all></session></show>'
        )
        return self.execute_operational_command(xml_cmd)

    def show_session_id(self, session_id):
        return self.execute_operational_command(f'<show><session><id>{escape(str(session_id))}</id></session></show>')

    def show_session_info(self):
        return self.execute_operational_command('show session info')

    def test_url_info(self, url):
        return self.execute_operational_command(f'<test><url-info-cloud>{escape(url)}</url-info-cloud></test>')

    def create_address_object(self, address_object):
        return self.create_entity(address_object)

    def edit_address_object(self, address_object, fields=None):
        return self.edit_entity(address_object, fields)

    def delete_address_object(self, name):
        return self.delete_entity(name, AddressObject)

    def get_address_objects(self):
        """ Address objects from the running config, attached to this firewall. """
        running_xpath = AddressObject.get_xpath().replace('/config/', '', 1)
        xml_cmd = f'<show><config><running><xpath>{escape(running_xpath)}</xpath></running></config></show>'
        address_objects = AddressObject.parse_collection(self.execute_operational_command(xml_cmd))

        for address_object in address_objects:
            existing = self.find(address_object.name, AddressObject)
            if existing is not None:
                self.remove_child(existing)
            self.add_child(address_object)
        self.logger.info(f'Retrieved {len(address_objects)} address objects from {self.hostname}')
        return address_objects
