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
import requests
import urllib3
from requests.exceptions import RequestException

from parse.cli_to_xml import to_xml_command
from parse.parse_response import parse_xml

CONFIG_ACTIONS = ('set', 'edit', 'delete')


class PanXmlClient:
    """Thin wrapper around :class:`requests.Session` for the PAN-OS XML API.

    Every call is a single request against ``/api/`` on the configured host.
    Failures are logged and re-raised unchanged.

    Methods
    -------
    get(self, endpoint='/api/', params=None, headers=None)
        GET an endpoint and return the raw response text

    post(self, endpoint='/api/', data=None)
        POST a form encoded body and return the raw response text

    keygen(self, username, password)
        Request a new API key without authenticating

    op(self, command, parse=True)
        Run an operational command given as XML or CLI syntax

    get_config(self, xpath, action='get', parse=True)
        Read configuration at an xpath

    post_config(self, xpath, element, action)
        Send a set/edit/delete configuration request
    """

    API_ENDPOINT = '/api/'

    def __init__(self, hostname, api_key=None, verify=True, timeout=None):
        self.hostname = hostname
        self.api_key = api_key
        self.verify = verify
        self.timeout = timeout
        base_url = hostname if '://' in hostname else f'https://{hostname}'
        self.base_url = base_url.rstrip('/')
        self.logger = logging.getLogger(__name__)

        if not verify:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = requests.Session()
        self.session.verify = verify
        self.session.headers.update({'Accept': 'application/xml'})
        if api_key:
            self.session.headers['X-PAN-KEY'] = api_key

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def url(self, endpoint):
        return f'{self.base_url}{endpoint}'

    def get(self, endpoint=API_ENDPOINT, params=None, headers=None):
        """ Send a GET request and return the body as text. """
        url = self.url(endpoint)
        self.logger.debug(f'GET {url} type={(params or {}).get("type")}')
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except RequestException as e:
            self.logger.error(f'Error in GET request to {url}: {e}')
            raise
        return response.text

    def post(self, endpoint=API_ENDPOINT, data=None):
        """ Send a form encoded POST request and return the body as text. """
        url = self.url(endpoint)
        headers = {'Content-Type': 'application/x-www-form-urlencoded'}
        self.logger.debug(f'POST {url} action={(data or {}).get("action")}')
        try:
            response = self.session.post(url, data=data, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except RequestException as e:
            self.logger.error(f'Error in POST request to {url}: {e}')
            raise
        return response.text

    def keygen(self, username, password):
        payload = {'type': 'keygen', 'user': username, 'password': password}
        # A None header value drops the session's X-PAN-KEY for this request
        return self.get(params=payload, headers={'X-PAN-KEY': None})

    def op(self, command, parse=True):
        xml_cmd = to_xml_command(command)
        self.logger.info(f'Executing operational command: {xml_cmd}')
        response_xml = self.get(params={'type': 'op', 'cmd': xml_cmd})
        return parse_xml(response_xml) if parse else response_xml

    def get_config(self, xpath, action='get', parse=True):
        payload = {'type': 'config', 'action': action, 'xpath': xpath}
        response_xml = self.get(params=payload).strip()
        return parse_xml(response_xml) if parse else response_xml

    def post_config(self, xpath, element, action):
        if action not in CONFIG_ACTIONS:
            raise ValueError(f"Unsupported config action '{action}', expected one of {', '.join(CONFIG_ACTIONS)}")

        data = {'type': 'config', 'action': action, 'key': self.api_key, 'xpath': xpath}
        if action != 'delete':
            data['element'] = element

        self.logger.info(f'Config {action} at {xpath}')
        return self.post(data=data)

    def set_config(self, xpath, element):
        return self.post_config(xpath, element, 'set')

    def edit_config(self, xpath, element):
        return self.post_config(xpath, element, 'edit')

    def delete_config(self, xpath):
        return self.post_config(xpath, None, 'delete')
