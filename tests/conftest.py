"""
Test configuration and fixtures for the PAN-OS XML API client tests.

Responses are canned PAN-OS XML documents; no test talks to a device.
"""

import os
import sys
import pytest
import requests

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from panos_api import Firewall  # noqa: E402


def build_response(text, status_code=200, url='https://fw.example.com/api/'):
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode('utf-8')
    response.encoding = 'utf-8'
    response.url = url
    response.reason = 'OK' if status_code < 400 else 'Internal Server Error'
    return response


@pytest.fixture
def make_response():
    """Return a factory for requests.Response objects carrying canned XML."""
    return build_response


@pytest.fixture
def firewall():
    """Return a Firewall with a fixed hostname and API key."""
    return Firewall('fw.example.com', api_key='secret-key')


@pytest.fixture
def keygen_xml():
    return """<response status="success"><result><key>LUFRPT1abc123==</key></result></response>"""


@pytest.fixture
def success_ack_xml():
    return """<response status="success" code="20"><msg>command succeeded</msg></response>"""


@pytest.fixture
def error_ack_xml():
    return """
    <response status="error" code="12">
      <msg><line>Object doesn't exist</line></msg>
    </response>
    """


@pytest.fixture
def system_info_xml():
    return """
    <response status="success">
      <result>
        <system>
          <hostname>fw1</hostname>
          <ip-address>10.0.0.1</ip-address>
          <netmask>255.255.255.0</netmask>
          <default-gateway>10.0.0.254</default-gateway>
          <mac-address>00:1b:17:00:01:02</mac-address>
          <uptime>12 days, 3:04:05</uptime>
          <model>PA-VM</model>
          <serial>007951000123456</serial>
          <sw-version>10.2.4</sw-version>
        </system>
      </result>
    </response>
    """


@pytest.fixture
def address_config_xml():
    """Return a running config payload with two address objects, one of them with a single tag."""
    return """
    <response status="success">
      <result>
        <address>
          <entry name="web-server">
            <ip-netmask>192.168.1.10/32</ip-netmask>
            <description>Web server</description>
            <tag>
              <member>prod</member>
            </tag>
          </entry>
          <entry name="example-site">
            <fqdn>www.example.com</fqdn>
            <tag>
              <member>external</member>
              <member>web</member>
            </tag>
          </entry>
        </address>
      </result>
    </response>
    """


@pytest.fixture
def single_address_xml():
    return """
    <response status="success">
      <result>
        <address>
          <entry name="lonely">
            <ip-range>10.0.0.1-10.0.0.20</ip-range>
          </entry>
        </address>
      </result>
    </response>
    """
