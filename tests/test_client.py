"""
Tests for the XML API transport client.
"""

from unittest import mock
from urllib.parse import quote

import pytest
import requests

from api import PanXmlClient


@pytest.fixture
def client():
    return PanXmlClient('fw.example.com', api_key='secret-key')


def test_session_defaults(client):
    assert client.base_url == 'https://fw.example.com'
    assert client.session.headers['X-PAN-KEY'] == 'secret-key'
    assert client.session.verify is True


def test_hostname_with_scheme_is_kept():
    assert PanXmlClient('http://10.0.0.1/').base_url == 'http://10.0.0.1'


def test_trailing_slash_without_scheme():
    client = PanXmlClient('fw.example.com/')

    assert client.base_url == 'https://fw.example.com'
    assert client.url(client.API_ENDPOINT) == 'https://fw.example.com/api/'


def test_context_manager_closes_session():
    with mock.patch('requests.Session.close') as close:
        with PanXmlClient('fw.example.com') as client:
            close.assert_not_called()

    assert isinstance(client, PanXmlClient)
    close.assert_called_once()


def test_no_api_key_header_without_key():
    assert 'X-PAN-KEY' not in PanXmlClient('fw.example.com').session.headers


def test_op_encodes_cli_command(client, make_response, success_ack_xml):
    with mock.patch.object(client.session, 'get', return_value=make_response(success_ack_xml)) as mock_get:
        client.op('show interface "management"')

    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args == ('https://fw.example.com/api/',)
    assert kwargs['params'] == {'type': 'op', 'cmd': '<show><interface>management</interface></show>'}

    prepared = requests.Request('GET', args[0], params=kwargs['params']).prepare()
    assert 'cmd=' + quote('<show><interface>management</interface></show>', safe='') in prepared.url


def test_op_without_parsing_returns_text(client, make_response, success_ack_xml):
    with mock.patch.object(client.session, 'get', return_value=make_response(success_ack_xml)):
        assert client.op('<show><clock/></show>', parse=False) == success_ack_xml


def test_keygen_drops_api_key_header(client, make_response, keygen_xml):
    with mock.patch.object(client.session, 'get', return_value=make_response(keygen_xml)) as mock_get:
        assert client.keygen('admin', 'p@ss') == keygen_xml

    kwargs = mock_get.call_args.kwargs
    assert kwargs['params'] == {'type': 'keygen', 'user': 'admin', 'password': 'p@ss'}
    assert kwargs['headers'] == {'X-PAN-KEY': None}


def test_get_config(client, make_response, address_config_xml):
    with mock.patch.object(client.session, 'get', return_value=make_response(address_config_xml)) as mock_get:
        parsed = client.get_config('/config/shared/address')

    assert mock_get.call_args.kwargs['params'] == {'type': 'config', 'action': 'get', 'xpath': '/config/shared/address'}
    assert parsed['response']['@status'] == 'success'


def test_post_config_set(client, make_response, success_ack_xml):
    with mock.patch.object(client.session, 'post', return_value=make_response(success_ack_xml)) as mock_post:
        client.set_config('/config/x', '<entry name="a"/>')

    kwargs = mock_post.call_args.kwargs
    assert kwargs['data'] == {
        'type': 'config',
        'action': 'set',
        'key': 'secret-key',
        'xpath': '/config/x',
        'element': '<entry name="a"/>',
    }
    assert kwargs['headers']['Content-Type'] == 'application/x-www-form-urlencoded'


def test_post_config_delete_has_no_element(client, make_response, success_ack_xml):
    with mock.patch.object(client.session, 'post', return_value=make_response(success_ack_xml)) as mock_post:
        client.delete_config("/config/x/entry[@name='a']")

    data = mock_post.call_args.kwargs['data']
    assert data['action'] == 'delete'
    assert 'element' not in data


def test_post_config_rejects_unknown_action(client):
    with pytest.raises(ValueError):
        client.post_config('/config/x', '<entry/>', 'rename')


def test_http_error_is_reraised(client, make_response, caplog):
    with mock.patch.object(client.session, 'get', return_value=make_response('<error/>', status_code=500)):
        with pytest.raises(requests.exceptions.HTTPError):
            client.get(params={'type': 'op', 'cmd': '<show/>'})

    assert 'Error in GET request' in caplog.text


def test_network_error_is_reraised_unchanged(client):
    error = requests.exceptions.ConnectionError('connection refused')
    with mock.patch.object(client.session, 'post', side_effect=error):
        with pytest.raises(requests.exceptions.ConnectionError) as excinfo:
            client.post(data={'type': 'config'})

    assert excinfo.value is error
