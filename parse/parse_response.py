#/project/parse/parse_response.py

"""
ISC License

Copyright (c) 2023 Eric Chickering <eric.chickering@gmail.com>

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN ACTION
OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF OR IN
CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.

"""

import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)


def etree_to_dict(element):
    """
    Convert an element into nested dicts.

    Attributes are kept as '@name' keys, leaf text is returned as is and
    repeated child tags are collected into a list.
    """
    if element is None:
        return None

    attributes = {f'@{key}': value for key, value in element.attrib.items()}
    text = element.text if element.text and element.text.strip() else None

    if len(element) == 0:
        if not attributes:
            return text
        if text is not None:
            attributes['#text'] = text
        return attributes

    result = attributes
    for child in element:
        child_result = etree_to_dict(child)
        if child.tag in result:
            if not isinstance(result[child.tag], list):
                result[child.tag] = [result[child.tag]]
            result[child.tag].append(child_result)
        else:
            result[child.tag] = child_result

    return result


def parse_xml(xml_text):
    """ Parse a raw XML document into {root_tag: etree_to_dict(root)}. """
    root = ET.fromstring(xml_text)
    return {root.tag: etree_to_dict(root)}


def as_list(value):
    """ A field that may hold one item or many, always as a list without None items. """
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [item for item in value if item is not None]


def element_text(element):
    if element is None:
        return None
    text = ' '.join(part.strip() for part in element.itertext() if part.strip())
    return text or None


def parse_api_response(xml_text):
    """
    Reduce a config acknowledgment to its status, code and message.

    <response status="success" code="20"><msg>command succeeded</msg></response>
    -> {'status': 'success', 'code': 20, 'message': 'command succeeded'}
    """
    root = ET.fromstring(xml_text)
    code = root.get('code')
    message = element_text(root.find('.//msg'))

    api_response = {
        'status': root.get('status'),
        'code': int(code) if code is not None else None,
        'message': message or 'No message',
    }
    if api_response['status'] != 'success':
        logger.warning(f"API returned status '{api_response['status']}': {api_response['message']}")
    return api_response


def extract_api_key(xml_text):
    """ Pull the key out of a keygen response, '' when the device did not send one. """
    root = ET.fromstring(xml_text)
    return element_text(root.find('./result/key')) or ''
