# /project/panos_api/objects.py
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

import xml.etree.ElementTree as ET

from panos_api.base import VersionedPanObject
from parse.parse_response import as_list

VSYS1_XPATH = "/config/devices/entry[@name='localhost.localdomain']/vsys/entry[@name='vsys1']"

ADDRESS_TYPES = ('ip-netmask', 'ip-range', 'ip-wildcard', 'fqdn')


class AddressObject(VersionedPanObject):
    "An address object"
    _xpath = f"{VSYS1_XPATH}/address"

    def __init__(self, name, value, type='ip-netmask', description=None, tag=None):
        super().__init__(name)
        if type not in ADDRESS_TYPES:
            raise ValueError(f"Invalid address type '{type}', expected one of {', '.join(ADDRESS_TYPES)}")
        self.value = value
        self.type = type
        self.description = description
        self.tag = list(tag) if tag else []

    def to_element(self, fields=None):
        wanted = set(fields or ())

        def include(*names):
            return not wanted or bool(wanted.intersection(names))

        entry = ET.Element('entry', name=self.name)
        if include('type', 'value') and self.value is not None:
            ET.SubElement(entry, self.type).text = self.value
        if include('description') and self.description:
            ET.SubElement(entry, 'description').text = self.description
        if include('tag') and self.tag:
            tag = ET.SubElement(entry, 'tag')
            for member in self.tag:
                ET.SubElement(tag, 'member').text = member
        return entry

    def to_xml(self):
        return ET.tostring(self.to_element(), encoding='unicode')

    def to_editable_xml(self, fields=None):
        """ Only the requested fields ('type'/'value', 'description', 'tag'); all of them when empty. """
        return ET.tostring(self.to_element(fields), encoding='unicode')

    @classmethod
    def from_entry(cls, entry):
        address_type = next((t for t in ADDRESS_TYPES if entry.get(t) is not None), 'ip-netmask')
        tag = entry.get('tag') or {}
        return cls(
            name=entry['@name'],
            value=entry.get(address_type),
            type=address_type,
            description=entry.get('description'),
            tag=as_list(tag.get('member')),
        )

    @classmethod
    def parse_collection(cls, raw):
        """
        Rebuild address objects from a parsed config payload.

        Accepts the whole parsed response, its 'result' mapping or the 'address'
        container. A single entry and a single tag member still come back as lists.
        """
        if 'response' in raw:
            raw = raw['response']['result']
        if raw and 'address' in raw:
            raw = raw['address']
        if not raw:
            return []
        return [cls.from_entry(entry) for entry in as_list(raw.get('entry'))]

    def __repr__(self):
        return f"AddressObject(name={self.name!r}, type={self.type!r}, value={self.value!r})"
