# /project/panos_api/base.py
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

import weakref
from abc import ABC, abstractmethod


class PanObject:
    """Base class for anything in the PAN-OS object tree.

    A parent owns its children; each child only keeps a weak reference back
    to its parent, used to look up the device that will send its requests.
    """

    def __init__(self, name):
        if not name:
            raise ValueError(f"{type(self).__name__} requires a non-empty name")
        self.name = name
        self.children = []
        self._parent = None

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    def add_child(self, child):
        if child.parent is self:
            return child
        existing = self.find(child.name, type(child))
        if existing is not None:
            raise ValueError(f"{type(child).__name__} '{child.name}' already exists under '{self.name}'")
        if child.parent is not None:
            child.parent.remove_child(child)

        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def remove_child(self, child):
        if child in self.children:
            self.children.remove(child)
            child._parent = None

    def has_child(self, child):
        return child in self.children

    def find(self, name, class_type=None):
        """ Find a direct child by name, optionally limited to one class. """
        for child in self.children:
            if child.name == name and (class_type is None or isinstance(child, class_type)):
                return child
        return None

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class VersionedPanObject(PanObject, ABC):
    """A configuration entry that lives under a fixed xpath on the device."""
    _xpath = None  # Container xpath, set per object type

    @classmethod
    def get_xpath(cls):
        """Return the container xpath for the object type."""
        if cls._xpath is None:
            raise NotImplementedError("Xpath not defined for this object type")
        return cls._xpath

    @classmethod
    def entry_xpath(cls, name):
        return f"{cls.get_xpath()}/entry[@name='{name}']"

    @abstractmethod
    def to_xml(self):
        """Return the <entry> element for this object as an XML string."""

    def to_editable_xml(self, fields=None):
        return self.to_xml()

    def device(self):
        device = self.parent
        if device is None:
            raise ValueError(f"{type(self).__name__} '{self.name}' is not attached to a device")
        return device

    def create(self):
        return self.device().create_entity(self)

    def apply(self, fields=None):
        return self.device().edit_entity(self, fields)

    def delete(self):
        return self.device().delete_entity(self.name, type(self))
