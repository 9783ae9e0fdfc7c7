'''
Object model and device classes for the PAN-OS XML API.
'''

from panos_api.base import PanObject, VersionedPanObject
from panos_api.objects import AddressObject, ADDRESS_TYPES
from panos_api.device import PanDevice, Firewall

__all__ = ['PanObject', 'VersionedPanObject', 'AddressObject', 'ADDRESS_TYPES', 'PanDevice', 'Firewall']
