import logging

from config import ConfigurationManager
from panos_api.device import PanDevice


class PaloToken:
    def __init__(self, config_manager=None, device=None):
        self.config_manager = config_manager or ConfigurationManager()
        self.config = self.config_manager.load()
        self.device = device or PanDevice.from_config(self.config)
        self.token = self.config.api_key

    def retrieve_token(self, force_refresh=False):
        if force_refresh or not self.token:
            logging.info("Fetching a new PANOS API token...")
            if not self.config.username or not self.config.password:
                raise ValueError("Username and password are required to generate an API key")

            self.token = self.device.generate_api_key(self.config.username, self.config.password)
            if not self.token:
                raise Exception("Failed to retrieve token")
            self.config_manager.save_api_key(self.token)
        else:
            logging.info("Using existing PANOS API token from config file.")
        return self.token
