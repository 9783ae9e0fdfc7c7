import os
import yaml
import logging

DEFAULT_CONFIG_FILE = '~/.panapi/config.yml'

# config file key -> (environment variable, literal default)
SETTINGS = {
    'palo_alto_hostname': ('PANOS_HOSTNAME', ''),
    'palo_alto_username': ('PANOS_USERNAME', ''),
    'palo_alto_password': ('PANOS_PASSWORD', ''),
    'palo_api_token': ('PANOS_API_KEY', ''),
    'palo_alto_verify_ssl': ('PANOS_VERIFY_SSL', True),
    'log_level': ('LOG_LEVEL', 'INFO'),
}

DEFAULT_INDICATORS = ["service-account-name", "xxxxxxxxxxxxxxxxxxxxxx", "password-goes-here", "x.x.x.x"]


def to_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in ('0', 'false', 'no', 'off', '')


class DeviceConfig:
    """Everything needed to talk to one device, passed explicitly to the device classes."""

    def __init__(self, hostname, username='', password='', api_key='', verify_ssl=True, timeout=None, log_level='INFO'):
        self.hostname = hostname
        self.username = username
        self.password = password
        self.api_key = api_key
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.log_level = log_level

    def __repr__(self):
        return f"DeviceConfig(hostname={self.hostname!r}, username={self.username!r}, verify_ssl={self.verify_ssl})"


class ConfigurationManager:
    def __init__(self, config_file_path=DEFAULT_CONFIG_FILE, environ=None):
        self.config_file_path = os.path.expanduser(config_file_path)
        self.environ = os.environ if environ is None else environ
        self.logger = logging.getLogger(__name__)

    def read_config_file(self):
        if not os.path.exists(self.config_file_path):
            return {}
        with open(self.config_file_path, 'r', encoding='utf-8-sig') as config_file:
            return yaml.safe_load(config_file) or {}

    def load(self):
        """ Build a DeviceConfig from the config file, with environment variables taking precedence. """
        file_config = self.read_config_file()
        values = {}
        for key, (env_var, default) in SETTINGS.items():
            if env_var in self.environ:
                values[key] = self.environ[env_var]
            elif file_config.get(key) is not None:
                values[key] = file_config[key]
            else:
                values[key] = default

        return DeviceConfig(
            hostname=values['palo_alto_hostname'],
            username=values['palo_alto_username'],
            password=values['palo_alto_password'],
            api_key=values['palo_api_token'],
            verify_ssl=to_bool(values['palo_alto_verify_ssl']),
            log_level=str(values['log_level']).upper(),
        )

    def ensure_config_dir(self):
        config_dir = os.path.dirname(self.config_file_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

    def create_default_config_file(self):
        default_config = {
            "palo_alto_hostname": "x.x.x.x",
            "palo_alto_password": "password-goes-here",
            "palo_alto_username": "service-account-name",
            "palo_api_token": "xxxxxxxxxxxxxxxxxxxxxx",
            "palo_alto_verify_ssl": True,
            "log_level": "INFO",
        }
        self.ensure_config_dir()
        with open(self.config_file_path, 'w') as config_file:
            yaml.dump(default_config, config_file, default_flow_style=False)
        self.logger.error(f"Config file created at {self.config_file_path}. Please update it with your environment details.")
        return self.config_file_path

    def ensure_config_exists(self):
        """ Returns False after writing a placeholder config file in place of a missing one. """
        if os.path.exists(self.config_file_path):
            return True
        self.create_default_config_file()
        return False

    def has_default_settings(self, config=None, fields=('hostname', 'username', 'password', 'api_key')):
        """ Check the loaded settings, environment overrides included, for placeholder values. """
        config = config or self.load()
        current_values = [getattr(config, field) for field in fields]
        if any(indicator in str(current_values) for indicator in DEFAULT_INDICATORS):
            self.logger.error(f"Default settings detected in {self.config_file_path}. Please update the file with your environment details.")
            return True
        return False

    def save_api_key(self, api_key):
        current_config = self.read_config_file()
        current_config['palo_api_token'] = api_key
        self.ensure_config_dir()
        with open(self.config_file_path, 'w') as config_file:
            yaml.dump(current_config, config_file, default_flow_style=False)
        self.logger.info("Token saved to config file.")
