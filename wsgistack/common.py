import copy
import ujson


DEFAULT_CONFIG = {
    "addr": ":3000",
    "timeout": 10,
    "static": {
        "directory": "public",
        "prefix": "",
        "index_file": "index.html"
    }
}


def load_defaults(config, defaults=None):
    """ Update the given config (nested dict) with any missing values """
    if defaults is None:
        defaults = copy.deepcopy(DEFAULT_CONFIG)
    for key, default_value in defaults.items():
        value = config.setdefault(key, default_value)
        if isinstance(value, dict) and isinstance(default_value, dict):
            load_defaults(value, default_value)
    return config


def load_config(filename):
    '''
    Load a json config file and fill in anything it leaves out.

    Returns a nested dict shaped like DEFAULT_CONFIG
    '''
    with open(filename) as config_file:
        config = ujson.loads(config_file.read())
    if not isinstance(config, dict):
        raise ValueError("config must be a json object: '{}'".format(filename))
    return load_defaults(config)


def split_addr(addr):
    """
    Split a "host:port" address into (host, port).

    An empty host binds every interface:

    >>> split_addr(":3000")
    ('', 3000)
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError("address must look like 'host:port': '{}'".format(addr))
    try:
        port = int(port)
    except ValueError:
        raise ValueError("invalid port in address: '{}'".format(addr))
    # [::1]:8080
    return host.strip("[]"), port


class Container(dict):
    """
    Enable attribute access to dict keys.

    Missing keys return None, and are not persisted.
    Middleware use this to hand values down the chain:

    >>> c = Container()
    >>> c.user = "admin"
    >>> assert c["user"] == "admin"
    >>> assert c.missing is None
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.__dict__ = self

    def __getattr__(self, key):
        # Only reached when the key isn't in __dict__ (which is self)
        return None
