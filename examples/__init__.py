import os
from wsgistack import common

HERE = os.path.abspath(os.path.dirname(__file__))


def load_example_config(filename):
    '''
    Helper to load configs in the examples folder.

    Relative static directories are resolved against the examples folder
    '''
    config = common.load_config(os.path.join(HERE, filename))
    static = config["static"]
    static["directory"] = os.path.join(HERE, static["directory"])
    return config
