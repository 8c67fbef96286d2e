import os


def missing_variables(names):
    return [name for name in names if not os.environ.get(name)]
