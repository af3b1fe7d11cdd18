""" Client configuration. Settings are resolved in increasing order of
    precedence from the built-in defaults, the ``client.json`` file in the
    configuration :func:`directory`, the ``BEANSTALK_HOST``,
    ``BEANSTALK_PORT``, and ``BEANSTALK_PER_THREAD`` environment variables,
    and finally any arguments passed directly to :func:`settings`.
"""

import os

import orjson


defaults = dict()
defaults['host'] = 'localhost'
defaults['port'] = 11300
defaults['per_thread'] = True

filename = 'client.json'

_environment = dict()
_environment['host'] = 'BEANSTALK_HOST'
_environment['port'] = 'BEANSTALK_PORT'
_environment['per_thread'] = 'BEANSTALK_PER_THREAD'

_true = set(('1', 'true', 'yes', 'on'))
_false = set(('0', 'false', 'no', 'off'))


def directory(default=None):
    """ Return the directory location where we should be loading the
        configuration file. This defaults to ``$HOME/.beanstalk``, but can be
        overridden by calling this method with a valid path, or by setting
        the ``BEANSTALK_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the default directory must be an absolute path')

        os.environ['BEANSTALK_HOME'] = default
        directory.found = default


    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['BEANSTALK_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('BEANSTALK_HOME and HOME environment variables not set, cannot determine configuration directory')

    found = os.path.join(home, '.beanstalk')
    directory.found = found
    return found

directory.found = None



def load():
    """ Return the contents of the configuration file as a dictionary. An
        absent file is an empty configuration; a file that is present but
        does not describe a JSON object is an error.
    """

    path = os.path.join(directory(), filename)

    try:
        with open(path, 'rb') as contents:
            loaded = orjson.loads(contents.read())
    except FileNotFoundError:
        return dict()
    except orjson.JSONDecodeError as e:
        raise ValueError('cannot parse %s: %s' % (path, str(e)))

    if isinstance(loaded, dict):
        pass
    else:
        raise ValueError('%s must contain a JSON object' % (path))

    unknown = set(loaded.keys()) - set(defaults.keys())
    if unknown:
        raise ValueError('unknown settings in %s: %s' % (path, ', '.join(sorted(unknown))))

    return loaded



def settings(**overrides):
    """ Return the effective client settings as a dictionary with the keys
        'host', 'port', and 'per_thread'. Keyword arguments whose value is
        None are ignored, so that callers can pass their own optional
        arguments through unchanged.
    """

    resolved = dict(defaults)
    resolved.update(load())

    for key,variable in _environment.items():
        try:
            value = os.environ[variable]
        except KeyError:
            continue
        resolved[key] = value

    for key,value in overrides.items():
        if key in defaults:
            pass
        else:
            raise TypeError('unknown setting: ' + repr(key))

        if value is not None:
            resolved[key] = value

    resolved['host'] = str(resolved['host'])
    resolved['port'] = int(resolved['port'])
    resolved['per_thread'] = boolean(resolved['per_thread'])

    return resolved



def boolean(value):
    """ Interpret *value* as a boolean. Strings are accepted in the usual
        forms ('true', 'no', '1', and so on), as they would appear in an
        environment variable.
    """

    if isinstance(value, bool):
        return value

    lowered = str(value).strip().lower()

    if lowered in _true:
        return True
    if lowered in _false:
        return False

    raise ValueError('not a boolean value: ' + repr(value))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
