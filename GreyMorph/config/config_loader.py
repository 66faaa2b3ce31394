"""
This module provides functions to load configuration files from the GreyMorph configuration directories.

The configuration files store the default parameters of the morphology filters and of the
block processing. They are stored as configobj files. A copy in the user configuration
directory (``~/.greymorph/``) takes precedence over the default shipped with the package.
Missing keys in the user copy are patched from the package default.
"""
import inspect
import os
from pathlib import Path

import configobj

from GreyMorph.Utils.exceptions import ConfigNotFoundError


INSTALL_CFG_DIR = Path(inspect.getfile(inspect.currentframe())).parent.absolute()  # Where this file resides (w cfgs)
GREYMORPH_CFG_DIR = Path('~/.greymorph/').expanduser()

CFG_EXTENSIONS = ('.cfg', '.ini')


def clean_path(path):
    return os.path.normpath(os.path.expanduser(path))


def get_configobj_cfg(cfg_path, must_exist=True):
    """
    Read a configobj file.

    Parameters
    ----------
    cfg_path: str or Path
        The path of the file to read.
    must_exist: bool
        If True a missing file raises a ConfigNotFoundError,
        otherwise an empty configuration bound to this path is returned.

    Returns
    -------
    configobj.ConfigObj
    """
    cfg_path = clean_path(str(cfg_path))
    if must_exist and not os.path.exists(cfg_path):
        raise ConfigNotFoundError(f'Could not find config file "{cfg_path}"')
    try:
        return configobj.ConfigObj(cfg_path, encoding="UTF8", indent_type='    ', unrepr=True, file_error=must_exist)
    except configobj.ConfigObjError as err:
        raise ConfigNotFoundError(f'Could not read config file "{cfg_path}", '
                                  f'some errors were encountered: "{err}"') from err


def patch_cfg(cfg, default_cfg):
    """Add the keys of default_cfg missing in cfg (recursively)."""
    for k, v in default_cfg.items():
        if k not in cfg.keys():
            cfg[k] = v
        elif isinstance(v, dict):
            patch_cfg(cfg[k], v)
    return cfg


def get_cfg_path(cfg_name, cfg_dir=None, must_exist=True):
    """
    Get the path to the configuration file with the given name in cfg_dir.

    Parameters
    ----------
    cfg_name: str
        The name (without params and extension) of the configuration file
    cfg_dir: str, Path or None
        The folder to search in. If None, the package folder is used.
    must_exist: bool
        If True and no file is found, a ConfigNotFoundError is raised.

    Returns
    -------
    Path or None
    """
    cfg_dir = INSTALL_CFG_DIR if cfg_dir is None else Path(cfg_dir).expanduser()
    if not cfg_name.endswith('_params'):
        cfg_name += '_params'
    for ext in CFG_EXTENSIONS:
        cfg_path = cfg_dir / f'{cfg_name}{ext}'
        if cfg_path.exists():
            return cfg_path
    if must_exist:
        raise ConfigNotFoundError(f'Could not find file {cfg_name} in {cfg_dir} with extensions {CFG_EXTENSIONS}')
    return None


def get_cfg(cfg_name, user_dir=None):
    """
    Load the configuration with the given name.

    The user copy is used if present and patched with the package default,
    otherwise the package default is returned.

    Parameters
    ----------
    cfg_name: str
        The name of the configuration, e.g. 'morphology'.
    user_dir: str, Path or None
        The user configuration directory, defaults to ``~/.greymorph/``.

    Returns
    -------
    configobj.ConfigObj
    """
    default_cfg = get_configobj_cfg(get_cfg_path(cfg_name))
    user_path = get_cfg_path(cfg_name, cfg_dir=user_dir or GREYMORPH_CFG_DIR, must_exist=False)
    if user_path is None:
        return default_cfg
    return patch_cfg(get_configobj_cfg(user_path), default_cfg)
