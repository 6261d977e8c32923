# -*- coding: utf-8 -*-
"""
This module contains helper functions to locate config and log files. Paths are defined
here so that the config module does not need imports from the rest of the package.
"""

import platform
import os
import os.path as osp
from typing import Optional


def to_full_path(
    path: str, subfolder: Optional[str], filename: Optional[str], create: bool
) -> str:

    if subfolder:
        path = osp.join(path, subfolder)

    if create:
        os.makedirs(path, exist_ok=True)

    if filename:
        path = osp.join(path, filename)

    return path


def get_home_dir() -> str:
    """
    Returns user home directory. This will be determined from the first valid result out
    of (osp.expanduser("~"), $HOME, $USERPROFILE, $TMP).
    """
    path = osp.expanduser("~")

    if osp.isdir(path):
        return path

    for env_var in ("HOME", "USERPROFILE", "TMP"):
        path = os.environ.get(env_var, "")
        if osp.isdir(path):
            return path

    raise RuntimeError(
        "Please set the environment variable HOME to your user/home directory."
    )


def get_conf_path(
    subfolder: Optional[str] = None, filename: Optional[str] = None, create: bool = True
) -> str:
    """
    Returns the default config path for the platform. This will be:

        - macOS: "~/Library/Application Support/<subfolder>/<filename>"
        - Linux: "$XDG_CONFIG_HOME/<subfolder>/<filename>"
        - fallback: "~/.config/<subfolder>/<filename>"

    :param subfolder: The subfolder for the app.
    :param filename: The filename to append for the app.
    :param create: If ``True``, the folder ``subfolder`` will be created on-demand.
    """
    if platform.system() == "Darwin":
        conf_path = osp.join(get_home_dir(), "Library", "Application Support")
    else:
        fallback = osp.join(get_home_dir(), ".config")
        conf_path = os.environ.get("XDG_CONFIG_HOME", fallback)

    return to_full_path(conf_path, subfolder, filename, create)


def get_log_path(
    subfolder: Optional[str] = None, filename: Optional[str] = None, create: bool = True
) -> str:
    """
    Returns the default log path for the platform. This will be:

        - macOS: "~/Library/Logs/<subfolder>/<filename>"
        - Linux: "$XDG_CACHE_HOME/<subfolder>/<filename>"
        - fallback: "~/.cache/<subfolder>/<filename>"

    :param subfolder: The subfolder for the app.
    :param filename: The filename to append for the app.
    :param create: If ``True``, the folder ``subfolder`` will be created on-demand.
    """
    if platform.system() == "Darwin":
        log_path = osp.join(get_home_dir(), "Library", "Logs")
    else:
        fallback = osp.join(get_home_dir(), ".cache")
        log_path = os.environ.get("XDG_CACHE_HOME", fallback)

    return to_full_path(log_path, subfolder, filename, create)
