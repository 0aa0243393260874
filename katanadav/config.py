import json
import logging
import os
import re
from typing import Any
from typing import Dict
from typing import Optional

import yaml

from katanadav.lib import error

"""
Connection settings for the principal adapter.

Settings come from (highest precedence first) explicit arguments,
environment variables and a JSON or YAML config file.  A config file
holds named sections, i.e.

    {
        "default": {
            "url": "https://dav.example.com",
            "principals_path": "/server.php/principals/",
            "timeout": 10
        },
        "staging": {"inherits": "default", "url": "https://staging.example.com"}
    }
"""

DEFAULT_PRINCIPALS_PATH = "/server.php/principals/"
DEFAULT_TIMEOUT = 30.0

_base_url_re = re.compile(r"^/(.+/)?$")


def check_base_url(base_url: str) -> bool:
    """
    A base URL is an absolute path ending with a slash, like "/" or
    "/server.php/principals/".
    """
    return bool(base_url) and _base_url_re.match(base_url) is not None


def config_section(config: Dict[str, Any], section: str = "default") -> Dict[str, Any]:
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    ret.pop("inherits", None)
    return ret


def read_config(fn: Optional[str]) -> Optional[Dict[str, Any]]:
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/katanadav/katana.conf",
            f"{cfgdir}/katanadav/katana.yaml",
            f"{cfgdir}/katanadav/katana.json",
            "/etc/katanadav/katana.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        with open(fn, "rb") as config_file:
            raw = config_file.read()
    except FileNotFoundError:
        logging.info(f"no config file found at {fn}")
        return None

    try:
        cfg = json.loads(raw)
    except json.decoder.JSONDecodeError:
        try:
            cfg = yaml.safe_load(raw)
        except yaml.YAMLError as err:
            raise error.ConfigurationError(
                fn, "config file exists but is neither valid json nor yaml"
            ) from err
    if not isinstance(cfg, dict):
        raise error.ConfigurationError(fn, "config file should hold a mapping")
    return cfg


def get_connection_params(
    url: Optional[str] = None,
    principals_path: Optional[str] = None,
    timeout: Optional[float] = None,
    config_file: Optional[str] = None,
    config_section_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Find out where the principal collection is.

    Returns:
        dict with collection_url and timeout

    Raises:
        ConfigurationError: on missing or invalid settings
    """
    config_file = config_file or os.environ.get("KATANA_CONFIG_FILE")
    section_name = config_section_name or os.environ.get(
        "KATANA_CONFIG_SECTION", "default"
    )
    cfg = read_config(config_file) or {}
    if cfg and section_name not in cfg:
        raise error.ConfigurationError(
            config_file, f"no section {section_name} in config file"
        )
    section = config_section(cfg, section_name) if cfg else {}

    url = url or os.environ.get("KATANA_URL") or section.get("url")
    principals_path = (
        principals_path
        or os.environ.get("KATANA_PRINCIPALS_PATH")
        or section.get("principals_path")
        or DEFAULT_PRINCIPALS_PATH
    )
    if timeout is None:
        timeout = os.environ.get("KATANA_TIMEOUT") or section.get("timeout")
    try:
        timeout = DEFAULT_TIMEOUT if timeout is None else float(timeout)
    except ValueError as err:
        raise error.ConfigurationError(reason=f"invalid timeout {timeout!r}") from err

    if not url:
        raise error.ConfigurationError(
            reason="URL is required.  Provide via url parameter, KATANA_URL environment variable or a config file."
        )
    if not check_base_url(principals_path):
        raise error.ConfigurationError(
            url,
            f"principals path is not well-formed, given {principals_path}",
        )

    return {
        "collection_url": url.rstrip("/") + principals_path,
        "timeout": timeout,
    }


def get_adapter(**kwargs: Any):
    """
    Build a PrincipalAdapter from explicit arguments, environment
    variables and config file.  Takes the same arguments as
    get_connection_params.
    """
    from katanadav.adapter import PrincipalAdapter
    from katanadav.io import AsyncIO
    from katanadav.lib.url import URL

    params = get_connection_params(**kwargs)
    url = params["collection_url"]
    io = AsyncIO(base_url=URL.objectify(url).origin(), timeout=params["timeout"])
    return PrincipalAdapter(url, io=io)
