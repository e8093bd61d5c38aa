"""
Site configuration loading.

Reads `_config.yml` from the content root with OmegaConf and merges it over
the defaults below, so a partial file only overrides what it names.

Examples:
    >>> config = load_site_config(Path("content"))
    >>> config.posts_dir
    '_posts'
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from folio.contexts.content.exceptions import InvalidSiteConfigError
from folio.contexts.content.logger import _log_debug, _log_warning

CONFIG_FILENAME = "_config.yml"

DEFAULTS: Dict[str, Any] = {
    "title": "",
    "author": "",
    "description": "",
    "url": "",
    "baseurl": "",
    "posts_dir": "_posts",
    "pages": ["about.md"],
    "feed": True,
    "link_check": {
        "timeout": 10,
        "max_workers": 16,
        "ignore": [],
    },
}


@dataclass
class LinkCheckConfig:
    """Settings for the hyperlink reachability check."""

    timeout: float = 10
    max_workers: int = 16
    ignore: List[str] = field(default_factory=list)


@dataclass
class SiteConfig:
    """Resolved site configuration."""

    title: str = ""
    author: str = ""
    description: str = ""
    url: str = ""
    baseurl: str = ""
    posts_dir: str = "_posts"
    pages: List[str] = field(default_factory=lambda: ["about.md"])
    feed: bool = True
    link_check: LinkCheckConfig = field(default_factory=LinkCheckConfig)

    def absolute_url(self, path: str) -> str:
        """Join the site URL, baseurl and a site-relative path."""
        return f"{self.url.rstrip('/')}{self.relative_url(path)}"

    def relative_url(self, path: str) -> str:
        """Prefix a site-relative path with baseurl."""
        base = self.baseurl.rstrip("/")
        if base and not base.startswith("/"):
            base = "/" + base
        return f"{base}/{path.lstrip('/')}"


def _known_keys(loaded: Dict[str, Any], defaults: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Drop keys SiteConfig does not define (Jekyll settings such as `markdown:`)."""
    known = {}
    for key, value in loaded.items():
        if key not in defaults:
            _log_debug(f"Ignoring unknown config key {prefix}{key}")
            continue
        if isinstance(defaults[key], dict) and isinstance(value, dict):
            value = _known_keys(value, defaults[key], prefix=f"{prefix}{key}.")
        known[key] = value
    return known


def load_site_config(content_root: Path, config_path: Path = None) -> SiteConfig:
    """
    Load `_config.yml` from a content root, merged over the defaults.

    The defaults come from the SiteConfig dataclass, so OmegaConf rejects a
    value of the wrong type (e.g. `pages: about.md` instead of a list).

    Args:
        content_root: Directory holding the site content
        config_path: Optional explicit config file (defaults to content_root/_config.yml)

    Returns:
        SiteConfig with every key resolved

    Raises:
        InvalidSiteConfigError: If the file is not a YAML mapping, or a value
            has the wrong type or is out of range
    """
    if config_path is None:
        config_path = Path(content_root) / CONFIG_FILENAME

    base = OmegaConf.structured(SiteConfig)
    if config_path.exists():
        try:
            loaded = OmegaConf.load(config_path)
        except (yaml.YAMLError, OmegaConfBaseException) as e:
            first_line = (str(e).splitlines() or [type(e).__name__])[0]
            raise InvalidSiteConfigError(f"Not valid YAML: {first_line}", config_path) from e
        if not OmegaConf.is_dict(loaded):
            raise InvalidSiteConfigError("Config must contain a key-value mapping", config_path)

        overrides = _known_keys(OmegaConf.to_container(loaded, resolve=False), DEFAULTS)
        try:
            merged = OmegaConf.merge(base, overrides)
        except OmegaConfBaseException as e:
            first_line = (str(e).splitlines() or [type(e).__name__])[0]
            key = getattr(e, "full_key", None)
            message = f"{key}: {first_line}" if key else first_line
            raise InvalidSiteConfigError(message, config_path) from e
        _log_debug(f"Loaded site config from {config_path}")
    else:
        _log_warning(f"No {CONFIG_FILENAME} in {content_root}, using defaults")
        merged = base

    config = OmegaConf.to_object(merged)

    if config.link_check.max_workers < 1:
        raise InvalidSiteConfigError(
            f"link_check.max_workers must be at least 1, got {config.link_check.max_workers}",
            config_path,
        )
    if config.link_check.timeout <= 0:
        raise InvalidSiteConfigError(
            f"link_check.timeout must be positive, got {config.link_check.timeout}", config_path
        )

    return config
