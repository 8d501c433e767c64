r"""Settings for ``csv-to-table``.

Everything is off by default:
>>> Settings()
Settings(upper_case_header=False, use_markdown=False, right_align_numbers=False, in_place=False)

Overrides left as ``None`` keep the current value:
>>> Settings(use_markdown=True).merge(use_markdown=None, right_align_numbers=True)
Settings(upper_case_header=False, use_markdown=True, right_align_numbers=True, in_place=False)

Settings can be kept in a YAML file of the same names:
>>> import os, tempfile
>>> def config(text):
...     with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
...         f.write(text)
...     try:
...         return load_settings(f.name)
...     finally:
...         os.remove(f.name)
>>> config("upper_case_header: true\nuse_markdown: yes\n")
Settings(upper_case_header=True, use_markdown=True, right_align_numbers=False, in_place=False)

Entries that are unknown or not booleans are ignored:
>>> config("right_align_numbers: maybe\ncolour: red\nin_place: true\n")
Settings(upper_case_header=False, use_markdown=False, right_align_numbers=False, in_place=True)

So are empty, broken and missing files:
>>> config("")
Settings(...)
>>> config("[unclosed")
Settings(...)
>>> config("- a list\n")
Settings(...)
>>> load_settings(os.path.join(tempfile.gettempdir(), "no-such-csv-to-table.yaml"))
Settings(...)
"""
from collections import namedtuple
import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ENVIRONMENT = "CSV_TO_TABLE_CONFIG"
DEFAULT_PATH = Path("~/.csv-to-table.yaml")

class Settings(namedtuple("Settings",
                          "upper_case_header use_markdown right_align_numbers in_place",
                          defaults=(False, False, False, False))):
    __slots__ = ()

    def merge(self, **overrides):
        return self._replace(**{k: v for k, v in overrides.items() if v is not None})

def _resolve_path(path=None):
    """The given path, then ``$CSV_TO_TABLE_CONFIG``, then ``~/.csv-to-table.yaml``."""
    if path:
        return Path(path)
    if os.environ.get(ENVIRONMENT):
        return Path(os.environ[ENVIRONMENT])
    default = DEFAULT_PATH.expanduser()
    return default if default.exists() else None

def _read(path):
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring settings file %s: %s", path, e)
        return {}
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected a mapping, got %s",
                       path, type(raw).__name__)
        return {}
    return raw

def load_settings(path=None):
    resolved = _resolve_path(path)
    if resolved is None:
        return Settings()
    if not resolved.exists():
        logger.warning("Settings file %s does not exist", resolved)
        return Settings()

    settings = {}
    for key, value in _read(resolved).items():
        # TODO: Accept the camelCase names the editor settings used.
        if key not in Settings._fields:
            logger.warning("Ignoring unknown setting %r in %s", key, resolved)
        elif not isinstance(value, bool):
            logger.warning("Ignoring setting %r in %s: expected true or false, got %r",
                           key, resolved, value)
        else:
            settings[key] = value
    logger.debug("Loaded settings %s from %s", settings, resolved)
    return Settings(**settings)

if __name__ == "__main__":
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS |
                                doctest.NORMALIZE_WHITESPACE |
                                doctest.REPORT_NDIFF)
