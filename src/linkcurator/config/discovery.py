"""Config file discovery.

Walk-up finder locates the vault's config file, similar to how git
finds .git/.  Two layouts are recognised in each directory, checked in
order:

- ``linkcurator.toml`` next to the notes
- ``.linkcurator/config.toml`` tucked away in a hidden folder

The LINKCURATOR_CONFIG env var and the --config CLI flag bypass the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "linkcurator.toml"
HIDDEN_CONFIG = Path(".linkcurator") / "config.toml"
CONFIG_ENV_VAR = "LINKCURATOR_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    Returns the path to the config file, or None if not found.
    Checks LINKCURATOR_CONFIG env var first; an env var pointing at a
    missing file disables discovery entirely.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        for candidate in (current / CONFIG_FILENAME, current / HIDDEN_CONFIG):
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def vault_root_for(config_path: Path) -> Path:
    """The vault directory a config file belongs to.

    Examples:
        >>> vault_root_for(Path("/v/linkcurator.toml"))
        PosixPath('/v')
        >>> vault_root_for(Path("/v/.linkcurator/config.toml"))
        PosixPath('/v')
    """
    parent = config_path.parent
    if parent.name == HIDDEN_CONFIG.parent.name:
        return parent.parent
    return parent
