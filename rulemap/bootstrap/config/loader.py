import os
from pathlib import Path


DEFAULT_FILE = "rulemap.yaml"


def get_configfile(cli_path: str | None = None) -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    raw = cli_path or os.getenv("RULEMAP_CONFIG")

    if raw is None:
        file = Path.cwd() / DEFAULT_FILE
        return file if file.is_file() else None

    file = Path(raw).expanduser()
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the RULEMAP_CONFIG environment variable\n"
            f"  - Or place a '{DEFAULT_FILE}' file in the current working directory."
        )

    return file
