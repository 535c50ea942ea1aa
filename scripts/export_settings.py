#!/usr/bin/env python3
"""Export the environment-variable catalogue of the Hostmap settings as JSON.

Usage:
    ./scripts/export_settings.py                 # print to stdout
    ./scripts/export_settings.py -o env-vars.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Type

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings
from rich.console import Console

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import DatabaseSettings, TenancySettings  # noqa: E402

console = Console(stderr=True)


def get_model_metadata(settings_class: Type[BaseSettings]) -> dict[str, Any]:
    """Describe every field of a settings class as an environment variable."""
    prefix = settings_class.model_config.get("env_prefix", "")
    properties = []

    for name, field in settings_class.model_fields.items():
        type_name = getattr(field.annotation, "__name__", str(field.annotation))
        default = field.get_default(call_default_factory=True)

        # Required: no default at all, or an empty secret
        is_required = default is PydanticUndefined or (
            isinstance(default, SecretStr) and default.get_secret_value() == ""
        )

        if isinstance(default, SecretStr):
            display_default = "********" if not is_required else None
        elif is_required or default is None:
            display_default = None
        elif isinstance(default, (list, dict, bool, int, float)):
            display_default = default
        else:
            display_default = str(default)

        properties.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": "Secret" if "Secret" in type_name else type_name,
                "default": display_default,
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": settings_class.__doc__ or "",
        "properties": properties,
    }


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write JSON to this file instead of stdout",
    )
    return parser.parse_args()


def export_settings(output: Path | None) -> None:
    classes = [DatabaseSettings, TenancySettings]
    data = {cls.__name__: get_model_metadata(cls) for cls in classes}
    rendered = json.dumps(data, indent=2)

    if output is None:
        print(rendered)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered + "\n")
    console.print(f"[green]Exported settings to {output}[/green]")


if __name__ == "__main__":
    export_settings(parse_args().output)
