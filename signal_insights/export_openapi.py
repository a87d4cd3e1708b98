"""Write the service's OpenAPI specification to a YAML file."""

import sys
from pathlib import Path
from typing import Any

import structlog
import yaml

from signal_insights.server import get_app

log = structlog.get_logger("signal_insights.export_openapi")


def export_openapi_yaml(output_path: Path = Path("docs/openapi.yaml")) -> int:
    """Generate the OpenAPI YAML from the FastAPI app definition.

    Args:
        output_path: Where to write the YAML file.

    Returns:
        0 on success, 1 on failure (for CI use).
    """
    log.info("export.started", output_path=str(output_path))

    try:
        openapi_schema: dict[str, Any] = get_app().openapi()
        if not openapi_schema:
            raise ValueError("FastAPI app returned empty OpenAPI schema")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w") as f:
            yaml.dump(openapi_schema, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        size_kb = output_path.stat().st_size / 1024
        log.info("export.completed", output_path=str(output_path), size_kb=round(size_kb, 1))
        print(f"OpenAPI specification exported to {output_path} ({size_kb:.1f} KB)")
        return 0

    except OSError as e:
        log.error("export.failed.io", error=str(e), output_path=str(output_path))
        print(f"File system error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        log.error("export.failed.schema", error=str(e))
        print(f"Schema generation failed: {e}", file=sys.stderr)
        return 1


def main() -> None:
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("docs/openapi.yaml")
    sys.exit(export_openapi_yaml(output))


if __name__ == "__main__":
    main()
